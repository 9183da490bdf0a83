"""Gemini REST API data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

GENERATE_CONTENT_METHOD = "generateContent"


class RemoteModel(BaseModel):
    """A model entry from the ``GET /models`` listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(description="Full resource name, e.g. 'models/gemini-2.5-pro'")
    display_name: str | None = Field(default=None, alias="displayName")
    supported_generation_methods: tuple[str, ...] = Field(
        default=(), alias="supportedGenerationMethods"
    )
    input_token_limit: int | None = Field(default=None, alias="inputTokenLimit")
    output_token_limit: int | None = Field(default=None, alias="outputTokenLimit")

    @property
    def short_name(self) -> str:
        """Name without the ``models/`` prefix."""
        return self.name.removeprefix("models/")

    @property
    def supports_generate_content(self) -> bool:
        return GENERATE_CONTENT_METHOD in self.supported_generation_methods


def build_generate_request(
    prompt: str,
    *,
    system_prompt: str | None = None,
    temperature: float = 0.3,
    max_output_tokens: int = 500,
) -> dict[str, Any]:
    """Build a ``generateContent`` request body."""
    body: dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_output_tokens,
        },
    }
    if system_prompt:
        body["systemInstruction"] = {"parts": [{"text": system_prompt}]}
    return body


def extract_candidate_text(payload: Any) -> str:
    """Return the first candidate's first text part, or an empty string."""
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""

"""Gemini REST client (async).

Thin wrapper over the framework AsyncApiClient: lists models and runs
single-turn ``generateContent`` calls. HTTP failures are translated into
the AI error taxonomy so callers can tell quota exhaustion apart from
everything else.
"""

from __future__ import annotations

import logging
from typing import Any

from mailfx.core.ai.errors import QuotaExceededError, TransportError
from mailfx.core.api.http.client import AsyncApiClient
from mailfx.core.api.http.errors import ApiError, RateLimitError
from mailfx.core.api.http.pagination import CursorPage, iterate_cursor_async
from mailfx.core.api.llm.gemini.models import (
    RemoteModel,
    build_generate_request,
    extract_candidate_text,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
API_KEY_HEADER = "x-goog-api-key"

_QUOTA_MARKERS = ("quota", "resource_exhausted")


def is_quota_error(error: ApiError) -> bool:
    """True for HTTP 429 or an error body that reports quota exhaustion."""
    if isinstance(error, RateLimitError) or error.status_code == 429:
        return True
    snippet = (error.response_body_snippet or "").lower()
    return any(marker in snippet for marker in _QUOTA_MARKERS)


class GeminiClient:
    """Gemini generative language API client.

    Args:
        http_client: Framework AsyncApiClient configured with the API base URL
            and ``x-goog-api-key`` auth
        page_size: Page size requested when listing models

    Example:
        >>> client = GeminiClient(http_client=http)
        >>> models = await client.list_models()
        >>> text = await client.generate_content("gemini-2.5-flash", "Hello")
    """

    def __init__(self, http_client: AsyncApiClient, *, page_size: int = 1000) -> None:
        self.http_client = http_client
        self.page_size = page_size

    async def aclose(self) -> None:
        await self.http_client.aclose()

    def _translate(self, error: ApiError, model: str | None) -> Exception:
        if is_quota_error(error):
            target = model or "request"
            return QuotaExceededError(f"Quota exceeded for {target}: {error}", model=model)
        return TransportError(f"Gemini request failed: {error}", model=model)

    async def _fetch_models_page(self, cursor: str | None) -> CursorPage:
        params: dict[str, Any] = {"pageSize": self.page_size}
        if cursor:
            params["pageToken"] = cursor
        try:
            response = await self.http_client.get("models", params=params)
            data = self.http_client.json(response) or {}
        except ApiError as e:
            raise self._translate(e, None) from e

        items = [RemoteModel.model_validate(m) for m in data.get("models", [])]
        return CursorPage(items=items, next_cursor=data.get("nextPageToken") or None)

    async def list_models(self) -> list[RemoteModel]:
        """List every model visible to the credentials, following page tokens.

        Raises:
            QuotaExceededError: Listing was rate limited
            TransportError: Any other HTTP failure
        """
        models: list[RemoteModel] = []
        async for model in iterate_cursor_async(self._fetch_models_page):
            models.append(model)
        logger.debug(f"Gemini listed {len(models)} models")
        return models

    async def generate_content(
        self,
        model: str,
        prompt: str,
        *,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_output_tokens: int = 500,
    ) -> str:
        """Run one generation and return the first candidate's text.

        Args:
            model: Model name, with or without the ``models/`` prefix
            prompt: User prompt
            system_prompt: Optional system instruction
            temperature: Sampling temperature
            max_output_tokens: Output token cap

        Returns:
            Candidate text, or an empty string when the response has none

        Raises:
            QuotaExceededError: HTTP 429 or quota/RESOURCE_EXHAUSTED error body
            TransportError: Any other HTTP failure
        """
        name = model.removeprefix("models/")
        body = build_generate_request(
            prompt,
            system_prompt=system_prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        try:
            response = await self.http_client.post(
                f"models/{name}:generateContent", json_body=body
            )
            data = self.http_client.json(response)
        except ApiError as e:
            raise self._translate(e, name) from e

        text = extract_candidate_text(data)
        logger.debug(f"Gemini {name} returned {len(text)} chars")
        return text

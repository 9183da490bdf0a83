"""Configuration models for mailfx."""

from __future__ import annotations

from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field

from mailfx.core.ai.ranking import DEFAULT_EXCLUDED_PATTERNS
from mailfx.core.api.llm.gemini.client import DEFAULT_BASE_URL
from mailfx.core.effects.models import CompositionOptions
from mailfx.core.randomizer.models import RandomPolicyConfig


class AIConfig(BaseModel):
    """Gemini adapter configuration.

    ``api_key`` is filled from the ``GEMINI_API_KEY`` environment variable
    by the loader when it is not set in the file.
    """

    model_config = ConfigDict(extra="ignore")

    api_key: str | None = Field(
        default=None, repr=False, description="Gemini API key (load from env: GEMINI_API_KEY)"
    )
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Generative language API root")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    max_output_tokens: int = Field(default=500, gt=0, description="Output token cap per call")
    default_density: int = Field(
        default=30, ge=0, le=100, description="Default share of words to color, in percent"
    )
    timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP timeout per request")
    excluded_model_patterns: tuple[str, ...] = Field(
        default=DEFAULT_EXCLUDED_PATTERNS,
        description="Name substrings that disqualify a model from text generation",
    )


class CompositionDefaults(BaseModel):
    """Default composition options used when the caller passes none."""

    model_config = ConfigDict(extra="ignore")

    intensity: int = Field(default=5, ge=1, le=10)
    base_size: int = Field(default=16, ge=8, le=100)

    def to_options(
        self, intensity: int | None = None, base_size: int | None = None
    ) -> CompositionOptions:
        """Options with these defaults filling in whatever the caller leaves unset."""
        return CompositionOptions(
            intensity=self.intensity if intensity is None else intensity,
            base_size=self.base_size if base_size is None else base_size,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False
    filename: str | None = None


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    ai: AIConfig = Field(default_factory=AIConfig)
    composition: CompositionDefaults = Field(default_factory=CompositionDefaults)
    random_policy: RandomPolicyConfig = Field(default_factory=RandomPolicyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("mailfx.yaml")

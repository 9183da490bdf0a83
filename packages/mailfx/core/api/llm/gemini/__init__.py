"""Gemini generative language API client."""

from mailfx.core.api.llm.gemini.client import (
    API_KEY_HEADER,
    DEFAULT_BASE_URL,
    GeminiClient,
    is_quota_error,
)
from mailfx.core.api.llm.gemini.models import RemoteModel

__all__ = [
    "API_KEY_HEADER",
    "DEFAULT_BASE_URL",
    "GeminiClient",
    "RemoteModel",
    "is_quota_error",
]

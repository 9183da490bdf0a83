from __future__ import annotations

import httpx
from pydantic import BaseModel, Field, field_validator


class HttpClientConfig(BaseModel):
    """Configuration for AsyncApiClient.

    Args:
        base_url: Base URL for all requests (e.g. "https://api.example.com/v1")
        timeout: HTTPX timeout configuration
        limits: Connection pool limits
        headers: Default headers applied to all requests
        user_agent: User-Agent header value
        redact_headers: Headers to redact in logs (case-insensitive)
        max_response_body_for_error: Max response bytes to include in error messages
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    base_url: str
    timeout: httpx.Timeout = Field(default_factory=lambda: httpx.Timeout(30.0, connect=5.0))
    limits: httpx.Limits = Field(
        default_factory=lambda: httpx.Limits(max_keepalive_connections=5, max_connections=10)
    )
    follow_redirects: bool = True
    headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str = "mailfx/0.1"
    redact_headers: tuple[str, ...] = (
        "authorization",
        "cookie",
        "x-api-key",
        "x-goog-api-key",
    )
    max_response_body_for_error: int = 4096

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base_url is a valid URL."""
        if not v:
            raise ValueError("base_url cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

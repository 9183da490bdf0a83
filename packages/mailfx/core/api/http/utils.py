"""Utility functions for HTTP client operations."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urljoin


def join_url(base_url: str, path: str) -> str:
    """Join base URL with path in a predictable way.

    Example:
        >>> join_url("https://api.example.com/v1beta", "/models")
        'https://api.example.com/v1beta/models'
    """
    base = base_url if base_url.endswith("/") else base_url + "/"
    return urljoin(base, path.lstrip("/"))


def safe_snippet(content: bytes, limit: int) -> str:
    """Truncate a response body and decode it for error messages."""
    if not content:
        return ""
    return content[:limit].decode("utf-8", errors="replace")


def get_request_id(headers: Mapping[str, str]) -> str | None:
    """Extract request ID from common tracing headers (case-insensitive)."""
    lowered = {k.lower(): v for k, v in headers.items()}
    for key in ("x-request-id", "x-correlation-id", "request-id", "trace-id"):
        if key in lowered:
            return lowered[key]
    return None

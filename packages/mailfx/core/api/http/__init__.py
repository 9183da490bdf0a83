"""HTTPX wrapper.

Exposes a small surface:
- AsyncApiClient: async client with retries and structured errors
- HttpClientConfig / RetryPolicy: configuration
- ApiKeyAuth: header-based API key auth
- Exceptions: ApiError and subclasses
"""

from mailfx.core.api.http.auth import ApiKeyAuth
from mailfx.core.api.http.client import AsyncApiClient
from mailfx.core.api.http.config import HttpClientConfig
from mailfx.core.api.http.errors import (
    ApiError,
    AuthError,
    ClientError,
    DecodeError,
    NetworkError,
    RateLimitError,
    ServerError,
    TimeoutError,
    UnexpectedStatusError,
)
from mailfx.core.api.http.retry import RetryPolicy

__all__ = [
    "ApiError",
    "ApiKeyAuth",
    "AsyncApiClient",
    "AuthError",
    "ClientError",
    "DecodeError",
    "HttpClientConfig",
    "NetworkError",
    "RateLimitError",
    "RetryPolicy",
    "ServerError",
    "TimeoutError",
    "UnexpectedStatusError",
]

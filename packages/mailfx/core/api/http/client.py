"""Async HTTP client wrapper built on HTTPX.

Provides:
- Retries with exponential backoff for idempotent requests
- Structured error handling (ApiError hierarchy)
- Request/response logging with header redaction
- Header-based API key auth
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import time
from typing import Any

import httpx

from mailfx.core.api.http.config import HttpClientConfig
from mailfx.core.api.http.errors import (
    ApiError,
    DecodeError,
    NetworkError,
    TimeoutError,
    categorize_status,
)
from mailfx.core.api.http.logging_utils import RequestLogContext, log_request, log_response
from mailfx.core.api.http.retry import RetryPolicy, parse_retry_after_seconds
from mailfx.core.api.http.utils import get_request_id, join_url, safe_snippet

REQUEST_ID_HEADER = "X-Request-Id"


def _new_request_id() -> str:
    return f"req_{int(time.time() * 1000)}"


def _is_json_response(resp: httpx.Response) -> bool:
    ctype = resp.headers.get("content-type", "")
    return "application/json" in ctype or "+json" in ctype


class AsyncApiClient:
    """Asynchronous HTTP API client.

    Args:
        config: Client configuration
        auth: Optional authentication handler (e.g. ApiKeyAuth)
        retry_policy: Retry policy (defaults to retrying GET/HEAD/OPTIONS only)
        transport: Optional custom transport (useful for testing)

    Example:
        >>> config = HttpClientConfig(base_url="https://api.example.com")
        >>> async with AsyncApiClient(config) as client:
        ...     resp = await client.get("/v1/items")
        ...     data = client.json(resp)
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        auth: httpx.Auth | None = None,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.retry_policy = retry_policy or RetryPolicy()
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": config.user_agent, **config.headers},
            timeout=config.timeout,
            limits=config.limits,
            follow_redirects=config.follow_redirects,
            auth=auth,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _error(
        self,
        exc_type: type[ApiError],
        message: str,
        *,
        method: str,
        url: str,
        request_id: str | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> ApiError:
        """Build an ApiError, attaching response headers and a body snippet when present."""
        status_code = None
        headers = None
        snippet = None
        if response is not None:
            status_code = response.status_code
            headers = dict(response.headers)
            snippet = safe_snippet(response.content, self.config.max_response_body_for_error)
            request_id = request_id or get_request_id(response.headers)
        return exc_type(
            message=message,
            method=method,
            url=url,
            status_code=status_code,
            request_id=request_id,
            response_headers=headers,
            response_body_snippet=snippet,
            cause=cause,
        )

    def _retry_delay(self, attempt: int, response: httpx.Response | None = None) -> float:
        """Retry-After when the server sent one, else the policy's backoff."""
        if response is not None:
            delay = parse_retry_after_seconds(response.headers.get("Retry-After"))
            if delay is not None:
                return delay
        return self.retry_policy.compute_delay(attempt)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        json_body: Any = None,
        timeout: httpx.Timeout | None = None,
    ) -> httpx.Response:
        """Send a request, retrying per the retry policy.

        Raises:
            ApiError: Subclass matching the failure (status, timeout, network)
        """
        method_u = method.upper()
        url = join_url(str(self._client.base_url), path)
        send_headers = {**self._client.headers, **(headers or {})}
        request_id = send_headers.setdefault(REQUEST_ID_HEADER, _new_request_id())
        query = {k: str(v) for k, v in (params or {}).items()}
        retryable = self.retry_policy.allows_method(method_u)

        attempt = 0
        while True:
            attempt += 1
            ctx = RequestLogContext(
                method=method_u, url=url, attempt=attempt, request_id=request_id
            )
            start = log_request(ctx, send_headers, self.config.redact_headers)
            can_retry = retryable and attempt < self.retry_policy.max_attempts

            try:
                resp = await self._client.request(
                    method_u,
                    url,
                    params=query,
                    headers=send_headers,
                    json=json_body,
                    timeout=timeout or self.config.timeout,
                )
            except httpx.RequestError as e:
                if can_retry:
                    await asyncio.sleep(self._retry_delay(attempt))
                    continue
                if isinstance(e, httpx.TimeoutException):
                    exc_type, message = TimeoutError, "Request timed out"
                else:
                    exc_type, message = NetworkError, "Network error while sending request"
                raise self._error(
                    exc_type, message, method=method_u, url=url, request_id=request_id, cause=e
                ) from e

            log_response(ctx, resp.status_code, time.perf_counter() - start)
            if resp.status_code < 400:
                return resp

            if not can_retry or resp.status_code not in self.retry_policy.retry_on_status:
                raise self._error(
                    categorize_status(resp.status_code),
                    "HTTP error response",
                    method=method_u,
                    url=url,
                    request_id=request_id,
                    response=resp,
                )
            await asyncio.sleep(self._retry_delay(attempt, resp))

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    def json(self, response: httpx.Response) -> Any:
        """Decode a JSON body; None for 204 or an empty body.

        Raises:
            DecodeError: If response is not JSON or parsing fails
        """
        if response.status_code == 204 or not response.content:
            return None
        method = response.request.method
        url = str(response.request.url)
        if not _is_json_response(response):
            raise self._error(
                DecodeError,
                "Response is not JSON (content-type mismatch)",
                method=method,
                url=url,
                response=response,
            )
        try:
            return response.json()
        except ValueError as e:
            raise self._error(
                DecodeError,
                "Failed to parse JSON response",
                method=method,
                url=url,
                response=response,
                cause=e,
            ) from e

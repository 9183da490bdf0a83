from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
from pydantic import BaseModel, Field


class ApiKeyAuth(httpx.Auth, BaseModel):
    """Static API key header authentication for the async client.

    The key travels in a header rather than the query string so it never
    appears in logged URLs.

    Example:
        >>> auth = ApiKeyAuth(header_name="x-goog-api-key", api_key="secret")
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    header_name: str
    api_key: str = Field(repr=False)

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        request.headers[self.header_name] = self.api_key
        yield request

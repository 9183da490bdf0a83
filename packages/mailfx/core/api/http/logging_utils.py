from __future__ import annotations

from collections.abc import Mapping
import logging
import time

from pydantic import BaseModel

logger = logging.getLogger("mailfx.core.api.http")

REDACTED = "***REDACTED***"


def redact_headers(headers: Mapping[str, str], redact: tuple[str, ...]) -> dict[str, str]:
    """Replace sensitive header values for logging (names compared case-insensitively)."""
    hidden = {name.lower() for name in redact}
    return {k: (REDACTED if k.lower() in hidden else v) for k, v in headers.items()}


class RequestLogContext(BaseModel):
    """Context for structured HTTP request logging."""

    method: str
    url: str
    attempt: int
    request_id: str | None = None


def log_request(
    ctx: RequestLogContext, headers: Mapping[str, str], redact: tuple[str, ...]
) -> float:
    """Log an outgoing request with redacted headers.

    Returns:
        Start timestamp for elapsed time calculation
    """
    start = time.perf_counter()
    logger.debug(
        "HTTP request",
        extra={
            "method": ctx.method,
            "url": ctx.url,
            "attempt": ctx.attempt,
            "request_id": ctx.request_id,
            "headers": redact_headers(headers, redact),
        },
    )
    return start


def log_response(ctx: RequestLogContext, status_code: int, elapsed_s: float) -> None:
    logger.debug(
        "HTTP response",
        extra={
            "method": ctx.method,
            "url": ctx.url,
            "attempt": ctx.attempt,
            "request_id": ctx.request_id,
            "status_code": status_code,
            "elapsed_ms": int(elapsed_s * 1000),
        },
    )

from __future__ import annotations

import random

from pydantic import BaseModel, Field, field_validator


class RetryPolicy(BaseModel):
    """Retry policy for HTTP requests (exponential backoff with jitter).

    Only idempotent methods are retried. Content generation is a POST and is
    therefore never retried here: a rate-limited model is skipped by the AI
    adapter's fallback chain instead of being hammered again.

    Args:
        max_attempts: Maximum number of attempts (including initial request)
        base_delay_s: Base delay in seconds for exponential backoff
        max_delay_s: Maximum delay in seconds (caps exponential growth)
        jitter: Jitter as fraction of delay (0.15 = +/-15% randomization)
        retry_on_status: HTTP status codes that trigger retries
        retry_methods: HTTP methods eligible for retry
    """

    model_config = {"frozen": True}

    max_attempts: int = Field(default=3, ge=1)
    base_delay_s: float = Field(default=0.25, ge=0.0)
    max_delay_s: float = Field(default=5.0, ge=0.0)
    jitter: float = Field(default=0.15, ge=0.0, le=1.0)
    retry_on_status: tuple[int, ...] = (429, 500, 502, 503, 504)
    retry_methods: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")

    @field_validator("max_delay_s")
    @classmethod
    def validate_max_delay(cls, v: float, info) -> float:
        """Ensure max_delay_s >= base_delay_s."""
        base = info.data.get("base_delay_s", 0.25)
        if v < base:
            raise ValueError("max_delay_s must be >= base_delay_s")
        return v

    def allows_method(self, method: str) -> bool:
        return method.upper() in self.retry_methods

    def compute_delay(self, attempt: int) -> float:
        """Compute retry delay with exponential backoff and jitter.

        Args:
            attempt: Attempt number (1-indexed)

        Returns:
            Delay in seconds before next retry
        """
        delay: float = min(self.max_delay_s, self.base_delay_s * (2 ** (attempt - 1)))
        if self.jitter > 0:
            spread = delay * self.jitter
            delay = max(0.0, delay + random.uniform(-spread, spread))
        return delay


def parse_retry_after_seconds(value: str | None) -> float | None:
    """Parse a numeric Retry-After header (HTTP-date form is not supported)."""
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None

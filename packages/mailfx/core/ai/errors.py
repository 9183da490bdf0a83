"""AI service error taxonomy."""

from __future__ import annotations


class AIServiceError(Exception):
    """Base error for the AI adapter.

    Attributes:
        model: Model the failing call targeted (None when not model-specific)
    """

    def __init__(self, message: str, *, model: str | None = None) -> None:
        super().__init__(message)
        self.model = model


class ModelUnavailableError(AIServiceError):
    """No compatible text-generation model is available."""


class QuotaExceededError(AIServiceError):
    """A model rejected the call for quota or rate-limit reasons."""


class TransportError(AIServiceError):
    """Any other failure talking to the service (network, auth, bad status)."""


class AllModelsFailedError(AIServiceError):
    """Every candidate model was tried without producing a usable answer."""

    def __init__(self, message: str, *, attempted: list[str] | None = None) -> None:
        super().__init__(message)
        self.attempted = list(attempted or [])

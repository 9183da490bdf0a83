"""In-memory cache for the ranked model list."""

from __future__ import annotations

import logging
import time

from mailfx.core.ai.models import ModelDescriptor

logger = logging.getLogger(__name__)


class ModelCache:
    """Single-slot cache of ranked models.

    Holds the last ranked listing until explicitly invalidated (for example
    after an API key change). There is no time-based expiry.
    """

    def __init__(self) -> None:
        self._models: tuple[ModelDescriptor, ...] | None = None
        self._stored_at: float | None = None

    @property
    def is_populated(self) -> bool:
        return self._models is not None

    @property
    def stored_at(self) -> float | None:
        """Unix timestamp of the last store, None when empty."""
        return self._stored_at

    def get(self) -> list[ModelDescriptor] | None:
        """Cached models best first, or None when the cache is empty."""
        if self._models is None:
            return None
        return list(self._models)

    def store(self, models: list[ModelDescriptor]) -> None:
        self._models = tuple(models)
        self._stored_at = time.time()
        logger.debug(f"Model cache stored {len(self._models)} models")

    def invalidate(self) -> None:
        if self._models is not None:
            logger.debug("Model cache invalidated")
        self._models = None
        self._stored_at = None

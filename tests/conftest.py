"""Shared pytest fixtures for mailfx tests."""

from __future__ import annotations

import logging
import random

import pytest

from mailfx.core.api.llm.gemini.models import RemoteModel

# ============================================================================
# Isolation Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo logging.basicConfig(force=True) calls made by the code under test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def no_gemini_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's real API key out of the tests."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


# ============================================================================
# Random Fixtures
# ============================================================================


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


# ============================================================================
# Model Listing Fixtures
# ============================================================================


def make_remote_model(name: str, methods: tuple[str, ...] = ("generateContent",)) -> RemoteModel:
    return RemoteModel.model_validate(
        {"name": f"models/{name}", "supportedGenerationMethods": list(methods)}
    )


@pytest.fixture
def remote_models() -> list[RemoteModel]:
    """A realistic listing: text models in no particular order plus non-text models."""
    return [
        make_remote_model("gemini-1.5-flash"),
        make_remote_model("gemini-2.5-pro"),
        make_remote_model("gemini-2.5-flash-preview-tts"),
        make_remote_model("text-embedding-004", ("embedContent",)),
        make_remote_model("gemini-2.0-flash"),
        make_remote_model("imagen-3.0-generate-002", ("predict",)),
        make_remote_model("aqa"),
    ]

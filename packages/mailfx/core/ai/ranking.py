"""Model quality ranking.

Scores are heuristics over the model name: newer Gemini generations win,
then the tier (pro over flash/lite), with a small penalty for experimental
and preview builds. Sorting is stable so equal scores keep listing order.
"""

from __future__ import annotations

from collections.abc import Iterable
import re
from typing import TYPE_CHECKING

from mailfx.core.ai.models import ModelDescriptor

if TYPE_CHECKING:
    from mailfx.core.api.llm.gemini.models import RemoteModel

DEFAULT_EXCLUDED_PATTERNS: tuple[str, ...] = (
    "tts",
    "audio",
    "embedding",
    "aqa",
    "imagen",
    "image-generation",
    "-image",
)

# One minor release step outweighs any tier bonus plus the unstable penalty.
GENERATION_STEP = 1000
MINORS_PER_MAJOR = 100
PRO_BONUS = 100
FLASH_BONUS = 50
UNSTABLE_PENALTY = 10

_VERSION_RE = re.compile(r"gemini-(\d+)(?:\.(\d+))?")
_UNSTABLE_RE = re.compile(r"(?:^|-)(?:exp\w*|preview)(?:-|$)")


def parse_version(name: str) -> tuple[int, int]:
    """Gemini generation from the name (``gemini-2.5-pro`` -> (2, 5)); (0, 0) when absent."""
    match = _VERSION_RE.search(name.lower())
    if not match:
        return 0, 0
    major, minor = match.groups()
    return int(major), int(minor or 0)


def score_model(name: str) -> int:
    """Quality score for a model name; higher is better."""
    lowered = name.lower().removeprefix("models/")
    tokens = lowered.split("-")

    major, minor = parse_version(lowered)
    score = (major * MINORS_PER_MAJOR + minor) * GENERATION_STEP
    if "pro" in tokens:
        score += PRO_BONUS
    elif "flash" in tokens or "lite" in tokens:
        score += FLASH_BONUS
    if _UNSTABLE_RE.search(lowered):
        score -= UNSTABLE_PENALTY
    return score


def rank_models(names: Iterable[str]) -> list[ModelDescriptor]:
    """Score and sort model names best first (stable for ties)."""
    scored = [ModelDescriptor(name=n, quality_score=score_model(n)) for n in names]
    return sorted(scored, key=lambda d: d.quality_score, reverse=True)


def is_excluded(name: str, patterns: Iterable[str] = DEFAULT_EXCLUDED_PATTERNS) -> bool:
    lowered = name.lower()
    return any(p.lower() in lowered for p in patterns)


def is_text_model(
    model: RemoteModel, patterns: Iterable[str] = DEFAULT_EXCLUDED_PATTERNS
) -> bool:
    """True when the model can generate text and is not a speech/embedding/image model."""
    return model.supports_generate_content and not is_excluded(model.name, patterns)

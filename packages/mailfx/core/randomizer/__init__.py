"""Random composition policy."""

from mailfx.core.randomizer.models import (
    AppliedEffects,
    PresetVariant,
    RandomComposition,
    RandomMode,
    RandomPolicyConfig,
    SimpleVariant,
)
from mailfx.core.randomizer.policy import RandomCompositionPolicy, compose_chaos, compose_random

__all__ = [
    "AppliedEffects",
    "PresetVariant",
    "RandomComposition",
    "RandomCompositionPolicy",
    "RandomMode",
    "RandomPolicyConfig",
    "SimpleVariant",
    "compose_chaos",
    "compose_random",
]

"""Size curve functions and registry.

Each curve maps a character's position among the non-space characters of a
text to a font-size offset (in px) relative to the base size. Curves are pure:
identical inputs always produce the identical offset, so re-applying an effect
recomputes an identical layout.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import math
from typing import Any

from mailfx.core.effects.models import CompositionOptions, SizeCurve

# Absolute floor for any rendered character.
MIN_FONT_SIZE_PX = 8

DEFAULT_WAVE_PARAMS: dict[str, float] = {
    "frequency": 0.5,
    "base_amplitude": 2.0,
    "amplitude_step": 2.0,
}

DEFAULT_RAMP_PARAMS: dict[str, float] = {
    "growth_per_intensity": 4.0,  # px added to the peak size per intensity step
}

OffsetFn = Callable[..., float]


def round_half_up(value: float) -> int:
    """Round halves away from negative infinity (JavaScript Math.round semantics)."""
    return math.floor(value + 0.5)


def curve_progress(char_index: int, total_non_space: int) -> float:
    """Position along a monotonic curve.

    Args:
        char_index: Non-space index of the character (0-based)
        total_non_space: Number of non-space characters in the text

    Returns:
        0.0 for the first character, 1.0 for the last. A single character
        (or an empty text) sits at the start of the curve.
    """
    return char_index / max(1, total_non_space - 1)


def wave_offset(
    char_index: int,
    total_non_space: int,
    options: CompositionOptions,
    *,
    frequency: float = DEFAULT_WAVE_PARAMS["frequency"],
    base_amplitude: float = DEFAULT_WAVE_PARAMS["base_amplitude"],
    amplitude_step: float = DEFAULT_WAVE_PARAMS["amplitude_step"],
) -> float:
    """Sinusoidal offset.

    Intensity drives amplitude: 1 is subtle (2px), 10 is extreme (20px).
    """
    amplitude = base_amplitude + (options.intensity - 1) * amplitude_step
    return math.sin(char_index * frequency) * amplitude


def rise_offset(
    char_index: int,
    total_non_space: int,
    options: CompositionOptions,
    *,
    growth_per_intensity: float = DEFAULT_RAMP_PARAMS["growth_per_intensity"],
) -> float:
    """Linear growth from the base size up to base + intensity * growth."""
    max_size = options.base_size + options.intensity * growth_per_intensity
    progress = curve_progress(char_index, total_non_space)
    return progress * (max_size - options.base_size)


def fall_offset(
    char_index: int,
    total_non_space: int,
    options: CompositionOptions,
    *,
    growth_per_intensity: float = DEFAULT_RAMP_PARAMS["growth_per_intensity"],
) -> float:
    """Linear shrink from the peak size down to max(8, base - intensity)."""
    max_size = options.base_size + options.intensity * growth_per_intensity
    min_size = max(MIN_FONT_SIZE_PX, options.base_size - options.intensity)
    progress = curve_progress(char_index, total_non_space)
    size = max_size - progress * (max_size - min_size)
    return size - options.base_size


@dataclass(frozen=True)
class CurveSpec:
    """Registry entry binding a curve kind to its offset function."""

    curve: SizeCurve
    offset_fn: OffsetFn
    default_params: Mapping[str, float] = field(default_factory=dict)


class CurveRegistry:
    """Dispatch table from curve kind to offset function."""

    def __init__(self) -> None:
        self._registry: dict[SizeCurve, CurveSpec] = {}

    def register(self, spec: CurveSpec) -> None:
        if spec.curve in self._registry:
            raise ValueError(f"Curve '{spec.curve.value}' already registered")
        self._registry[spec.curve] = spec

    def get(self, curve: SizeCurve | str) -> CurveSpec:
        try:
            return self._registry[SizeCurve(curve)]
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Curve '{curve}' is not registered") from exc

    def curves(self) -> list[SizeCurve]:
        return list(self._registry)

    def evaluate(
        self,
        curve: SizeCurve | str,
        char_index: int,
        total_non_space: int,
        options: CompositionOptions,
        params: Mapping[str, Any] | None = None,
    ) -> float:
        """Compute the offset for one character.

        Args:
            curve: Curve kind
            char_index: Non-space index of the character
            total_non_space: Number of non-space characters in the text
            options: Clamped composition options
            params: Per-effect overrides of the curve's default parameters

        Returns:
            Font-size offset in px relative to options.base_size
        """
        spec = self.get(curve)
        merged = dict(spec.default_params)
        merged.update(params or {})
        return spec.offset_fn(char_index, total_non_space, options, **merged)


def build_default_registry() -> CurveRegistry:
    """Construct a registry containing all built-in size curves."""
    registry = CurveRegistry()
    registry.register(CurveSpec(SizeCurve.WAVE, wave_offset, DEFAULT_WAVE_PARAMS))
    registry.register(CurveSpec(SizeCurve.RISE, rise_offset, DEFAULT_RAMP_PARAMS))
    registry.register(CurveSpec(SizeCurve.FALL, fall_offset, DEFAULT_RAMP_PARAMS))
    return registry


DEFAULT_REGISTRY = build_default_registry()


def evaluate_size_offset(
    curve: SizeCurve | str,
    char_index: int,
    total_non_space: int,
    options: CompositionOptions,
    params: Mapping[str, Any] | None = None,
) -> float:
    """Evaluate a built-in curve (see CurveRegistry.evaluate)."""
    return DEFAULT_REGISTRY.evaluate(curve, char_index, total_non_space, options, params)


def font_size_px(offset: float, base_size: int) -> int:
    """Final font size for a character, never below MIN_FONT_SIZE_PX."""
    return max(MIN_FONT_SIZE_PX, round_half_up(base_size + offset))

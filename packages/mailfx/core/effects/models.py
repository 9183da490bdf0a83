"""Effect definition and composition option models.

Effects are tagged variants: a color effect carries its palette and optional
decoration glyphs, a size effect names the curve that shapes its font-size
offsets. Behavior lives in `mailfx.core.effects.curves`, not on the models.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
import math
from typing import Annotated, Any, Literal, Self

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_INTENSITY = 5
MIN_INTENSITY = 1
MAX_INTENSITY = 10

DEFAULT_BASE_SIZE = 16
MIN_BASE_SIZE = 8
MAX_BASE_SIZE = 100


class EffectCategory(str, Enum):
    """Independent style axes. At most one effect per axis is active."""

    COLOR = "color"
    SIZE = "size"


class SizeCurve(str, Enum):
    """Curve kinds available to size effects."""

    WAVE = "wave"  # Sinusoidal size oscillation
    RISE = "rise"  # Monotonic growth from base size
    FALL = "fall"  # Monotonic shrink towards a floor


class Decoration(BaseModel):
    """Glyphs emitted once before and after a color effect's output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    before: str | None = None
    after: str | None = None


class ColorEffect(BaseModel):
    """Color effect: cycles a palette over the non-space characters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["color"] = "color"
    name: str
    icon: str
    description: str
    colors: tuple[str, ...] = Field(min_length=1, description="Ordered color cycle")
    decoration: Decoration | None = None

    def color_at(self, char_index: int) -> str:
        """Return the palette color for a non-space character index."""
        return self.colors[char_index % len(self.colors)]


class SizeEffect(BaseModel):
    """Size effect: font size follows a curve over the non-space characters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["size"] = "size"
    name: str
    icon: str
    description: str
    curve: SizeCurve
    params: dict[str, float] = Field(
        default_factory=dict, description="Overrides for the curve's default parameters"
    )


EffectDefinition = Annotated[ColorEffect | SizeEffect, Field(discriminator="kind")]


def _clamp_int(value: Any, lower: int, upper: int, default: int) -> int:
    """Coerce a loosely typed number into [lower, upper], or default if unusable."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    if math.isinf(number):
        return upper if number > 0 else lower
    return max(lower, min(upper, int(number)))


class CompositionOptions(BaseModel):
    """Tunable composition parameters.

    Values are clamped instead of rejected so composition never fails on
    bad numeric input: intensity to [1, 10], base size to [8, 100] px.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    intensity: int = DEFAULT_INTENSITY
    base_size: int = Field(
        default=DEFAULT_BASE_SIZE,
        validation_alias=AliasChoices("base_size", "baseSize"),
    )

    @field_validator("intensity", mode="before")
    @classmethod
    def clamp_intensity(cls, v: Any) -> int:
        return _clamp_int(v, MIN_INTENSITY, MAX_INTENSITY, DEFAULT_INTENSITY)

    @field_validator("base_size", mode="before")
    @classmethod
    def clamp_base_size(cls, v: Any) -> int:
        return _clamp_int(v, MIN_BASE_SIZE, MAX_BASE_SIZE, DEFAULT_BASE_SIZE)

    @classmethod
    def coerce(cls, value: CompositionOptions | Mapping[str, Any] | None) -> Self:
        """Build options from an instance, a plain mapping, or None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        return cls()


class ActiveEffectSelection(BaseModel):
    """Selected effect key per category (None = no effect on that axis)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    color: str | None = None
    size: str | None = None

    @classmethod
    def coerce(cls, value: ActiveEffectSelection | Mapping[str, Any] | None) -> Self:
        """Build a selection from an instance, a plain mapping, or None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                color=_key_or_none(value.get("color")),
                size=_key_or_none(value.get("size")),
            )
        return cls()

    def is_empty(self) -> bool:
        return self.color is None and self.size is None


def _key_or_none(value: Any) -> str | None:
    if isinstance(value, EffectCategory | SizeCurve):
        return value.value
    if isinstance(value, str) and value:
        return value
    return None

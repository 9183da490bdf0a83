"""Random composition models and policy configuration."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mailfx.core.effects.palettes import (
    BACKGROUND_COLOR_PALETTE,
    FONT_FAMILIES,
    TEXT_COLOR_PALETTE,
)


class RandomMode(str, Enum):
    """Top-level random composition modes."""

    PRESET = "preset"  # Catalog color and/or size effects
    SIMPLE = "simple"  # Uniform text and/or background color


class PresetVariant(str, Enum):
    COLOR = "color"
    SIZE = "size"
    BOTH = "color+size"


class SimpleVariant(str, Enum):
    TEXT_COLOR = "text-color"
    BACKGROUND = "background"
    BOTH = "text-color+background"


def _check_weights(v: dict[str, float]) -> dict[str, float]:
    if any(w < 0 for w in v.values()):
        raise ValueError("weights must be non-negative")
    if sum(v.values()) <= 0:
        raise ValueError("at least one weight must be positive")
    return v


class RandomPolicyConfig(BaseModel):
    """Weights and palettes driving the random composition policy.

    Defaults: preset/simple 50/50; preset variants in equal thirds; simple
    variants 40/30/30; a size effect on half of simple compositions; each
    of bold/italic/underline at 30% in chaos mode. Strike-through is never
    sampled.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    preset_probability: float = Field(default=0.5, ge=0.0, le=1.0)
    preset_weights: dict[PresetVariant, float] = Field(
        default_factory=lambda: {
            PresetVariant.COLOR: 1.0,
            PresetVariant.SIZE: 1.0,
            PresetVariant.BOTH: 1.0,
        }
    )
    simple_weights: dict[SimpleVariant, float] = Field(
        default_factory=lambda: {
            SimpleVariant.TEXT_COLOR: 0.4,
            SimpleVariant.BACKGROUND: 0.3,
            SimpleVariant.BOTH: 0.3,
        }
    )
    simple_size_probability: float = Field(default=0.5, ge=0.0, le=1.0)

    bold_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    italic_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    underline_probability: float = Field(default=0.3, ge=0.0, le=1.0)

    text_colors: tuple[str, ...] = Field(default=TEXT_COLOR_PALETTE, min_length=1)
    background_colors: tuple[str, ...] = Field(default=BACKGROUND_COLOR_PALETTE, min_length=1)
    fonts: tuple[str, ...] = Field(default=FONT_FAMILIES, min_length=1)

    @field_validator("preset_weights", "simple_weights")
    @classmethod
    def validate_weights(cls, v: dict) -> dict:
        return _check_weights(v)

    @model_validator(mode="after")
    def validate_contrast(self) -> RandomPolicyConfig:
        """A background distinct from any text color must always exist."""
        if len(set(self.background_colors)) < 2:
            raise ValueError("background_colors needs at least two distinct colors")
        return self


class AppliedEffects(BaseModel):
    """Exactly what a random composition chose.

    Returned alongside the markup so callers can reflect the choice in UI
    state without re-parsing markup. mode is None when nothing was applied
    (empty or whitespace-only text).
    """

    model_config = ConfigDict(frozen=True)

    mode: RandomMode | None = None
    variant: PresetVariant | SimpleVariant | None = None
    color: str | None = Field(default=None, description="Catalog color effect key")
    size: str | None = Field(default=None, description="Catalog size effect key")
    text_color: str | None = None
    background: str | None = None
    font: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_noop(self) -> bool:
        return self.mode is None


class RandomComposition(BaseModel):
    """Markup produced by the random policy plus the record of choices."""

    model_config = ConfigDict(frozen=True)

    markup: str
    applied: AppliedEffects

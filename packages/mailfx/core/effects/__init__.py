"""Effect catalog, models and size curves."""

from mailfx.core.effects.catalog import (
    COLOR_EFFECTS,
    EFFECTS,
    SIZE_EFFECTS,
    UnknownEffectError,
    effect_keys,
    get_color_effect,
    get_effect,
    get_size_effect,
    list_effects,
    random_effect_key,
)
from mailfx.core.effects.curves import (
    MIN_FONT_SIZE_PX,
    CurveRegistry,
    build_default_registry,
    evaluate_size_offset,
    font_size_px,
)
from mailfx.core.effects.models import (
    ActiveEffectSelection,
    ColorEffect,
    CompositionOptions,
    Decoration,
    EffectCategory,
    SizeCurve,
    SizeEffect,
)

__all__ = [
    "ActiveEffectSelection",
    "COLOR_EFFECTS",
    "ColorEffect",
    "CompositionOptions",
    "CurveRegistry",
    "Decoration",
    "EFFECTS",
    "EffectCategory",
    "MIN_FONT_SIZE_PX",
    "SIZE_EFFECTS",
    "SizeCurve",
    "SizeEffect",
    "UnknownEffectError",
    "build_default_registry",
    "effect_keys",
    "evaluate_size_offset",
    "font_size_px",
    "get_color_effect",
    "get_effect",
    "get_size_effect",
    "list_effects",
    "random_effect_key",
]

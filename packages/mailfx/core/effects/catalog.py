"""Built-in effect catalog.

Read-only registry from category to effect key to definition. Adding an
effect is a catalog edit, not a runtime operation.
"""

from __future__ import annotations

from collections.abc import Mapping
import random
from types import MappingProxyType

from mailfx.core.effects.models import (
    ColorEffect,
    Decoration,
    EffectCategory,
    SizeCurve,
    SizeEffect,
)


class UnknownEffectError(KeyError):
    """Raised when a category or effect key is not in the catalog."""


COLOR_EFFECTS: Mapping[str, ColorEffect] = MappingProxyType(
    {
        "rainbow": ColorEffect(
            name="Rainbow",
            icon="🌈",
            description="Colors each character with the colors of the rainbow",
            decoration=Decoration(before="✨ ", after=" ✨"),
            colors=(
                "#ff0000",
                "#ff7f00",
                "#ffff00",
                "#00ff00",
                "#0099ff",
                "#6633ff",
                "#9400d3",
            ),
        ),
        "flame": ColorEffect(
            name="Flame",
            icon="🔥",
            description="Alternates yellow, orange and red, framed by flames",
            decoration=Decoration(before="🔥 ", after=" 🔥"),
            colors=("#ffff00", "#ff7f00", "#ff4500", "#ff0000"),
        ),
        "flower": ColorEffect(
            name="Flower",
            icon="🌸",
            description="Alternates violet, pink and salmon, framed by flowers",
            decoration=Decoration(before="🌸 ", after=" 🌺"),
            colors=("#9400d3", "#ff69b4", "#ff1493", "#fa8072"),
        ),
    }
)

SIZE_EFFECTS: Mapping[str, SizeEffect] = MappingProxyType(
    {
        "wave": SizeEffect(
            name="Wave",
            icon="🌊",
            description="Character sizes follow a sine wave",
            curve=SizeCurve.WAVE,
        ),
        "rise": SizeEffect(
            name="Rise",
            icon="📈",
            description="Character size grows progressively",
            curve=SizeCurve.RISE,
        ),
        "fall": SizeEffect(
            name="Fall",
            icon="📉",
            description="Character size shrinks progressively",
            curve=SizeCurve.FALL,
        ),
    }
)

EFFECTS: Mapping[EffectCategory, Mapping[str, ColorEffect | SizeEffect]] = MappingProxyType(
    {
        EffectCategory.COLOR: COLOR_EFFECTS,
        EffectCategory.SIZE: SIZE_EFFECTS,
    }
)


def _category(category: EffectCategory | str) -> EffectCategory:
    try:
        return EffectCategory(category)
    except ValueError as exc:
        raise UnknownEffectError(f"Unknown effect category '{category}'") from exc


def list_effects(category: EffectCategory | str) -> Mapping[str, ColorEffect | SizeEffect]:
    """Enumerate the effects of a category (key -> definition), in catalog order."""
    return EFFECTS[_category(category)]


def effect_keys(category: EffectCategory | str) -> list[str]:
    return list(list_effects(category))


def get_effect(category: EffectCategory | str, key: str) -> ColorEffect | SizeEffect:
    """Look up an effect definition.

    Raises:
        UnknownEffectError: If the category or key is not defined
    """
    effects = list_effects(category)
    try:
        return effects[key]
    except KeyError as exc:
        raise UnknownEffectError(
            f"Unknown {EffectCategory(category).value} effect '{key}'"
        ) from exc


def get_color_effect(key: str) -> ColorEffect:
    try:
        return COLOR_EFFECTS[key]
    except KeyError as exc:
        raise UnknownEffectError(f"Unknown color effect '{key}'") from exc


def get_size_effect(key: str) -> SizeEffect:
    try:
        return SIZE_EFFECTS[key]
    except KeyError as exc:
        raise UnknownEffectError(f"Unknown size effect '{key}'") from exc


def random_effect_key(category: EffectCategory | str, rng: random.Random | None = None) -> str:
    """Pick an effect key uniformly over the category's defined keys."""
    chooser = rng or random
    return chooser.choice(effect_keys(category))

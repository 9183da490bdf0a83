"""Tests for the effect catalog."""

from __future__ import annotations

import random

import pytest

from mailfx.core.effects.catalog import (
    COLOR_EFFECTS,
    SIZE_EFFECTS,
    UnknownEffectError,
    effect_keys,
    get_color_effect,
    get_effect,
    get_size_effect,
    list_effects,
    random_effect_key,
)
from mailfx.core.effects.models import ColorEffect, EffectCategory, SizeCurve, SizeEffect


class TestCatalogContents:
    """Built-in effects."""

    def test_color_keys_in_catalog_order(self):
        """Color effects enumerate in definition order."""
        assert effect_keys(EffectCategory.COLOR) == ["rainbow", "flame", "flower"]

    def test_size_keys_in_catalog_order(self):
        """Size effects enumerate in definition order."""
        assert effect_keys("size") == ["wave", "rise", "fall"]

    def test_rainbow_has_seven_colors_and_sparkles(self):
        """Rainbow cycles seven colors and is framed by sparkles."""
        rainbow = get_color_effect("rainbow")
        assert len(rainbow.colors) == 7
        assert rainbow.colors[0] == "#ff0000"
        assert rainbow.decoration is not None
        assert rainbow.decoration.before == "✨ "
        assert rainbow.decoration.after == " ✨"

    def test_flower_has_asymmetric_decoration(self):
        """Flower opens with a blossom and closes with a hibiscus."""
        flower = get_color_effect("flower")
        assert flower.decoration.before == "🌸 "
        assert flower.decoration.after == " 🌺"

    def test_every_color_effect_has_a_palette(self):
        """No color effect has an empty palette."""
        for effect in COLOR_EFFECTS.values():
            assert isinstance(effect, ColorEffect)
            assert effect.colors

    def test_size_effects_use_matching_curves(self):
        """Each size effect key names its curve."""
        for key, effect in SIZE_EFFECTS.items():
            assert isinstance(effect, SizeEffect)
            assert effect.curve == SizeCurve(key)

    def test_catalog_is_read_only(self):
        """The catalog mappings cannot be mutated."""
        with pytest.raises(TypeError):
            COLOR_EFFECTS["custom"] = get_color_effect("flame")  # type: ignore[index]


class TestLookup:
    """Lookup and error handling."""

    def test_get_effect_by_category(self):
        """get_effect resolves both categories."""
        assert get_effect("color", "flame").name == "Flame"
        assert get_effect(EffectCategory.SIZE, "rise").curve == SizeCurve.RISE

    def test_unknown_key_raises(self):
        """Unknown keys raise UnknownEffectError (a KeyError)."""
        with pytest.raises(UnknownEffectError, match="sparkle"):
            get_effect("color", "sparkle")
        with pytest.raises(KeyError):
            get_size_effect("bounce")

    def test_unknown_category_raises(self):
        """Unknown categories raise UnknownEffectError."""
        with pytest.raises(UnknownEffectError, match="opacity"):
            list_effects("opacity")

    def test_random_key_is_defined(self):
        """random_effect_key only returns catalog keys."""
        rng = random.Random(7)
        for _ in range(50):
            assert random_effect_key("color", rng) in COLOR_EFFECTS
            assert random_effect_key("size", rng) in SIZE_EFFECTS

    def test_random_key_reaches_every_effect(self):
        """Uniform choice eventually covers every key."""
        rng = random.Random(3)
        seen = {random_effect_key("size", rng) for _ in range(200)}
        assert seen == set(SIZE_EFFECTS)

"""Random composition policy.

Builds plausible effect combinations:

- preset mode: one or both catalog effects (color, size) through the
  composition engine, wrapped in a random font.
- simple mode: a uniform text color and/or background color, optionally a
  size effect on the same text, wrapped in a random font. When both colors
  are drawn they are never equal.

The chaos variant layers independent bold/italic/underline wrapping on top of
either mode before the mandatory font wrap.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import random
from typing import Any, TypeVar

from mailfx.core.composition.engine import CompositionEngine, OptionsLike
from mailfx.core.composition.markup import escape_text, style_span, wrap_font, wrap_format
from mailfx.core.effects.catalog import random_effect_key
from mailfx.core.effects.models import ActiveEffectSelection, CompositionOptions, EffectCategory
from mailfx.core.randomizer.models import (
    AppliedEffects,
    PresetVariant,
    RandomComposition,
    RandomMode,
    RandomPolicyConfig,
    SimpleVariant,
)

logger = logging.getLogger(__name__)

K = TypeVar("K")


class RandomCompositionPolicy:
    """Weighted random selection of effect combinations.

    Args:
        config: Weights, probabilities and palettes (defaults if None)
        rng: Random source; inject a seeded random.Random for reproducibility
        engine: Composition engine used for catalog effects
    """

    def __init__(
        self,
        config: RandomPolicyConfig | None = None,
        *,
        rng: random.Random | None = None,
        engine: CompositionEngine | None = None,
    ) -> None:
        self.config = config or RandomPolicyConfig()
        self.rng = rng or random.Random()
        self.engine = engine or CompositionEngine()

    def compose(self, text: str, options: OptionsLike = None) -> RandomComposition:
        """Pick a mode and effects at random, then wrap in a random font."""
        if not text or text.isspace():
            return RandomComposition(markup=text, applied=AppliedEffects())

        opts = CompositionOptions.coerce(options)
        markup, applied = self._compose_base(text, opts)
        return self._finish(markup, applied)

    def compose_chaos(self, text: str, options: OptionsLike = None) -> RandomComposition:
        """Like compose(), plus independently sampled bold/italic/underline."""
        if not text or text.isspace():
            return RandomComposition(markup=text, applied=AppliedEffects())

        opts = CompositionOptions.coerce(options)
        markup, applied = self._compose_base(text, opts)

        formatting: dict[str, bool] = {}
        for tag, field_name, probability in (
            ("b", "bold", self.config.bold_probability),
            ("i", "italic", self.config.italic_probability),
            ("u", "underline", self.config.underline_probability),
        ):
            chosen = self.rng.random() < probability
            if chosen:
                markup = wrap_format(markup, tag)
            formatting[field_name] = chosen

        return self._finish(markup, applied.model_copy(update=formatting))

    def _finish(self, markup: str, applied: AppliedEffects) -> RandomComposition:
        font = self.rng.choice(self.config.fonts)
        applied = applied.model_copy(update={"font": font})
        logger.debug(f"Random composition: {applied.model_dump(exclude_defaults=True)}")
        return RandomComposition(markup=wrap_font(markup, font), applied=applied)

    def _compose_base(self, text: str, opts: CompositionOptions) -> tuple[str, AppliedEffects]:
        if self.rng.random() < self.config.preset_probability:
            return self._compose_preset(text, opts)
        return self._compose_simple(text, opts)

    def _compose_preset(self, text: str, opts: CompositionOptions) -> tuple[str, AppliedEffects]:
        variant = self._weighted_choice(self.config.preset_weights)
        color = None
        size = None
        if variant in (PresetVariant.COLOR, PresetVariant.BOTH):
            color = random_effect_key(EffectCategory.COLOR, self.rng)
        if variant in (PresetVariant.SIZE, PresetVariant.BOTH):
            size = random_effect_key(EffectCategory.SIZE, self.rng)

        markup = self.engine.compose(text, ActiveEffectSelection(color=color, size=size), opts)
        applied = AppliedEffects(mode=RandomMode.PRESET, variant=variant, color=color, size=size)
        return markup, applied

    def _compose_simple(self, text: str, opts: CompositionOptions) -> tuple[str, AppliedEffects]:
        variant = self._weighted_choice(self.config.simple_weights)
        text_color = None
        background = None
        if variant in (SimpleVariant.TEXT_COLOR, SimpleVariant.BOTH):
            text_color = self.rng.choice(self.config.text_colors)
        if variant in (SimpleVariant.BACKGROUND, SimpleVariant.BOTH):
            background = self._pick_background(exclude=text_color)

        size = None
        if self.rng.random() < self.config.simple_size_probability:
            size = random_effect_key(EffectCategory.SIZE, self.rng)
            inner = self.engine.compose(text, ActiveEffectSelection(size=size), opts)
        else:
            inner = escape_text(text)

        styles: list[tuple[str, str]] = []
        if text_color is not None:
            styles.append(("color", text_color))
        if background is not None:
            styles.append(("background-color", background))

        applied = AppliedEffects(
            mode=RandomMode.SIMPLE,
            variant=variant,
            size=size,
            text_color=text_color,
            background=background,
        )
        return style_span(inner, styles), applied

    def _pick_background(self, exclude: str | None) -> str:
        """Uniform background, never equal to the text color.

        Sampling from the palette minus the excluded color has the same
        distribution as resampling until the colors differ.
        """
        candidates = [c for c in self.config.background_colors if c != exclude]
        return self.rng.choice(candidates)

    def _weighted_choice(self, weights: Mapping[K, float]) -> K:
        keys = list(weights)
        return self.rng.choices(keys, weights=[weights[k] for k in keys], k=1)[0]


def compose_random(
    text: str,
    options: CompositionOptions | Mapping[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
    config: RandomPolicyConfig | None = None,
) -> RandomComposition:
    """One-shot random composition (see RandomCompositionPolicy.compose)."""
    return RandomCompositionPolicy(config, rng=rng).compose(text, options)


def compose_chaos(
    text: str,
    options: CompositionOptions | Mapping[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
    config: RandomPolicyConfig | None = None,
) -> RandomComposition:
    """One-shot chaos composition (see RandomCompositionPolicy.compose_chaos)."""
    return RandomCompositionPolicy(config, rng=rng).compose_chaos(text, options)

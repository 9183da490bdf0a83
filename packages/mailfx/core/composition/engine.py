"""Composition engine.

Maps (text, active effects, options) to an inline-styled markup fragment.

Layout rules:
- Text is split into perceived characters (see graphemes.split_graphemes).
- Whitespace is emitted verbatim, never wrapped and never counted.
- All cycling/curve math uses the non-space index, not the raw position.
- Color and size are merged into one style declaration per character.
- Decoration glyphs of the active color effect are emitted once, before and
  after the characters, in spans carrying the decoration marker.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from mailfx.core.composition.graphemes import count_non_space, is_space, split_graphemes
from mailfx.core.composition.markup import decoration_span, escape_text, style_span
from mailfx.core.effects.catalog import COLOR_EFFECTS, SIZE_EFFECTS
from mailfx.core.effects.curves import DEFAULT_REGISTRY, CurveRegistry, font_size_px
from mailfx.core.effects.models import (
    ActiveEffectSelection,
    ColorEffect,
    CompositionOptions,
    SizeEffect,
)

logger = logging.getLogger(__name__)

SelectionLike = ActiveEffectSelection | Mapping[str, Any] | None
OptionsLike = CompositionOptions | Mapping[str, Any] | None


@dataclass(frozen=True)
class StyledCharacter:
    """One perceived character and the styles computed for it.

    char_index is None for whitespace, which is never styled.
    """

    text: str
    position: int
    char_index: int | None = None
    color: str | None = None
    font_size_px: int | None = None

    @property
    def is_space(self) -> bool:
        return self.char_index is None

    def styles(self) -> list[tuple[str, str]]:
        styles: list[tuple[str, str]] = []
        if self.color is not None:
            styles.append(("color", self.color))
        if self.font_size_px is not None:
            styles.append(("font-size", f"{self.font_size_px}px"))
        return styles


@dataclass(frozen=True)
class CompositionLayout:
    """Computed layout, before rendering to markup."""

    characters: list[StyledCharacter] = field(default_factory=list)
    prefix: str | None = None
    suffix: str | None = None

    @property
    def total_non_space(self) -> int:
        return sum(1 for c in self.characters if not c.is_space)

    def render(self) -> str:
        parts: list[str] = []
        if self.prefix:
            parts.append(decoration_span(self.prefix))
        for char in self.characters:
            if char.is_space:
                parts.append(char.text)
                continue
            styles = char.styles()
            content = escape_text(char.text)
            parts.append(style_span(content, styles) if styles else content)
        if self.suffix:
            parts.append(decoration_span(self.suffix))
        return "".join(parts)


class CompositionEngine:
    """Per-character style computation over the effect catalog.

    Args:
        color_effects: Color effect definitions by key
        size_effects: Size effect definitions by key
        curves: Registry used to evaluate size curves
    """

    def __init__(
        self,
        *,
        color_effects: Mapping[str, ColorEffect] = COLOR_EFFECTS,
        size_effects: Mapping[str, SizeEffect] = SIZE_EFFECTS,
        curves: CurveRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self.color_effects = color_effects
        self.size_effects = size_effects
        self.curves = curves

    def _resolve(
        self, selection: ActiveEffectSelection
    ) -> tuple[ColorEffect | None, SizeEffect | None]:
        color_effect = None
        size_effect = None
        if selection.color is not None:
            color_effect = self.color_effects.get(selection.color)
            if color_effect is None:
                logger.warning(f"Ignoring unknown color effect '{selection.color}'")
        if selection.size is not None:
            size_effect = self.size_effects.get(selection.size)
            if size_effect is None:
                logger.warning(f"Ignoring unknown size effect '{selection.size}'")
        return color_effect, size_effect

    def layout(
        self, text: str, selection: SelectionLike = None, options: OptionsLike = None
    ) -> CompositionLayout:
        """Compute per-character styles without rendering.

        Empty or whitespace-only text yields a layout with no styled
        characters and no decorations.
        """
        if not text:
            return CompositionLayout()

        active = ActiveEffectSelection.coerce(selection)
        opts = CompositionOptions.coerce(options)
        color_effect, size_effect = self._resolve(active)

        clusters = split_graphemes(text)
        total = count_non_space(clusters)
        if total == 0:
            return CompositionLayout(
                characters=[StyledCharacter(text=c, position=i) for i, c in enumerate(clusters)]
            )

        characters: list[StyledCharacter] = []
        char_index = 0
        for i, cluster in enumerate(clusters):
            if is_space(cluster):
                characters.append(StyledCharacter(text=cluster, position=i))
                continue

            color = color_effect.color_at(char_index) if color_effect else None
            size = None
            if size_effect is not None:
                offset = self.curves.evaluate(
                    size_effect.curve, char_index, total, opts, size_effect.params
                )
                size = font_size_px(offset, opts.base_size)

            characters.append(
                StyledCharacter(
                    text=cluster,
                    position=i,
                    char_index=char_index,
                    color=color,
                    font_size_px=size,
                )
            )
            char_index += 1

        decoration = color_effect.decoration if color_effect else None
        return CompositionLayout(
            characters=characters,
            prefix=decoration.before if decoration else None,
            suffix=decoration.after if decoration else None,
        )

    def compose(
        self, text: str, selection: SelectionLike = None, options: OptionsLike = None
    ) -> str:
        """Render text with the selected effects as inline-styled markup."""
        return self.layout(text, selection, options).render()


_DEFAULT_ENGINE = CompositionEngine()


def compose(text: str, selection: SelectionLike = None, options: OptionsLike = None) -> str:
    """Compose with the built-in catalog.

    Args:
        text: Plain text to decorate
        selection: Active effect per category, e.g. {"color": "rainbow", "size": "wave"}
        options: {"intensity": 1..10, "base_size": px}; clamped, never rejected

    Returns:
        Markup fragment: prefix decoration, characters in original order,
        suffix decoration
    """
    return _DEFAULT_ENGINE.compose(text, selection, options)


def layout(
    text: str, selection: SelectionLike = None, options: OptionsLike = None
) -> CompositionLayout:
    return _DEFAULT_ENGINE.layout(text, selection, options)

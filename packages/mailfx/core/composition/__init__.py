"""Per-character composition of effects into inline-styled markup."""

from mailfx.core.composition.engine import (
    CompositionEngine,
    CompositionLayout,
    StyledCharacter,
    compose,
    layout,
)
from mailfx.core.composition.graphemes import split_graphemes
from mailfx.core.composition.markup import (
    DECORATION_ATTR,
    DECORATION_MARKER,
    decoration_span,
    escape_text,
    style_span,
    wrap_background,
    wrap_font,
    wrap_format,
    wrap_text_color,
)

__all__ = [
    "CompositionEngine",
    "CompositionLayout",
    "DECORATION_ATTR",
    "DECORATION_MARKER",
    "StyledCharacter",
    "compose",
    "decoration_span",
    "escape_text",
    "layout",
    "split_graphemes",
    "style_span",
    "wrap_background",
    "wrap_font",
    "wrap_format",
    "wrap_text_color",
]

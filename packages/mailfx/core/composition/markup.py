"""Inline-styled markup builders.

Output stays mail-client safe: only inline `style` declarations using
color, background-color, font-size and font-family. No classes, no ids,
no stylesheet. The single non-style attribute is the decoration marker,
which the patching layer uses to strip engine-added glyphs.
"""

from __future__ import annotations

from collections.abc import Sequence
import html

DECORATION_ATTR = "data-decoration"
DECORATION_MARKER = f'{DECORATION_ATTR}="true"'

STYLE_PROPERTIES = frozenset({"color", "background-color", "font-size", "font-family"})
FORMAT_TAGS = frozenset({"b", "i", "u"})


def escape_text(text: str) -> str:
    """Escape character data (&, <, >) for insertion between tags."""
    return html.escape(text, quote=False)


def format_style(styles: Sequence[tuple[str, str]]) -> str:
    """Render (property, value) pairs as a single inline declaration.

    Raises:
        ValueError: If a property is outside the mail-safe set
    """
    declarations = []
    for prop, value in styles:
        if prop not in STYLE_PROPERTIES:
            raise ValueError(f"Unsupported style property '{prop}'")
        declarations.append(f"{prop}: {html.escape(str(value), quote=True)}")
    return "; ".join(declarations) + ";"


def style_span(content: str, styles: Sequence[tuple[str, str]]) -> str:
    """Wrap already-escaped content in one span carrying all styles."""
    return f'<span style="{format_style(styles)}">{content}</span>'


def decoration_span(glyph: str) -> str:
    return f"<span {DECORATION_MARKER}>{escape_text(glyph)}</span>"


def wrap_style(markup: str, prop: str, value: str) -> str:
    return style_span(markup, [(prop, value)])


def wrap_font(markup: str, family: str) -> str:
    return wrap_style(markup, "font-family", family)


def wrap_text_color(markup: str, color: str) -> str:
    return wrap_style(markup, "color", color)


def wrap_background(markup: str, color: str) -> str:
    return wrap_style(markup, "background-color", color)


def wrap_format(markup: str, tag: str) -> str:
    """Wrap markup in a bold/italic/underline element.

    Strike-through is not in FORMAT_TAGS.
    """
    if tag not in FORMAT_TAGS:
        raise ValueError(f"Unsupported format tag '{tag}'")
    return f"<{tag}>{markup}</{tag}>"

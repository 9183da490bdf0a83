"""Tests for inline markup builders."""

from __future__ import annotations

import pytest

from mailfx.core.composition.markup import (
    decoration_span,
    format_style,
    style_span,
    wrap_background,
    wrap_font,
    wrap_format,
    wrap_text_color,
)


class TestStyles:
    """Inline style declarations."""

    def test_format_style(self):
        """Declarations are joined with semicolons."""
        assert format_style([("color", "#fff"), ("font-size", "12px")]) == (
            "color: #fff; font-size: 12px;"
        )

    def test_only_mail_safe_properties(self):
        """Properties outside the mail-safe set are rejected."""
        with pytest.raises(ValueError, match="position"):
            format_style([("position", "absolute")])

    def test_values_are_attribute_escaped(self):
        """Quotes in values cannot break out of the style attribute."""
        assert '"' not in format_style([("font-family", 'Evil", x')]).replace("&quot;", "")

    def test_wrappers(self):
        """Convenience wrappers produce a single styled span."""
        assert wrap_text_color("x", "#111") == '<span style="color: #111;">x</span>'
        assert wrap_background("x", "#222") == '<span style="background-color: #222;">x</span>'
        assert wrap_font("x", "Georgia, serif") == (
            '<span style="font-family: Georgia, serif;">x</span>'
        )
        assert style_span("x", [("color", "red")]) == wrap_text_color("x", "red")


class TestFormatting:
    """Format tags and decorations."""

    @pytest.mark.parametrize("tag", ["b", "i", "u"])
    def test_format_tags_close_correctly(self, tag):
        """Each tag closes with its own closing tag."""
        assert wrap_format("x", tag) == f"<{tag}>x</{tag}>"

    def test_strike_through_not_offered(self):
        """Strike-through is not a supported format."""
        with pytest.raises(ValueError):
            wrap_format("x", "s")

    def test_decoration_span(self):
        """Decorations carry the marker attribute and escaped glyphs."""
        assert decoration_span("<✨>") == '<span data-decoration="true">&lt;✨&gt;</span>'

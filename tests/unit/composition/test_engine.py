"""Tests for the composition engine."""

from __future__ import annotations

import logging
import re

import pytest

from mailfx.core.composition.engine import CompositionEngine, compose, layout
from mailfx.core.effects.catalog import get_color_effect
from mailfx.core.effects.models import ActiveEffectSelection
from mailfx.core.patching.tokenizer import extract_text, strip_decorations

SPAN_RE = re.compile(r'<span style="([^"]*)">([^<]*)</span>')

RAINBOW = {"color": "rainbow"}


def styled_spans(markup: str) -> list[tuple[str, str]]:
    """(style, content) for every styled span, in order."""
    return SPAN_RE.findall(strip_decorations(markup))


class TestColorComposition:
    """Color effects."""

    def test_rainbow_two_letters(self):
        """Exact markup for a short rainbow composition."""
        assert compose("Hi", RAINBOW) == (
            '<span data-decoration="true">✨ </span>'
            '<span style="color: #ff0000;">H</span>'
            '<span style="color: #ff7f00;">i</span>'
            '<span data-decoration="true"> ✨</span>'
        )

    def test_spaces_are_verbatim_and_uncounted(self):
        """Whitespace is never wrapped and does not advance the color cycle."""
        markup = strip_decorations(compose("a b", RAINBOW))
        assert markup == (
            '<span style="color: #ff0000;">a</span> <span style="color: #ff7f00;">b</span>'
        )

    def test_rainbow_cycle_repeats_every_seven(self):
        """Non-space characters k and k+7 share a color."""
        spans = styled_spans(compose("abcd efgh ijkl", RAINBOW))
        colors = [style for style, _ in spans]
        assert len(colors) == 12
        for k in range(len(colors) - 7):
            assert colors[k] == colors[k + 7]
        assert colors[0] != colors[1]

    def test_one_span_per_non_space_character(self):
        """Styled span count equals the number of non-space characters."""
        text = "Hello, wonderful world!\nBye"
        spans = styled_spans(compose(text, RAINBOW))
        assert len(spans) == sum(1 for ch in text if not ch.isspace())

    def test_text_is_escaped(self):
        """Markup-significant characters are escaped inside spans."""
        markup = compose("<b>&", RAINBOW)
        assert "<b>" not in markup
        assert [content for _, content in styled_spans(markup)] == ["&lt;", "b", "&gt;", "&amp;"]

    def test_decorations_wrap_output_once(self):
        """Decorations appear once before and once after."""
        markup = compose("flame on", {"color": "flame"})
        assert markup.startswith('<span data-decoration="true">🔥 </span>')
        assert markup.endswith('<span data-decoration="true"> 🔥</span>')
        assert markup.count("data-decoration") == 2


class TestSizeComposition:
    """Size effects and combinations."""

    def test_size_only_has_no_decoration(self):
        """Size effects never add decoration glyphs."""
        markup = compose("abc", {"size": "rise"})
        assert "data-decoration" not in markup
        assert [s for s, _ in styled_spans(markup)] == [
            "font-size: 16px;",
            "font-size: 26px;",
            "font-size: 36px;",
        ]

    def test_color_and_size_share_one_declaration(self):
        """Both effects are merged into a single style attribute per character."""
        spans = styled_spans(compose("ab", {"color": "rainbow", "size": "rise"}))
        assert spans == [
            ("color: #ff0000; font-size: 16px;", "a"),
            ("color: #ff7f00; font-size: 36px;", "b"),
        ]

    def test_sizes_never_below_minimum(self):
        """No character is rendered below 8px."""
        markup = compose("x" * 40, {"size": "wave"}, {"intensity": 10, "base_size": 8})
        sizes = [int(s) for s in re.findall(r"font-size: (\d+)px", markup)]
        assert min(sizes) >= 8

    def test_options_accept_mapping_and_clamp(self):
        """Mapping options are clamped rather than rejected."""
        clamped = compose("abc", {"size": "rise"}, {"intensity": 99, "baseSize": 16})
        explicit = compose("abc", {"size": "rise"}, {"intensity": 10, "base_size": 16})
        assert clamped == explicit


class TestEdgeCases:
    """Empty input, whitespace and unknown keys."""

    @pytest.mark.parametrize("text", ["", " ", "   \n\t "])
    def test_blank_text_passes_through(self, text):
        """Empty or whitespace-only text is returned unchanged, without decorations."""
        assert compose(text, RAINBOW) == text

    def test_no_selection_is_plain_escaped_text(self):
        """No active effect means no spans at all."""
        assert compose("a < b", None) == "a &lt; b"

    def test_unknown_effect_is_ignored(self, caplog):
        """Unknown keys log a warning and compose as if unselected."""
        with caplog.at_level(logging.WARNING):
            markup = compose("ab", {"color": "sparkle", "size": "rise"})
        assert "sparkle" in caplog.text
        assert "color:" not in markup
        assert "font-size:" in markup

    def test_emoji_cluster_is_one_character(self):
        """A skin-toned emoji is styled as a single character."""
        spans = styled_spans(compose("👍🏽!", RAINBOW))
        assert [content for _, content in spans] == ["👍🏽", "!"]


class TestLayout:
    """Layout API and round trips."""

    def test_layout_indexes_skip_spaces(self):
        """char_index counts non-space characters only."""
        result = layout("a b", RAINBOW)
        assert [c.char_index for c in result.characters] == [0, None, 1]
        assert result.total_non_space == 2

    def test_layout_render_matches_compose(self):
        """render() produces the composed markup."""
        selection = ActiveEffectSelection(color="flower", size="wave")
        assert layout("Bloom", selection).render() == compose("Bloom", selection)

    def test_strip_and_extract_recovers_text(self):
        """Removing decorations and tags gives back the original text."""
        text = "Fish & chips <3"
        markup = compose(text, {"color": "flower", "size": "fall"})
        assert extract_text(markup) == text

    def test_custom_catalog(self):
        """The engine accepts its own effect tables."""
        engine = CompositionEngine(color_effects={"mono": get_color_effect("flame")})
        assert "#ffff00" in engine.compose("a", {"color": "mono"})
        assert engine.compose("a", RAINBOW) == "a"

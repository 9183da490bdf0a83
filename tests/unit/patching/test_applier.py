"""Tests for text-anchored markup patching."""

from __future__ import annotations

import logging

import pytest

from mailfx.core.ai.models import WordSelection
from mailfx.core.composition.engine import CompositionEngine, compose
from mailfx.core.patching.applier import (
    apply_word_selections,
    insert_emojis,
    patch_words,
    style_words,
)
from mailfx.core.patching.tokenizer import extract_text

RAINBOW = {"color": "rainbow"}
SENTENCE = "<p>The quick brown fox jumps over the lazy dog</p>"


class TestStyleWords:
    """Replacing words with composed fragments."""

    def test_found_word_is_styled_missing_word_ignored(self):
        """Only words present in the markup are patched."""
        result = style_words(SENTENCE, ["quick", "zebra"], RAINBOW)
        assert result == (
            "<p>The " + compose("quick", RAINBOW) + " brown fox jumps over the lazy dog</p>"
        )

    def test_text_survives_styling(self):
        """Stripping decorations and tags gives back the original text."""
        result = style_words(SENTENCE, ["quick", "lazy", "dog"], RAINBOW)
        assert extract_text(result) == "The quick brown fox jumps over the lazy dog"

    def test_custom_engine_is_used(self):
        """An injected engine renders the fragments."""
        engine = CompositionEngine(color_effects={}, size_effects={})
        result = style_words("<p>fox</p>", ["fox"], RAINBOW, engine=engine)
        assert result == "<p>fox</p>"

    def test_options_reach_the_engine(self):
        """Options are forwarded to composition."""
        options = {"intensity": 10, "base_size": 20}
        result = style_words("<p>wave</p>", ["wave"], {"size": "wave"}, options)
        assert result == "<p>" + compose("wave", {"size": "wave"}, options) + "</p>"


class TestPatchWords:
    """Matching rules shared by every patch operation."""

    def test_first_occurrence_only(self):
        """Later occurrences are left alone."""
        assert patch_words("fox fox fox", {"fox": "FOX"}) == "FOX fox fox"

    def test_whole_words_only(self):
        """A short word does not match inside a longer one."""
        assert patch_words("category cat", {"cat": "[cat]"}) == "category [cat]"

    def test_longest_word_first(self):
        """cat/category both resolve regardless of input order."""
        result = patch_words("cat category", {"cat": "<b>cat</b>", "category": "<i>category</i>"})
        assert result == "<b>cat</b> <i>category</i>"

    def test_category_before_cat(self):
        """category is patched first and cat finds its own occurrence."""
        result = patch_words(
            "the category is about a cat", {"cat": "<b>cat</b>", "category": "<i>category</i>"}
        )
        assert result == "the <i>category</i> is about a <b>cat</b>"

    def test_replacements_are_protected(self):
        """A shorter word never matches inside an earlier replacement."""
        result = patch_words(
            "The quick brown fox",
            {"brown": "[brown]", "quick brown": "quick brown fox-colored"},
        )
        assert result == "The quick brown fox-colored fox"

    def test_protection_skips_to_next_occurrence(self):
        """A word inside a replacement matches its next free occurrence."""
        result = patch_words("red apple, red car", {"red apple": "RA", "red": "R"})
        assert result == "RA, R car"

    def test_tags_and_attributes_never_match(self):
        """Only character data is searched."""
        markup = '<span style="color: red;" title="red">red</span>'
        assert patch_words(markup, {"red": "RED"}) == (
            '<span style="color: red;" title="red">RED</span>'
        )

    def test_comments_are_skipped(self):
        """Comment bodies are treated as tags."""
        assert patch_words("<!-- fox --> fox", {"fox": "F"}) == "<!-- fox --> F"

    def test_escaped_characters(self):
        """Words are matched against the decoded text."""
        assert patch_words("<p>Our R&amp;D team</p>", {"R&D": "<b>R&amp;D</b>"}) == (
            "<p>Our <b>R&amp;D</b> team</p>"
        )

    @pytest.mark.parametrize(
        ("markup", "word", "expected"),
        [
            ("Tom &amp; Jerry amp up", "amp", "Tom &amp; Jerry A up"),
            ("more&nbsp;nbsp", "nbsp", "more&nbsp;A"),
            ("&#38; 38", "38", "&#38; A"),
            ("&#x27;x27", "x27", "&#x27;A"),
        ],
    )
    def test_character_references_never_match(self, markup, word, expected):
        """A word equal to a reference name patches the real word, not the reference."""
        assert patch_words(markup, {word: "A"}) == expected

    def test_styling_keeps_entities_intact(self):
        """Composed markup with escaped text survives patching a reference-like word."""
        text = "Tom & Jerry amp up"
        markup = compose(text, {})
        result = style_words(markup, ["amp"], {"color": "flame"})
        assert result.startswith("Tom &amp; Jerry " + compose("amp", {"color": "flame"}))
        assert result.count("&amp;") == markup.count("&amp;")
        assert extract_text(result) == text

    def test_word_split_by_tag_is_not_found(self, caplog):
        """Words are only matched within one text run."""
        with caplog.at_level(logging.DEBUG, logger="mailfx.core.patching.applier"):
            assert patch_words("qu<b>ick</b>", {"quick": "Q"}) == "qu<b>ick</b>"
        assert "not found" in caplog.text

    @pytest.mark.parametrize("markup", ["", "no match here"])
    def test_missing_word_leaves_markup_unchanged(self, markup):
        """Absent words are a no-op."""
        assert patch_words(markup, {"zebra": "Z"}) == markup

    def test_non_ascii_word_boundaries(self):
        """Accented letters count as word characters."""
        assert patch_words("été étés", {"été": "E"}) == "E étés"


class TestEmojis:
    """Emoji insertion and mixed batches."""

    def test_insert_emojis(self):
        """The emoji follows the word after one space."""
        result = insert_emojis(
            SENTENCE,
            [WordSelection(word="fox", emoji="🦊"), WordSelection(word="dog", emoji="🐶")],
        )
        assert result == "<p>The quick brown fox 🦊 jumps over the lazy dog 🐶</p>"

    def test_selections_without_emoji_are_skipped(self):
        """insert_emojis ignores entries with no emoji."""
        assert insert_emojis(SENTENCE, [WordSelection(word="fox")]) == SENTENCE

    def test_emoji_after_escaped_word(self):
        """The word keeps its escaped form."""
        result = insert_emojis("Tom &amp; Jerry", [WordSelection(word="&", emoji="➕")])
        assert result == "Tom &amp; ➕ Jerry"

    def test_emoji_after_word_next_to_nbsp(self):
        """The emoji lands after the word, never inside the reference."""
        result = insert_emojis("more&nbsp;nbsp", [WordSelection(word="nbsp", emoji="☕")])
        assert result == "more&nbsp;nbsp ☕"

    def test_mixed_batch(self):
        """Emoji entries get an emoji, the rest are styled, in one pass."""
        selections = [
            WordSelection(word="fox", emoji="🦊"),
            WordSelection(word="lazy"),
            WordSelection(word="fox"),
        ]
        result = apply_word_selections(SENTENCE, selections, RAINBOW)
        assert result == (
            "<p>The quick brown fox 🦊 jumps over the "
            + compose("lazy", RAINBOW)
            + " dog</p>"
        )

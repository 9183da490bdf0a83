"""Parsing and validation of model responses."""

from __future__ import annotations

import json
import logging

import emoji
import regex

from mailfx.core.effects.curves import round_half_up

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()

# A lone code point counts only when it shows as emoji by default (not ™, ↔ or ©).
_EMOJI_PRESENTATION_RE = regex.compile(r"\p{Emoji_Presentation}")
_TEXT_PRESENTATION_SELECTOR = "\ufe0e"


def count_words(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


def target_word_count(text: str, density_percent: float) -> int:
    """Words to request for a density percentage (clamped to [0, 100]); at least 1."""
    density = min(100.0, max(0.0, float(density_percent)))
    return max(1, round_half_up(count_words(text) * density / 100))


def _first_json_array(response: str) -> list | None:
    start = response.find("[")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(response, start)
        except ValueError:
            value = None
        if isinstance(value, list):
            return value
        start = response.find("[", start + 1)
    return None


def parse_word_list(response: str, source_text: str) -> list[str]:
    """Extract the valid words from a model response.

    Takes the first well-formed JSON array in the response. Entries that are
    not strings, are empty, or do not occur verbatim in ``source_text`` are
    dropped, as are duplicates (first occurrence wins).

    Returns:
        Valid words in response order; empty when nothing usable was found
    """
    array = _first_json_array(response or "")
    if array is None:
        logger.debug("No JSON array in model response")
        return []

    words: list[str] = []
    seen: set[str] = set()
    for entry in array:
        if not isinstance(entry, str):
            continue
        word = entry.strip()
        if not word or word in seen or word not in source_text:
            continue
        seen.add(word)
        words.append(word)

    if len(words) < len(array):
        logger.debug(f"Discarded {len(array) - len(words)} invalid words from model response")
    return words


def _shows_as_emoji(candidate: str) -> bool:
    if _TEXT_PRESENTATION_SELECTOR in candidate:
        return False
    if len(candidate) > 1:
        return True
    return _EMOJI_PRESENTATION_RE.fullmatch(candidate) is not None


def extract_first_emoji(response: str) -> str | None:
    """First emoji grapheme in the response, or None.

    Sequences (FE0F, keycap, ZWJ, flags, skin tones) are accepted whole; text
    symbols that only have an optional emoji form are skipped.
    """
    for match in emoji.emoji_list(response or ""):
        candidate = match["emoji"]
        if _shows_as_emoji(candidate):
            return candidate
    return None

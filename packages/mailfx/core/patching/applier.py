"""Text-anchored patching of existing markup.

Words chosen by the AI adapter are located in the text runs of a markup
document and replaced in place, either by a composed fragment or by the
word followed by an emoji. Each word is patched at its first occurrence
only. Replaced regions become protected, so a later (shorter) word never
matches inside an earlier replacement.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import html
import logging
import re

from mailfx.core.ai.models import WordSelection
from mailfx.core.composition.engine import (
    CompositionEngine,
    OptionsLike,
    SelectionLike,
    compose,
)
from mailfx.core.composition.markup import escape_text
from mailfx.core.patching.tokenizer import (
    Token,
    TokenKind,
    render_tokens,
    tokenize_markup,
    tokenize_text,
)

logger = logging.getLogger(__name__)


def _word_pattern(word: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(word)}(?!\w)")


def _longest_first(words: Iterable[str]) -> list[str]:
    unique = list(dict.fromkeys(w for w in words if w and w.strip()))
    return sorted(unique, key=len, reverse=True)


def _is_character_data(token: Token) -> bool:
    return token.kind in (TokenKind.TEXT, TokenKind.ENTITY)


def _segments(tokens: list[Token]) -> Iterator[tuple[int, int]]:
    """(start, end) index ranges of consecutive text and character reference runs."""
    idx = 0
    while idx < len(tokens):
        if not _is_character_data(tokens[idx]):
            idx += 1
            continue
        start = idx
        while idx < len(tokens) and _is_character_data(tokens[idx]):
            idx += 1
        yield start, idx


def _units(tokens: list[Token]) -> list[tuple[str, str]]:
    """(raw, decoded) pairs: one per character of a text run, one per reference."""
    units: list[tuple[str, str]] = []
    for token in tokens:
        if token.kind is TokenKind.ENTITY:
            units.append((token.value, html.unescape(token.value)))
        else:
            units.extend((ch, ch) for ch in token.value)
    return units


def _find(pattern: re.Pattern[str], units: list[tuple[str, str]]) -> tuple[int, int] | None:
    """Unit range of the first match that starts and ends on unit boundaries."""
    offsets = [0]
    for _, decoded in units:
        offsets.append(offsets[-1] + len(decoded))
    boundaries = {offset: i for i, offset in enumerate(offsets)}
    decoded_text = "".join(decoded for _, decoded in units)
    for match in pattern.finditer(decoded_text):
        start = boundaries.get(match.start())
        end = boundaries.get(match.end())
        if start is not None and end is not None:
            return start, end
    return None


def _patch_first(tokens: list[Token], word: str, replacement: str) -> bool:
    """Replace the first occurrence of word in character data; False when absent.

    Matching runs on decoded text, so a word never matches inside a character
    reference while ``R&D`` still matches ``R&amp;D``.
    """
    pattern = _word_pattern(word)
    for start, end in _segments(tokens):
        units = _units(tokens[start:end])
        found = _find(pattern, units)
        if found is None:
            continue
        before = "".join(raw for raw, _ in units[: found[0]])
        after = "".join(raw for raw, _ in units[found[1] :])
        tokens[start:end] = [
            *tokenize_text(before),
            Token(TokenKind.PROTECTED, replacement),
            *tokenize_text(after),
        ]
        return True
    return False


def patch_words(markup: str, replacements: dict[str, str]) -> str:
    """Apply word -> replacement markup, longest word first.

    Args:
        markup: Existing markup document or fragment
        replacements: Raw word to the markup that should replace it

    Returns:
        Patched markup; words not found leave the markup untouched
    """
    tokens = tokenize_markup(markup)
    for word in _longest_first(replacements):
        if not _patch_first(tokens, word, replacements[word]):
            logger.debug(f"Word not found in markup, skipped: {word!r}")
    return render_tokens(tokens)


def style_words(
    markup: str,
    words: Sequence[str],
    selection: SelectionLike,
    options: OptionsLike = None,
    *,
    engine: CompositionEngine | None = None,
) -> str:
    """Replace each word's first occurrence with its composed fragment."""
    render = engine.compose if engine is not None else compose
    return patch_words(markup, {w: render(w, selection, options) for w in words})


def _with_emoji(word: str, emoji: str) -> str:
    return f"{escape_text(word)} {escape_text(emoji)}"


def insert_emojis(markup: str, selections: Sequence[WordSelection]) -> str:
    """Append each selection's emoji after its word (selections without one are skipped)."""
    return patch_words(
        markup, {s.word: _with_emoji(s.word, s.emoji) for s in selections if s.emoji}
    )


def apply_word_selections(
    markup: str,
    selections: Sequence[WordSelection],
    selection: SelectionLike,
    options: OptionsLike = None,
    *,
    engine: CompositionEngine | None = None,
) -> str:
    """Patch a mixed batch: emoji entries get an emoji, the others get styled.

    Both kinds share one pass, so the longest-first ordering and protected
    regions hold across the whole batch.
    """
    render = engine.compose if engine is not None else compose
    replacements: dict[str, str] = {}
    for item in selections:
        if item.word in replacements:
            continue
        if item.emoji:
            replacements[item.word] = _with_emoji(item.word, item.emoji)
        else:
            replacements[item.word] = render(item.word, selection, options)
    return patch_words(markup, replacements)

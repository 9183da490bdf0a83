"""Unicode-aware character splitting.

Python strings index by code point; user-perceived characters can span
several (emoji ZWJ sequences, flags, skin-tone modifiers, combining accents,
conjoining Hangul jamo, Indic conjuncts). Composition styles one span per
perceived character, so splitting follows the extended grapheme cluster
rules of UAX #29.
"""

from __future__ import annotations

import regex

_GRAPHEME_RE = regex.compile(r"\X")


def split_graphemes(text: str) -> list[str]:
    """Split text into perceived characters.

    Args:
        text: Input text

    Returns:
        Extended grapheme clusters in original order; "".join(result) == text
    """
    return _GRAPHEME_RE.findall(text)


def is_space(cluster: str) -> bool:
    """Whitespace clusters pass through composition unstyled and uncounted."""
    return cluster.isspace()


def count_non_space(clusters: list[str]) -> int:
    return sum(1 for cluster in clusters if not is_space(cluster))

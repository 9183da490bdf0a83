"""Markup tokenization into tag runs and text runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import html
import re

from mailfx.core.composition.markup import DECORATION_ATTR

_TAG_RE = re.compile(r"<!--.*?-->|<[^<>]*>", re.DOTALL)
_ENTITY_RE = re.compile(r"&(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);")
_DECORATION_OPEN_RE = re.compile(
    rf"""^<span\b[^>]*\b{re.escape(DECORATION_ATTR)}\s*=\s*["']?true["']?""", re.IGNORECASE
)
_SPAN_OPEN_RE = re.compile(r"^<span\b", re.IGNORECASE)
_SPAN_CLOSE_RE = re.compile(r"^</span\s*>$", re.IGNORECASE)
_LINE_BREAK_RE = re.compile(r"^<br\b[^>]*>$", re.IGNORECASE)


class TokenKind(str, Enum):
    """Kind of markup run."""

    TEXT = "text"
    TAG = "tag"
    ENTITY = "entity"
    PROTECTED = "protected"


@dataclass(frozen=True)
class Token:
    """A contiguous run of markup.

    TEXT runs are escaped character data and the only runs words may match
    in. ENTITY runs hold one character reference such as ``&amp;``.
    PROTECTED runs are replacements already made; they are emitted as-is.
    """

    kind: TokenKind
    value: str

    @property
    def is_text(self) -> bool:
        return self.kind is TokenKind.TEXT


def _split_runs(text: str, pattern: re.Pattern[str], kind: TokenKind) -> list[Token]:
    runs: list[Token] = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() > pos:
            runs.append(Token(TokenKind.TEXT, text[pos : match.start()]))
        runs.append(Token(kind, match.group()))
        pos = match.end()
    if pos < len(text):
        runs.append(Token(TokenKind.TEXT, text[pos:]))
    return runs


def tokenize_markup(markup: str) -> list[Token]:
    """Split markup into tag, character reference and text runs (empty runs dropped)."""
    tokens: list[Token] = []
    for run in _split_runs(markup, _TAG_RE, TokenKind.TAG):
        if run.is_text:
            tokens.extend(tokenize_text(run.value))
        else:
            tokens.append(run)
    return tokens


def tokenize_text(text: str) -> list[Token]:
    """Split a run of character data into text and character reference runs."""
    return _split_runs(text, _ENTITY_RE, TokenKind.ENTITY)


def render_tokens(tokens: list[Token]) -> str:
    return "".join(t.value for t in tokens)


def _drop_decorations(tokens: list[Token]) -> list[Token]:
    kept: list[Token] = []
    depth = 0
    for token in tokens:
        if depth:
            if token.kind is TokenKind.TAG:
                if _SPAN_OPEN_RE.match(token.value):
                    depth += 1
                elif _SPAN_CLOSE_RE.match(token.value):
                    depth -= 1
            continue
        if token.kind is TokenKind.TAG and _DECORATION_OPEN_RE.match(token.value):
            depth = 1
            continue
        kept.append(token)
    return kept


def strip_decorations(markup: str) -> str:
    """Remove every decoration span, nested content included."""
    return render_tokens(_drop_decorations(tokenize_markup(markup)))


def extract_text(markup: str) -> str:
    """Plain text of markup: decorations removed, tags dropped, entities unescaped.

    ``<br>`` becomes a newline.
    """
    parts: list[str] = []
    for token in _drop_decorations(tokenize_markup(markup)):
        if token.kind in (TokenKind.TEXT, TokenKind.ENTITY):
            parts.append(token.value)
        elif _LINE_BREAK_RE.match(token.value):
            parts.append("\n")
    return html.unescape("".join(parts))

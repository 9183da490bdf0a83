"""Text-anchored patching of existing markup."""

from mailfx.core.patching.applier import (
    apply_word_selections,
    insert_emojis,
    patch_words,
    style_words,
)
from mailfx.core.patching.tokenizer import (
    Token,
    TokenKind,
    extract_text,
    render_tokens,
    strip_decorations,
    tokenize_markup,
)

__all__ = [
    "Token",
    "TokenKind",
    "apply_word_selections",
    "extract_text",
    "insert_emojis",
    "patch_words",
    "render_tokens",
    "strip_decorations",
    "style_words",
    "tokenize_markup",
]

"""AI-assisted word and emoji selection.

The adapter itself lives in ``mailfx.core.ai.adapter`` (``AIAdapter``,
``create_adapter``); this package root exports the leaf modules only.
"""

from mailfx.core.ai.cache import ModelCache
from mailfx.core.ai.errors import (
    AIServiceError,
    AllModelsFailedError,
    ModelUnavailableError,
    QuotaExceededError,
    TransportError,
)
from mailfx.core.ai.models import (
    EmojiSelectionResult,
    ModelDescriptor,
    WordSelection,
    WordSelectionResult,
)
from mailfx.core.ai.parsing import (
    count_words,
    extract_first_emoji,
    parse_word_list,
    target_word_count,
)
from mailfx.core.ai.ranking import (
    DEFAULT_EXCLUDED_PATTERNS,
    is_text_model,
    rank_models,
    score_model,
)

__all__ = [
    "DEFAULT_EXCLUDED_PATTERNS",
    "AIServiceError",
    "AllModelsFailedError",
    "EmojiSelectionResult",
    "ModelCache",
    "ModelDescriptor",
    "ModelUnavailableError",
    "QuotaExceededError",
    "TransportError",
    "WordSelection",
    "WordSelectionResult",
    "count_words",
    "extract_first_emoji",
    "is_text_model",
    "parse_word_list",
    "rank_models",
    "score_model",
    "target_word_count",
]

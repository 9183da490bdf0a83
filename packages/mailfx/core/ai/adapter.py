"""Model-ranked AI adapter.

Picks words to color and emoji to insert by asking Gemini models in quality
order. Each task tries one model at a time: a quota rejection moves on to
the next model, and so does an answer with nothing usable in it. Any other
failure propagates to the caller immediately.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging
from typing import Self, TypeVar

import httpx

from mailfx.core.ai.cache import ModelCache
from mailfx.core.ai.errors import (
    AIServiceError,
    AllModelsFailedError,
    ModelUnavailableError,
    QuotaExceededError,
)
from mailfx.core.ai.models import EmojiSelectionResult, ModelDescriptor, WordSelectionResult
from mailfx.core.ai.parsing import extract_first_emoji, parse_word_list, target_word_count
from mailfx.core.ai.prompts.loader import PromptPackLoader
from mailfx.core.ai.ranking import is_text_model, rank_models
from mailfx.core.api.http.auth import ApiKeyAuth
from mailfx.core.api.http.client import AsyncApiClient
from mailfx.core.api.http.config import HttpClientConfig
from mailfx.core.api.llm.gemini.client import API_KEY_HEADER, GeminiClient
from mailfx.core.config.models import AIConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORD_SELECTION_PACK = "word_selection"
EMOJI_SELECTION_PACK = "emoji_selection"


class AIAdapter:
    """Word and emoji selection backed by ranked Gemini models.

    Args:
        client: Gemini client used for listing and generation
        cache: Model cache (a fresh one is created when omitted)
        config: AI settings (temperature, token cap, exclusions)
        prompt_loader: Prompt pack loader (bundled packs when omitted)

    Example:
        >>> async with create_adapter(api_key) as adapter:
        ...     result = await adapter.select_words_for_coloring("Happy birthday Anna!")
        ...     print(result.words, result.model_used)
    """

    def __init__(
        self,
        client: GeminiClient,
        cache: ModelCache | None = None,
        config: AIConfig | None = None,
        prompt_loader: PromptPackLoader | None = None,
    ) -> None:
        self.client = client
        self.cache = cache or ModelCache()
        self.config = config or AIConfig()
        self.prompt_loader = prompt_loader or PromptPackLoader()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def invalidate_cache(self) -> None:
        """Forget the ranked model list (call after changing credentials)."""
        self.cache.invalidate()

    async def ranked_models(self) -> list[ModelDescriptor]:
        """Compatible models best first, listed once and then served from cache."""
        cached = self.cache.get()
        if cached is not None:
            return cached

        remote = await self.client.list_models()
        names = [
            m.short_name
            for m in remote
            if is_text_model(m, self.config.excluded_model_patterns)
        ]
        ranked = rank_models(names)
        logger.info(f"Discovered {len(ranked)} compatible models out of {len(remote)}")
        self.cache.store(ranked)
        return ranked

    async def list_models(self) -> list[str]:
        """Names of compatible models, best first."""
        return [d.name for d in await self.ranked_models()]

    async def _run_with_fallback(
        self,
        task: str,
        prompts: dict[str, str],
        extract: Callable[[str], T | None],
    ) -> tuple[T, str]:
        models = await self.list_models()
        if not models:
            raise ModelUnavailableError("No compatible models available")

        last_error: AIServiceError | None = None
        for model in models:
            try:
                text = await self.client.generate_content(
                    model,
                    prompts["user"],
                    system_prompt=prompts.get("system"),
                    temperature=self.config.temperature,
                    max_output_tokens=self.config.max_output_tokens,
                )
            except QuotaExceededError as e:
                logger.warning(f"Model {model} quota exceeded, trying next...")
                last_error = e
                continue

            value = extract(text)
            if value:
                logger.info(f"{task}: answered by {model}")
                return value, model
            logger.info(f"{task}: model {model} gave no usable answer, trying next...")

        if last_error is not None:
            raise last_error
        raise AllModelsFailedError(f"All models failed for {task}", attempted=models)

    async def select_words_for_coloring(
        self, text: str, density_percent: float | None = None
    ) -> WordSelectionResult:
        """Ask for the most significant words of ``text``.

        Args:
            text: Plain text to analyze
            density_percent: Share of words to request, 0-100 (advisory).
                Defaults to the configured density.

        Returns:
            Words that occur verbatim in ``text``, and the model that chose them

        Raises:
            ModelUnavailableError: No compatible models
            QuotaExceededError: Every model was over quota
            AllModelsFailedError: No model produced a usable answer
            TransportError: Any non-quota service failure
        """
        if not text or not text.strip():
            return WordSelectionResult()

        density = self.config.default_density if density_percent is None else density_percent
        prompts = self.prompt_loader.load_and_render(
            WORD_SELECTION_PACK,
            {"text": text, "target_count": target_word_count(text, density)},
        )
        words, model = await self._run_with_fallback(
            "word selection", prompts, lambda response: parse_word_list(response, text)
        )
        return WordSelectionResult(words=words, model_used=model)

    async def select_emoji_for_text(self, text: str) -> EmojiSelectionResult:
        """Ask for one emoji that fits ``text``.

        Raises:
            Same as select_words_for_coloring
        """
        if not text or not text.strip():
            return EmojiSelectionResult()

        prompts = self.prompt_loader.load_and_render(EMOJI_SELECTION_PACK, {"text": text})
        found, model = await self._run_with_fallback(
            "emoji selection", prompts, extract_first_emoji
        )
        return EmojiSelectionResult(emoji=found, model_used=model)


def create_adapter(
    api_key: str,
    config: AIConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AIAdapter:
    """Build an adapter with its HTTP client, key auth and Gemini client.

    Args:
        api_key: Gemini API key, sent in the x-goog-api-key header
        config: AI settings (defaults when omitted)
        transport: Optional custom transport (useful for testing)

    Raises:
        ValueError: If api_key is empty
    """
    if not api_key:
        raise ValueError("Gemini API key is required")

    config = config or AIConfig()
    http_config = HttpClientConfig(
        base_url=config.base_url,
        timeout=httpx.Timeout(config.timeout_seconds, connect=5.0),
    )
    http_client = AsyncApiClient(
        http_config,
        auth=ApiKeyAuth(header_name=API_KEY_HEADER, api_key=api_key),
        transport=transport,
    )
    return AIAdapter(GeminiClient(http_client), config=config)

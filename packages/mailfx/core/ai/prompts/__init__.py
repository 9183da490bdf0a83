"""Prompt packs and rendering for the AI adapter."""

from mailfx.core.ai.prompts.loader import PROMPTS_BASE_PATH, LoadError, PromptPackLoader
from mailfx.core.ai.prompts.renderer import PromptRenderer, RenderError

__all__ = [
    "PROMPTS_BASE_PATH",
    "LoadError",
    "PromptPackLoader",
    "PromptRenderer",
    "RenderError",
]

"""Prompt pack loader."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mailfx.core.ai.prompts.renderer import PromptRenderer

logger = logging.getLogger(__name__)

PROMPTS_BASE_PATH: Path = Path(__file__).resolve().parent
"""Directory holding the bundled prompt packs."""


class LoadError(Exception):
    """Raised when prompt pack loading fails."""

    pass


class PromptPackLoader:
    """Loads prompt packs from filesystem.

    Prompt Pack Structure:
        pack_name/
        ├── system.j2            # Required: System prompt
        └── user.j2              # Required: User message template

    Loaded templates are kept in memory; packs are read once per loader.
    """

    def __init__(self, base_path: str | Path = PROMPTS_BASE_PATH):
        self.base_path = Path(base_path)
        self.renderer = PromptRenderer()
        self._cache: dict[str, dict[str, str]] = {}

        logger.debug(f"PromptPackLoader initialized: base_path={self.base_path}")

    def load(self, pack_name: str) -> dict[str, str]:
        """Load prompt pack (templates not rendered).

        Args:
            pack_name: Name of the prompt pack directory

        Returns:
            Dict with "system" and "user" template strings

        Raises:
            LoadError: If pack doesn't exist or required files missing
        """
        if pack_name in self._cache:
            return self._cache[pack_name]

        pack_dir = self.base_path / pack_name
        if not pack_dir.is_dir():
            raise LoadError(f"Prompt pack '{pack_name}' does not exist at {pack_dir}")

        prompts: dict[str, str] = {}
        for part in ("system", "user"):
            path = pack_dir / f"{part}.j2"
            if not path.exists():
                raise LoadError(f"Prompt pack '{pack_name}' missing required {part}.j2 at {path}")
            prompts[part] = path.read_text(encoding="utf-8")

        logger.debug(f"Loaded prompt pack '{pack_name}': {list(prompts.keys())}")
        self._cache[pack_name] = prompts
        return prompts

    def load_and_render(self, pack_name: str, variables: dict[str, Any]) -> dict[str, str]:
        """Load and render prompt pack with variables.

        Raises:
            LoadError: If loading fails
            RenderError: If rendering fails
        """
        prompts = self.load(pack_name)
        return {part: self.renderer.render(tpl, variables) for part, tpl in prompts.items()}

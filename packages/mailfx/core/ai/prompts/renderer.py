"""Prompt template rendering with Jinja2."""

from __future__ import annotations

import logging
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError

logger = logging.getLogger(__name__)


class RenderError(Exception):
    """Raised when template rendering fails."""

    pass


class PromptRenderer:
    """Renders prompt templates using Jinja2.

    Runs in strict mode (StrictUndefined): a missing variable fails the
    render instead of leaving a blank in the prompt.
    """

    def __init__(self) -> None:
        self.env = Environment(undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True)
        logger.debug("PromptRenderer initialized")

    def render(self, template: str, variables: dict[str, Any]) -> str:
        """Render template with variables.

        Args:
            template: Template string (Jinja2 format)
            variables: Variables for template rendering

        Returns:
            Rendered template string, stripped of surrounding whitespace

        Raises:
            RenderError: If rendering fails (missing variables, syntax errors)
        """
        try:
            return self.env.from_string(template).render(**variables).strip()
        except UndefinedError as e:
            raise RenderError(f"Missing variable in template: {e}") from e
        except TemplateSyntaxError as e:
            raise RenderError(f"Invalid template syntax: {e}") from e


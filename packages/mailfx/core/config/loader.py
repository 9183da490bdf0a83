"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from mailfx.core.config.models import AppConfig
from mailfx.core.utils.logging import configure_logging

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "GEMINI_API_KEY"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("mailfx.json")
        'json'
        >>> detect_format("mailfx.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    if suffix == ".json":
        return "json"
    elif suffix in (".yaml", ".yml"):
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary (empty for an empty YAML file)

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)
    text = path.read_text(encoding="utf-8")

    if fmt == "json":
        try:
            content = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root in {path} must be a mapping, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    A missing file yields the defaults. The API key is read from the
    GEMINI_API_KEY environment variable when the file does not set one.

    Args:
        path: Path to app config file; defaults to AppConfig.default_path()

    Raises:
        ValidationError: If config is invalid
        ValueError: If the file cannot be parsed
    """
    explicit = path is not None
    config_path = Path(path) if path is not None else AppConfig.default_path()

    if config_path.exists():
        config = AppConfig.model_validate(load_config(config_path))
        logger.debug(f"Loaded config from {config_path}")
    elif explicit:
        raise FileNotFoundError(f"Config file does not exist: {config_path}")
    else:
        config = AppConfig()

    return _load_env_vars_into_config(config)


def _load_env_vars_into_config(config: AppConfig) -> AppConfig:
    """Fill the API key from the environment when the config leaves it unset."""
    if config.ai.api_key:
        return config

    api_key = os.getenv(API_KEY_ENV_VAR)
    if not api_key:
        return config

    logger.debug(f"Loaded {API_KEY_ENV_VAR} from environment")
    return config.model_copy(update={"ai": config.ai.model_copy(update={"api_key": api_key})})


def apply_logging_config(config: AppConfig, level: str | None = None) -> None:
    """Configure Python logging from app config, with an optional level override."""
    configure_logging(
        level=level or config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )

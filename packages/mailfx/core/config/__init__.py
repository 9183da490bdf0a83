"""Application configuration."""

from mailfx.core.config.loader import (
    API_KEY_ENV_VAR,
    apply_logging_config,
    detect_format,
    load_app_config,
    load_config,
)
from mailfx.core.config.models import AIConfig, AppConfig, CompositionDefaults, LoggingConfig

__all__ = [
    "API_KEY_ENV_VAR",
    "AIConfig",
    "AppConfig",
    "CompositionDefaults",
    "LoggingConfig",
    "apply_logging_config",
    "detect_format",
    "load_app_config",
    "load_config",
]

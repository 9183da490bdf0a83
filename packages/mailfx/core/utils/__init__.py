"""Shared utilities."""

from mailfx.core.utils.logging import StructuredJSONFormatter, configure_logging

__all__ = ["StructuredJSONFormatter", "configure_logging"]

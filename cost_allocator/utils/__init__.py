"""Utility functions."""

from .helpers import coerce_number, format_currency, format_percentage, load_config, setup_logging

__all__ = ["coerce_number", "format_currency", "format_percentage", "load_config", "setup_logging"]

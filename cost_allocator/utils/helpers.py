"""Utility functions for configuration, logging, and common operations."""

import copy
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    "currency": {
        "base": "BRL",
        "foreign": "USD",
    },
    "exchange_rate": {
        "default": 5.50,
        "api_url": "https://economia.awesomeapi.com.br",
        "pair": "USD-BRL",
        "timeout": 10,
        "max_retries": 3,
        "fetch_on_start": True,
    },
    "allocation": {
        "mode": "percentage",
        "target_users": 50,
        "target_percentage": 8.0,
    },
    "costs": [
        {"name": "Railway Subscription", "amount": 20.0, "currency": "USD"},
        {"name": "Apple Developer Fees", "amount": 20.0, "currency": "USD"},
        {"name": "Hostinger Temporary VPS", "amount": 109.99, "currency": "BRL"},
    ],
    "export": {
        "filename": "cost-report.xlsx",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the main configuration file.

    Values from the file are merged over the built-in defaults, so a
    partial file only needs the keys it changes.

    Args:
        config_path: Optional path to config file. If not provided,
                     uses default config/config.yaml

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    if config_path is None:
        path = get_project_root() / "config" / "config.yaml"
        if not path.exists():
            return copy.deepcopy(DEFAULT_CONFIG)
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    return _merge(DEFAULT_CONFIG, loaded)


def setup_logging(
    level: str = "INFO",
    log_format: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Optional custom log format
        log_file: Optional log file path

    Returns:
        Configured logger
    """
    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logger = logging.getLogger("cost_allocator")
    logger.setLevel(getattr(logging, level.upper()))

    # Replace handlers from earlier calls
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    return logger


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Coerce user input into a float.

    Blank, missing, unparseable and non-finite (NaN, infinity) values
    become ``default``. Decimal commas ("109,99") are accepted.

    Examples:
        >>> coerce_number("109,99")
        109.99
        >>> coerce_number("")
        0.0
    """
    if value is None or isinstance(value, bool):
        return default
    if not isinstance(value, (int, float)):
        value = str(value).strip()
        if "," in value and "." not in value:
            value = value.replace(",", ".")

    try:
        number = float(value)
    except (OverflowError, ValueError):
        return default

    if not math.isfinite(number):
        return default
    return number


def format_currency(amount: float, currency: str = "BRL") -> str:
    """Format a number as currency.

    BRL uses the Brazilian convention (``R$ 1.234,56``); USD uses
    ``US$ 1,234.56``.

    Args:
        amount: Amount to format
        currency: Currency code (default BRL)

    Returns:
        Formatted currency string
    """
    if currency == "BRL":
        formatted = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
        sign = "-" if amount < 0 else ""
        return f"{sign}R$ {formatted}"
    if currency == "USD":
        sign = "-" if amount < 0 else ""
        return f"{sign}US$ {abs(amount):,.2f}"
    return f"{amount:,.2f} {currency}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a fraction (0-1) as a percentage string.

    Args:
        value: Fraction to format
        decimals: Number of decimal places

    Returns:
        Formatted percentage string
    """
    return f"{value * 100:.{decimals}f}%"

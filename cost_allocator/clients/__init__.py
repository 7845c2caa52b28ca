"""API client modules."""

from .exchange_rate_client import ExchangeRateClient, ExchangeRateError

__all__ = ["ExchangeRateClient", "ExchangeRateError"]

"""Session state for the calculator.

A CostSession owns the mutable inputs (entries, exchange rate, allocation
settings) and hands immutable snapshots of them to the AllocationEngine
whenever a result is needed.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .clients.exchange_rate_client import ExchangeRateClient, ExchangeRateError
from .cost.allocation import AllocationEngine, AllocationResult
from .cost.ledger import CostLedger
from .cost.models import AllocationMode, AllocationSettings, CostEntry
from .utils.helpers import DEFAULT_CONFIG, coerce_number

logger = logging.getLogger(__name__)


class CostSession:
    """Owns calculator state and recomputes results on demand."""

    def __init__(
        self,
        entries: Optional[List[CostEntry]] = None,
        exchange_rate: float = 5.50,
        settings: Optional[AllocationSettings] = None,
        engine: Optional[AllocationEngine] = None
    ):
        """Initialize the session.

        Args:
            entries: Starting cost entries
            exchange_rate: BRL per USD
            settings: Allocation mode and targets
            engine: Engine used for calculations
        """
        self.ledger = CostLedger(entries)
        self.exchange_rate = exchange_rate
        self.settings = settings or AllocationSettings()
        self.engine = engine or AllocationEngine()
        self.last_rate_error: Optional[str] = None

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "CostSession":
        """Build a session seeded from configuration.

        Args:
            config: Configuration dictionary (see load_config)

        Returns:
            CostSession with the configured starting costs, rate and targets
        """
        config = config or DEFAULT_CONFIG
        entries = [CostEntry.from_dict(item) for item in config.get("costs", [])]
        rate = coerce_number(
            config.get("exchange_rate", {}).get("default"),
            DEFAULT_CONFIG["exchange_rate"]["default"]
        )
        settings = AllocationSettings.from_dict(config.get("allocation", {}))
        return cls(entries=entries, exchange_rate=rate, settings=settings)

    def set_exchange_rate(self, value: Any) -> None:
        """Replace the exchange rate with a manually entered value."""
        self.exchange_rate = coerce_number(value)

    def set_mode(self, mode: Union[AllocationMode, str]) -> None:
        """Switch allocation mode. Both targets are kept."""
        self.settings.mode = AllocationMode(mode)

    def set_target_users(self, value: Any) -> None:
        self.settings.target_users = int(coerce_number(value))

    def set_target_percentage(self, value: Any) -> None:
        self.settings.target_percentage = coerce_number(value)

    def refresh_rate(self, client: ExchangeRateClient) -> bool:
        """Replace the exchange rate with a freshly fetched quote.

        On failure the current rate is left untouched.

        Args:
            client: Quote service client

        Returns:
            True if the rate was updated
        """
        try:
            rate = client.fetch_rate()
        except ExchangeRateError as e:
            logger.warning(f"Keeping exchange rate {self.exchange_rate:.2f}: {e}")
            self.last_rate_error = str(e)
            return False

        self.exchange_rate = rate
        self.last_rate_error = None
        return True

    def calculate(self) -> AllocationResult:
        """Run the allocation engine over the current state."""
        return self.engine.calculate(
            self.ledger.entries,
            self.exchange_rate,
            self.settings.active(),
        )

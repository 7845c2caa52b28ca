"""Currency conversion, aggregation and per-user allocation.

Pure functions over immutable inputs: no I/O, no shared state. Malformed
numbers (NaN, negative amounts) are not rejected and propagate into the
results.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence, Tuple

from .models import (
    AllocationConfig,
    AllocationMode,
    ByPercentage,
    ByUserCount,
    CostEntry,
    FOREIGN_CURRENCY,
)

logger = logging.getLogger(__name__)


def convert_to_base(entry: CostEntry, rate: float) -> float:
    """Convert an entry's amount into the base currency.

    Args:
        entry: Cost entry
        rate: Units of base currency per unit of foreign currency

    Returns:
        Amount in BRL
    """
    if entry.currency is FOREIGN_CURRENCY:
        return entry.amount * rate
    return entry.amount


def total_cost(entries: Iterable[CostEntry], rate: float) -> float:
    """Sum all entries in the base currency. An empty collection totals 0."""
    return sum((convert_to_base(entry, rate) for entry in entries), 0.0)


def share_of(entry: CostEntry, rate: float, total: float) -> float:
    """Fraction of ``total`` contributed by ``entry``, or 0 when total is not positive."""
    if total > 0:
        return convert_to_base(entry, rate) / total
    return 0.0


def per_user_cost(total: float, config: AllocationConfig) -> float:
    """Derive the per-user cost from the total.

    Args:
        total: Total cost in the base currency
        config: Active allocation variant

    Returns:
        ``total / target_users`` for ByUserCount (0 when there are no
        users), ``total * target_percentage / 100`` for ByPercentage

    Raises:
        TypeError: If config is not a known allocation variant
    """
    if isinstance(config, ByUserCount):
        if config.target_users > 0:
            return total / config.target_users
        return 0.0
    if isinstance(config, ByPercentage):
        return total * (config.target_percentage / 100)
    raise TypeError(f"Unknown allocation config: {config!r}")


@dataclass(frozen=True)
class EntryBreakdown:
    """Converted amount and share of a single entry."""

    entry: CostEntry
    converted_amount: float
    share: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.entry.id,
            "name": self.entry.name,
            "currency": self.entry.currency.value,
            "original_amount": self.entry.amount,
            "converted_amount": self.converted_amount,
            "share": self.share,
        }


@dataclass(frozen=True)
class AllocationResult:
    """Everything derived from one set of inputs."""

    exchange_rate: float
    total: float
    config: AllocationConfig
    per_user_cost: float
    breakdown: Tuple[EntryBreakdown, ...]

    @property
    def mode(self) -> AllocationMode:
        return AllocationMode.of(self.config)

    @property
    def share_sum(self) -> float:
        return sum(item.share for item in self.breakdown)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "exchange_rate": self.exchange_rate,
            "total": self.total,
            "mode": self.mode.value,
            "per_user_cost": self.per_user_cost,
            "entries": [item.to_dict() for item in self.breakdown],
        }
        if isinstance(self.config, ByUserCount):
            result["target_users"] = self.config.target_users
        else:
            result["target_percentage"] = self.config.target_percentage
        return result


class AllocationEngine:
    """Compute totals, shares and the per-user cost in one pass.

    Stateless: the caller owns the entries, rate and allocation config
    and calls :meth:`calculate` again whenever any of them changes.
    """

    def calculate(
        self,
        entries: Sequence[CostEntry],
        rate: float,
        config: AllocationConfig
    ) -> AllocationResult:
        """Run the full calculation.

        Args:
            entries: Cost entries in display order
            rate: BRL per USD
            config: Active allocation variant

        Returns:
            AllocationResult with the breakdown in input order
        """
        total = total_cost(entries, rate)

        breakdown = tuple(
            EntryBreakdown(
                entry=entry,
                converted_amount=convert_to_base(entry, rate),
                share=share_of(entry, rate, total),
            )
            for entry in entries
        )

        result = AllocationResult(
            exchange_rate=rate,
            total=total,
            config=config,
            per_user_cost=per_user_cost(total, config),
            breakdown=breakdown,
        )

        logger.debug(
            f"Calculated total {total:.2f} over {len(breakdown)} entries, "
            f"per-user {result.per_user_cost:.4f} ({result.mode.value})"
        )
        return result

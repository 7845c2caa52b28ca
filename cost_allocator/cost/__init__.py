"""Cost allocation modules."""

from .allocation import (
    AllocationEngine,
    AllocationResult,
    EntryBreakdown,
    convert_to_base,
    per_user_cost,
    share_of,
    total_cost,
)
from .ledger import CostLedger
from .models import (
    AllocationConfig,
    AllocationMode,
    AllocationSettings,
    ByPercentage,
    ByUserCount,
    CostEntry,
    Currency,
)

__all__ = [
    "AllocationConfig",
    "AllocationEngine",
    "AllocationMode",
    "AllocationResult",
    "AllocationSettings",
    "ByPercentage",
    "ByUserCount",
    "CostEntry",
    "CostLedger",
    "Currency",
    "EntryBreakdown",
    "convert_to_base",
    "per_user_cost",
    "share_of",
    "total_cost",
]

"""Prepare data for report generation."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from ..cost.allocation import AllocationResult
from ..cost.models import AllocationMode, ByUserCount

logger = logging.getLogger(__name__)

MODE_LABELS = {
    AllocationMode.USERS: "By User Count",
    AllocationMode.PERCENTAGE: "By Percentage of Cost",
}


@dataclass
class CostRow:
    """Report data for a single cost entry."""

    name: str
    currency: str
    original_amount: float
    converted_amount: float
    share: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "currency": self.currency,
            "original_amount": self.original_amount,
            "converted_amount": self.converted_amount,
            "share": self.share,
        }


@dataclass
class CostReport:
    """Complete report data for one calculation."""

    generated_at: datetime
    exchange_rate: float
    total: float
    mode: AllocationMode
    per_user_cost: float
    target_users: Optional[int] = None
    target_percentage: Optional[float] = None
    rows: List[CostRow] = field(default_factory=list)

    @property
    def mode_label(self) -> str:
        return MODE_LABELS[self.mode]

    def summary(self) -> Dict[str, Any]:
        """Summary values without the per-entry rows."""
        summary = {
            "generated_at": self.generated_at.strftime("%d/%m/%Y"),
            "exchange_rate": self.exchange_rate,
            "total": self.total,
            "mode": self.mode.value,
            "mode_label": self.mode_label,
            "per_user_cost": self.per_user_cost,
            "entry_count": len(self.rows),
        }
        if self.mode is AllocationMode.USERS:
            summary["target_users"] = self.target_users
        else:
            summary["target_percentage"] = self.target_percentage
        return summary

    def to_dataframe(self) -> pd.DataFrame:
        """Per-entry breakdown as a DataFrame, in entry order."""
        columns = ["name", "currency", "original_amount", "converted_amount", "share"]
        return pd.DataFrame([row.to_dict() for row in self.rows], columns=columns)


class ReportDataBuilder:
    """Build report data from an allocation result."""

    def build(
        self,
        result: AllocationResult,
        generated_at: Optional[datetime] = None
    ) -> CostReport:
        """Flatten an allocation result into report data.

        Args:
            result: Engine output
            generated_at: Report timestamp (default: now)

        Returns:
            CostReport object
        """
        rows = [
            CostRow(
                name=item.entry.name,
                currency=item.entry.currency.value,
                original_amount=item.entry.amount,
                converted_amount=item.converted_amount,
                share=item.share,
            )
            for item in result.breakdown
        ]

        report = CostReport(
            generated_at=generated_at or datetime.now(),
            exchange_rate=result.exchange_rate,
            total=result.total,
            mode=result.mode,
            per_user_cost=result.per_user_cost,
            rows=rows,
        )
        if isinstance(result.config, ByUserCount):
            report.target_users = result.config.target_users
        else:
            report.target_percentage = result.config.target_percentage

        logger.debug(f"Built report with {len(rows)} rows")
        return report

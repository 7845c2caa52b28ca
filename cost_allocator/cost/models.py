"""Data types for cost entries and allocation settings."""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from ..utils.helpers import coerce_number


class Currency(Enum):
    """Currencies a cost entry can be expressed in."""

    BRL = "BRL"  # base
    USD = "USD"  # foreign

    @classmethod
    def parse(cls, value: Union["Currency", str]) -> "Currency":
        """Parse a currency code, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If the code is not one of the supported currencies
        """
        if isinstance(value, cls):
            return value
        code = str(value).strip().upper()
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"Unsupported currency: {value!r}") from None


BASE_CURRENCY = Currency.BRL
FOREIGN_CURRENCY = Currency.USD


def new_entry_id() -> str:
    """Generate a fresh opaque entry identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class CostEntry:
    """A single recurring cost."""

    id: str
    name: str
    amount: float
    currency: Currency = BASE_CURRENCY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "currency": self.currency.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CostEntry":
        """Create an entry from a dictionary.

        Missing ids are generated, amounts are coerced to float and the
        currency defaults to BRL.
        """
        return cls(
            id=str(data.get("id") or new_entry_id()),
            name=str(data.get("name", "")),
            amount=coerce_number(data.get("amount")),
            currency=Currency.parse(data.get("currency") or BASE_CURRENCY),
        )


@dataclass(frozen=True)
class ByUserCount:
    """Split the total evenly across a number of users."""

    target_users: int


@dataclass(frozen=True)
class ByPercentage:
    """Charge each user a percentage of the total."""

    target_percentage: float


AllocationConfig = Union[ByUserCount, ByPercentage]


class AllocationMode(Enum):
    """Strategy for deriving a per-user cost."""

    USERS = "users"
    PERCENTAGE = "percentage"

    @classmethod
    def of(cls, config: AllocationConfig) -> "AllocationMode":
        """Return the mode matching an allocation variant."""
        if isinstance(config, ByUserCount):
            return cls.USERS
        if isinstance(config, ByPercentage):
            return cls.PERCENTAGE
        raise TypeError(f"Unknown allocation config: {config!r}")


@dataclass
class AllocationSettings:
    """Both allocation targets plus the currently selected mode.

    Switching modes keeps the other target so the user can toggle back
    without re-entering it.
    """

    mode: AllocationMode = AllocationMode.PERCENTAGE
    target_users: int = 50
    target_percentage: float = 8.0

    def active(self) -> AllocationConfig:
        """Return the allocation variant for the selected mode."""
        if self.mode is AllocationMode.USERS:
            return ByUserCount(target_users=self.target_users)
        return ByPercentage(target_percentage=self.target_percentage)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "mode": self.mode.value,
            "target_users": self.target_users,
            "target_percentage": self.target_percentage,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AllocationSettings":
        """Create settings from a configuration dictionary."""
        defaults = cls()
        return cls(
            mode=AllocationMode(data.get("mode", defaults.mode.value)),
            target_users=int(coerce_number(data.get("target_users"), defaults.target_users)),
            target_percentage=coerce_number(data.get("target_percentage"), defaults.target_percentage),
        )

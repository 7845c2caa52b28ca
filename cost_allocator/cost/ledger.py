"""In-memory collection of cost entries."""

import dataclasses
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..utils.helpers import coerce_number
from .models import BASE_CURRENCY, CostEntry, Currency, new_entry_id

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_NAME = "New Cost"


class CostLedger:
    """Ordered, id-addressable list of cost entries.

    Entries are immutable; updates replace the entry at the same position.
    Updating or removing an unknown id is a silent no-op.
    """

    EDITABLE_FIELDS = ("name", "amount", "currency")

    def __init__(self, entries: Optional[List[CostEntry]] = None):
        """Initialize the ledger.

        Args:
            entries: Optional starting entries, kept in order
        """
        self._entries: List[CostEntry] = []
        for entry in entries or []:
            self.add_entry(entry)

    @property
    def entries(self) -> Tuple[CostEntry, ...]:
        """Snapshot of the entries in insertion order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CostEntry]:
        return iter(self.entries)

    def _index_of(self, entry_id: str) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return None

    def get(self, entry_id: str) -> Optional[CostEntry]:
        """Return the entry with the given id, or None."""
        index = self._index_of(entry_id)
        return self._entries[index] if index is not None else None

    def add(
        self,
        name: str = DEFAULT_ENTRY_NAME,
        amount: float = 0.0,
        currency: Union[Currency, str] = BASE_CURRENCY
    ) -> CostEntry:
        """Append a new entry with a fresh id.

        Returns:
            The created entry
        """
        entry = CostEntry(
            id=new_entry_id(),
            name=name,
            amount=coerce_number(amount),
            currency=Currency.parse(currency),
        )
        self._entries.append(entry)
        logger.debug(f"Added cost entry {entry.id} ({entry.name})")
        return entry

    def add_entry(self, entry: CostEntry) -> CostEntry:
        """Append an existing entry, re-keying it if its id is taken.

        Returns:
            The stored entry
        """
        if self._index_of(entry.id) is not None:
            entry = dataclasses.replace(entry, id=new_entry_id())
        self._entries.append(entry)
        return entry

    def update(self, entry_id: str, field: str, value: Any) -> bool:
        """Replace a single field of an entry.

        Args:
            entry_id: Id of the entry to change
            field: One of name, amount, currency
            value: New value, coerced to the field's type

        Returns:
            True if an entry was updated, False if the id is unknown

        Raises:
            ValueError: If field is not editable
        """
        if field not in self.EDITABLE_FIELDS:
            raise ValueError(f"Field is not editable: {field!r}")

        index = self._index_of(entry_id)
        if index is None:
            return False

        if field == "amount":
            value = coerce_number(value)
        elif field == "currency":
            value = Currency.parse(value)
        else:
            value = str(value)

        self._entries[index] = dataclasses.replace(self._entries[index], **{field: value})
        logger.debug(f"Updated {field} of cost entry {entry_id}")
        return True

    def remove(self, entry_id: str) -> bool:
        """Delete an entry.

        Returns:
            True if an entry was removed, False if the id is unknown
        """
        index = self._index_of(entry_id)
        if index is None:
            return False
        del self._entries[index]
        logger.debug(f"Removed cost entry {entry_id}")
        return True

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Convert all entries to dictionaries."""
        return [entry.to_dict() for entry in self._entries]

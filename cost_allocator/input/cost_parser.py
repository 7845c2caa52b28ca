"""CSV/Excel input parser for cost lists."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..cost.models import BASE_CURRENCY, CostEntry, Currency, new_entry_id
from ..utils.helpers import coerce_number

logger = logging.getLogger(__name__)


class CostFileParser:
    """Parser for CSV and Excel files containing recurring costs.

    Supports English and Portuguese column names.
    """

    COLUMN_MAPPINGS = {
        "id": ["id", "entry_id", "cost_id"],
        "name": ["name", "cost_name", "description", "item", "service", "nome", "descricao"],
        "amount": ["amount", "cost", "value", "price", "monthly_cost", "valor", "custo"],
        "currency": ["currency", "ccy", "moeda"],
    }

    def __init__(self, file_path: Union[str, Path]):
        """Initialize the parser.

        Args:
            file_path: Path to CSV or Excel file
        """
        self.file_path = Path(file_path)

        if not self.file_path.exists():
            raise FileNotFoundError(f"Input file not found: {self.file_path}")

        self.df: Optional[pd.DataFrame] = None
        self._column_map: Dict[str, str] = {}

    def parse(self, sheet_name: Optional[str] = None) -> List[CostEntry]:
        """Parse the input file.

        Args:
            sheet_name: Sheet name for Excel files (default: first sheet)

        Returns:
            List of cost entries in file order
        """
        suffix = self.file_path.suffix.lower()

        if suffix == ".csv":
            self.df = pd.read_csv(self.file_path)
        elif suffix in [".xlsx", ".xls"]:
            self.df = pd.read_excel(self.file_path, sheet_name=sheet_name or 0)
        else:
            raise ValueError(f"Unsupported file format: {suffix}")

        self.df.columns = [str(c).lower().strip() for c in self.df.columns]
        self._map_columns()

        if "amount" not in self._column_map:
            raise ValueError(f"No amount column found in {self.file_path.name}")

        entries = self._convert_to_entries()

        logger.info(f"Parsed {len(entries)} costs from {self.file_path.name}")
        return entries

    def _map_columns(self) -> None:
        """Map actual column names to standard names."""
        actual_columns = set(self.df.columns)

        for standard_name, variants in self.COLUMN_MAPPINGS.items():
            for variant in variants:
                if variant in actual_columns:
                    self._column_map[standard_name] = variant
                    break

        logger.debug(f"Mapped columns: {self._column_map}")

    def _get_column_value(self, row: pd.Series, standard_name: str) -> Optional[Any]:
        if standard_name in self._column_map:
            value = row.get(self._column_map[standard_name])
            if pd.notna(value) and str(value).strip() != "":
                return value
        return None

    def _parse_currency(self, value: Any, row_num: int) -> Currency:
        if value is None:
            return BASE_CURRENCY
        try:
            return Currency.parse(value)
        except ValueError:
            logger.warning(f"Row {row_num}: unsupported currency {value!r}, using {BASE_CURRENCY.value}")
            return BASE_CURRENCY

    def _convert_to_entries(self) -> List[CostEntry]:
        """Convert DataFrame rows to cost entries.

        Returns:
            List of cost entries
        """
        entries = []
        seen_ids = set()

        for row_num, (_, row) in enumerate(self.df.iterrows(), 2):
            name = self._get_column_value(row, "name")
            raw_amount = self._get_column_value(row, "amount")
            raw_currency = self._get_column_value(row, "currency")

            # Skip fully blank rows
            if name is None and raw_amount is None:
                continue

            amount = coerce_number(raw_amount)
            if raw_amount is not None and amount == 0.0 and str(raw_amount).strip() not in ("0", "0.0", "0,0"):
                logger.warning(f"Row {row_num}: could not parse amount {raw_amount!r}, using 0")

            entry_id = self._get_column_value(row, "id")
            entry_id = str(entry_id).strip() if entry_id is not None else None
            if not entry_id or entry_id in seen_ids:
                entry_id = new_entry_id()
            seen_ids.add(entry_id)

            entries.append(CostEntry(
                id=entry_id,
                name=str(name).strip() if name is not None else "",
                amount=amount,
                currency=self._parse_currency(raw_currency, row_num),
            ))

        return entries


def parse_cost_file(
    file_path: Union[str, Path],
    sheet_name: Optional[str] = None
) -> List[CostEntry]:
    """Convenience function to parse a cost list file.

    Args:
        file_path: Path to CSV or Excel file
        sheet_name: Sheet name for Excel files

    Returns:
        List of cost entries
    """
    parser = CostFileParser(file_path)
    return parser.parse(sheet_name=sheet_name)

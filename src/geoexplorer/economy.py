"""
GDP time-series index.

Parses the wide World Bank style table (one row per country, one column per
year) into per-country year -> value series and resolves free-form country
names against it.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .errors import ParseError

logger = logging.getLogger(__name__)

# Source table layout
HEADER_ROWS = 5
NAME_COLUMN = 0
CODE_COLUMN = 1
FIRST_YEAR_COLUMN = 4
FIRST_YEAR = 1960
LAST_YEAR = 2023
# Cells read per row; anything past LAST_YEAR is dropped
TABLE_WIDTH = FIRST_YEAR_COLUMN + (LAST_YEAR - FIRST_YEAR) + 1

# Presentation thresholds, largest first
MAGNITUDES = [
    (1e12, "trillion"),
    (1e9, "billion"),
    (1e6, "million"),
]
CURRENCY = "USD"


def _parse_value(cell) -> Optional[float]:
    if not isinstance(cell, str):
        return None
    text = cell.strip().strip('"')
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


class EconomicIndex:
    """
    Per-country GDP series keyed by ISO code.

    Names resolve to codes by exact match, then lowercase match, then the
    first known name (in table order) that contains the query or is
    contained by it.
    """

    def __init__(self, rows: Iterable[Sequence[str]]):
        """
        Build the index from table rows (header lines already removed).

        Args:
            rows: Cell sequences; column 0 name, column 1 ISO code, years from column 4
        """
        self._series: Dict[str, Dict[int, float]] = {}
        self._codes: Dict[str, str] = {}
        self._names: List[str] = []

        last_column = TABLE_WIDTH - 1
        for row in rows:
            # Cells the reader pads short rows with are never strings
            if sum(isinstance(cell, str) for cell in row) < FIRST_YEAR_COLUMN + 1:
                continue
            if not isinstance(row[NAME_COLUMN], str) or not isinstance(row[CODE_COLUMN], str):
                continue

            name = row[NAME_COLUMN].strip().strip('"')
            code = row[CODE_COLUMN].strip().strip('"')

            self._codes[name] = code
            self._codes[name.lower()] = code
            self._names.append(name)

            series: Dict[int, float] = {}
            for column in range(FIRST_YEAR_COLUMN, min(len(row), last_column + 1)):
                value = _parse_value(row[column])
                if value is not None:
                    series[FIRST_YEAR + column - FIRST_YEAR_COLUMN] = value
            self._series[code] = series

    @classmethod
    def from_csv(cls, csv_path: Path) -> "EconomicIndex":
        """
        Load the index from the wide CSV file.

        Raises:
            FileNotFoundError: If the file is missing
            ParseError: If the CSV cannot be tokenized or decoded
        """
        csv_path = Path(csv_path)
        if not csv_path.is_file():
            raise FileNotFoundError(f"GDP table not found: {csv_path}")

        # Short rows are padded with None, cells past LAST_YEAR are dropped
        columns = list(range(TABLE_WIDTH))
        try:
            frame = pd.read_csv(
                csv_path,
                engine="python",
                skiprows=HEADER_ROWS,
                header=None,
                names=columns,
                usecols=columns,
                index_col=False,
                dtype=object,
                na_filter=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame()
        except (pd.errors.ParserError, csv.Error, UnicodeDecodeError) as e:
            raise ParseError(csv_path, str(e)) from e

        index = cls(frame.itertuples(index=False, name=None))
        logger.info(f"Loaded GDP data for {index.country_count()} countries")
        return index

    def country_count(self) -> int:
        return len(self._names)

    def resolve_code(self, name: str) -> Optional[str]:
        """ISO code for a display name, or None when nothing matches."""
        code = self._codes.get(name)
        if code is None:
            code = self._codes.get(name.lower())
        if code is None and name.strip():
            for known in self._names:
                if name in known or known in name:
                    code = self._codes[known]
                    break
        return code

    def latest(self, name: str) -> Optional[Tuple[int, float]]:
        """Most recent (year, value) for a country."""
        series = self.full_series(name)
        if not series:
            return None
        year = max(series)
        return year, series[year]

    def full_series(self, name: str) -> Optional[Dict[int, float]]:
        """Whole year -> value series for a country, ordered by year."""
        code = self.resolve_code(name)
        if code is None or code not in self._series:
            return None
        return dict(sorted(self._series[code].items()))

    @staticmethod
    def format_magnitude(value: float) -> str:
        """Two-decimal value with a trillion/billion/million suffix."""
        for threshold, suffix in MAGNITUDES:
            if value >= threshold:
                return f"{value / threshold:.2f} {suffix} {CURRENCY}"
        return f"{value:.2f} {CURRENCY}"

"""Mortality table resource.

CSV schema: ``age,<column>,<column>...`` with one annual mortality rate
column per gender (``age,male,female`` for the shipped table). The table is
parsed once per path and shared read-only between calculations.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

import numpy as np

from illustration.core.errors import DataNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).resolve().parents[1] / "data" / "mortality.csv"


@dataclass(frozen=True)
class MortalityTable:
    ages: np.ndarray
    columns: Mapping[str, np.ndarray]
    headers: Tuple[str, ...]

    def rates_for(self, name: str) -> np.ndarray:
        """Return the rate column matching ``name`` case-insensitively."""
        key = name.strip().lower()
        if key not in self.columns:
            raise DataNotFoundError(
                f"Gender column '{name}' not found in mortality table columns: "
                f"{', '.join(self.headers)}",
                available=list(self.headers),
            )
        return self.columns[key]

    def rates_from_age(self, name: str, min_age: int) -> np.ndarray:
        return self.rates_for(name)[self.ages >= min_age]


def _to_float(cell: str) -> float:
    # blank cells surface as NaN in the factor rather than failing the load
    cell = cell.strip()
    return float(cell) if cell else float("nan")


def load_mortality_table(path: Union[str, Path]) -> MortalityTable:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"mortality table not found: {path}")

    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        header = [cell.strip() for cell in next(reader)]
        rows = [row for row in reader if row and row[0].strip()]

    ages = np.asarray([int(row[0]) for row in rows], dtype=int)
    order = np.argsort(ages, kind="stable")
    ages = ages[order]
    ages.setflags(write=False)

    columns = {}
    for index, name in enumerate(header[1:], start=1):
        rates = np.asarray([_to_float(row[index]) for row in rows], dtype=float)[order]
        rates.setflags(write=False)
        columns[name.lower()] = rates

    logger.info("Loaded mortality table %s (%d ages, columns=%s)", path.name, len(ages), header[1:])
    return MortalityTable(
        ages=ages,
        columns=MappingProxyType(columns),
        headers=tuple(header[1:]),
    )


@lru_cache(maxsize=None)
def _cached_table(path: str) -> MortalityTable:
    return load_mortality_table(path)


def get_mortality_table(path: Optional[Union[str, Path]] = None) -> MortalityTable:
    """Load-once accessor; repeated calls for the same path share one table."""
    return _cached_table(str(Path(path) if path else DEFAULT_TABLE_PATH))

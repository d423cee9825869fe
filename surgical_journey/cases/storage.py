# -*- coding: utf-8 -*-
"""
Case dataset loading

Reads the historical case export (CSV via pandas) into immutable records.
Rows missing age, sex or department are skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple, Union

import numpy as np
import pandas as pd

from .models import HistoricalCaseRecord

logger = logging.getLogger(__name__)

# Dataset export column -> record field.
COLUMN_ALIASES: Dict[str, str] = {
    "anesthesia": "ane_type",
    "opdur": "surgery_duration",
    "hr": "avg_hr",
}
REQUIRED_COLUMNS = ("age", "sex", "department")


class CaseDataset:
    """Read-only collection of historical case records.

    An empty dataset is a valid state: every consumer falls back to
    demographic estimates when nothing matches.
    """

    def __init__(self, records: Iterable[HistoricalCaseRecord] = ()) -> None:
        self._records: Tuple[HistoricalCaseRecord, ...] = tuple(records)
        self.skipped_rows = 0

    @property
    def records(self) -> Tuple[HistoricalCaseRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HistoricalCaseRecord]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    @classmethod
    def empty(cls) -> "CaseDataset":
        return cls(())

    @classmethod
    def from_records(
        cls, rows: Iterable[Union[HistoricalCaseRecord, Mapping[str, Any]]]
    ) -> "CaseDataset":
        records: List[HistoricalCaseRecord] = []
        skipped = 0
        for row in rows:
            if isinstance(row, HistoricalCaseRecord):
                records.append(row)
                continue
            normalized = _normalize_row(row)
            if not _has_required(normalized):
                skipped += 1
                continue
            records.append(HistoricalCaseRecord.from_mapping(normalized))
        dataset = cls(records)
        dataset.skipped_rows = skipped
        if skipped:
            logger.warning("Skipped %s case rows missing %s", skipped, ", ".join(REQUIRED_COLUMNS))
        return dataset

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "CaseDataset":
        if df.empty:
            return cls.empty()
        working = df.rename(columns=lambda col: str(col).strip().lower())
        working = working.rename(columns=COLUMN_ALIASES)
        return cls.from_records(working.to_dict(orient="records"))

    @classmethod
    def from_csv(cls, path: Union[str, Path], *, strict: bool = False) -> "CaseDataset":
        """Load the case export CSV.

        A missing or unreadable file yields an empty dataset unless ``strict``.
        """
        data_file = Path(path).expanduser()
        if not data_file.exists():
            if strict:
                raise FileNotFoundError(f"Case dataset not found: {data_file}")
            logger.warning("Case dataset not found: %s", data_file)
            return cls.empty()
        try:
            df = pd.read_csv(data_file, skip_blank_lines=True)
        except (OSError, ValueError, pd.errors.ParserError) as exc:
            if strict:
                raise
            logger.warning("Failed to parse case dataset %s: %s", data_file, exc)
            return cls.empty()
        dataset = cls.from_frame(df)
        logger.info("Dataset loaded: %s records from %s", len(dataset), data_file)
        return dataset


def _normalize_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in row.items():
        name = str(key).strip().lower()
        name = COLUMN_ALIASES.get(name, name)
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                value = None
        normalized[name] = value
    return normalized


def _has_required(row: Mapping[str, Any]) -> bool:
    for name in REQUIRED_COLUMNS:
        value = row.get(name)
        if value is None:
            return False
        if isinstance(value, float) and np.isnan(value):
            return False
    return True

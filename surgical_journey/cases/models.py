# -*- coding: utf-8 -*-
"""Historical case records, read-only reference data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..numeric import safe_float
from ..profile import Anesthesia, Approach, Department, Sex, parse_enum_or_none


@dataclass(frozen=True)
class HistoricalCaseRecord:
    """One past surgical case.

    Categorical fields that could not be resolved are ``None`` and never match.
    Optional numeric fields stay ``None`` when missing; they are excluded from
    cohort averages, not treated as zero.
    """
    age: Optional[float]
    sex: Optional[Sex]
    bmi: Optional[float]
    asa: Optional[float]
    department: Optional[Department]
    ane_type: Optional[Anesthesia]
    approach: Optional[Approach]
    avg_hr: Optional[float] = None
    los_postop: Optional[float] = None
    icu_days: Optional[float] = None
    death_inhosp: Union[bool, int, None] = None
    surgery_duration: Optional[float] = None
    mortality_label: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Dict[str, Any]) -> "HistoricalCaseRecord":
        """Build a record from a dataset row (CSV dict or DataFrame row)."""
        death = row.get("death_inhosp")
        if isinstance(death, bool):
            death_value: Union[bool, int, None] = death
        else:
            death_num = safe_float(death)
            death_value = int(death_num) if death_num is not None else None
        label = row.get("mortality_label")
        if label is not None and not isinstance(label, str):
            label = None if safe_float(label) is None else str(label)
        return cls(
            age=safe_float(row.get("age")),
            sex=parse_enum_or_none(Sex, row.get("sex")),
            bmi=safe_float(row.get("bmi")),
            asa=safe_float(row.get("asa")),
            department=parse_enum_or_none(Department, row.get("department")),
            ane_type=parse_enum_or_none(
                Anesthesia, row.get("ane_type", row.get("anesthesia"))
            ),
            approach=parse_enum_or_none(Approach, row.get("approach")),
            avg_hr=safe_float(row.get("avg_hr")),
            los_postop=safe_float(row.get("los_postop")),
            icu_days=safe_float(row.get("icu_days")),
            death_inhosp=death_value,
            surgery_duration=safe_float(
                row.get("surgery_duration", row.get("opdur"))
            ),
            mortality_label=label,
        )

# -*- coding: utf-8 -*-
"""
Similarity matching

Scores historical cases against a patient profile and keeps the ones that
satisfy a majority of the comparison criteria. Also provides the cohort
statistics the outcome engine and the summary view rely on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .cases.models import HistoricalCaseRecord
from .numeric import safe_float, valid_positive
from .profile import PatientProfile

logger = logging.getLogger(__name__)

MAX_MATCH_SCORE = 7
MATCH_THRESHOLD = 4
AGE_WINDOW = 10
BMI_WINDOW = 5
ASA_WINDOW = 1

MatchedCohort = Tuple[HistoricalCaseRecord, ...]


def _within(a: Optional[float], b: Optional[float], window: float) -> bool:
    if a is None or b is None:
        return False
    return abs(a - b) <= window


def match_score(profile: PatientProfile, record: HistoricalCaseRecord) -> int:
    """Number of satisfied criteria, 0..7."""
    score = 0
    if _within(safe_float(record.age), float(profile.age), AGE_WINDOW):
        score += 1
    if record.sex is not None and record.sex == profile.sex:
        score += 1
    if _within(safe_float(record.bmi), profile.bmi_value, BMI_WINDOW):
        score += 1
    if record.department is not None and record.department == profile.department:
        score += 1
    if record.ane_type is not None and record.ane_type == profile.anesthesia:
        score += 1
    if _within(safe_float(record.asa), float(profile.asa), ASA_WINDOW):
        score += 1
    if record.approach is not None and record.approach == profile.approach:
        score += 1
    return score


def find_similar_patients(
    profile: PatientProfile,
    dataset: Iterable[HistoricalCaseRecord],
) -> MatchedCohort:
    """Return the records scoring at least ``MATCH_THRESHOLD``.

    An empty dataset, or one without a match, gives an empty cohort.
    """
    profile = profile.with_bmi()
    cohort = tuple(
        record for record in dataset
        if match_score(profile, record) >= MATCH_THRESHOLD
    )
    logger.info("Found %s similar patients", len(cohort))
    return cohort


def is_death(record: HistoricalCaseRecord) -> bool:
    flag = record.death_inhosp
    if flag is True:
        return True
    if flag is not None and not isinstance(flag, bool) and flag == 1:
        return True
    return record.mortality_label == "Died"


def mortality_rate(cohort: Iterable[HistoricalCaseRecord]) -> float:
    records = list(cohort)
    if not records:
        return 0.0
    deaths = sum(1 for record in records if is_death(record))
    return deaths / len(records)


def _mean_of_valid(values: Iterable[object]) -> Optional[float]:
    valid = [float(v) for v in values if valid_positive(v)]  # type: ignore[arg-type]
    if not valid:
        return None
    return sum(valid) / len(valid)


def average_los(cohort: Iterable[HistoricalCaseRecord]) -> Optional[float]:
    """Mean post-operative stay over records with a usable value."""
    return _mean_of_valid(record.los_postop for record in cohort)


def average_icu_days(cohort: Iterable[HistoricalCaseRecord]) -> Optional[float]:
    return _mean_of_valid(record.icu_days for record in cohort)


def average_heart_rate(cohort: Iterable[HistoricalCaseRecord]) -> Optional[float]:
    values = [v for v in (safe_float(r.avg_hr) for r in cohort) if v is not None]
    if not values:
        return None
    return sum(values) / len(values)


@dataclass(frozen=True)
class CohortSummary:
    size: int
    mortality_rate: float
    average_los: Optional[float]

    @classmethod
    def from_cohort(cls, cohort: MatchedCohort) -> "CohortSummary":
        return cls(
            size=len(cohort),
            mortality_rate=mortality_rate(cohort),
            average_los=average_los(cohort),
        )

    def average_los_label(self) -> str:
        if self.average_los is None:
            return "N/A"
        return f"{self.average_los:.1f}"

    def to_dict(self) -> dict:
        return {
            "size": self.size,
            "mortality_rate": self.mortality_rate,
            "average_los": self.average_los,
            "average_los_label": self.average_los_label(),
        }

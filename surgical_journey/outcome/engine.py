# -*- coding: utf-8 -*-
"""
Surgical outcome engine

Derives survival, recovery time, ICU stay and complication risk for a
profile. Similar historical cases drive the estimate when there are any;
otherwise demographic estimators take over.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..cases.models import HistoricalCaseRecord
from ..matching import average_icu_days, average_los, mortality_rate
from ..numeric import round_int
from ..profile import Approach, Department, PatientProfile
from ..simulation.rng import RandomSource, resolve_rng
from .recovery import demographic_mortality_risk, estimate_recovery_days

logger = logging.getLogger(__name__)


class ComplicationRisk(str, Enum):
    """Ordinal complication risk"""
    low = "Low"
    moderate = "Moderate"
    high = "High"
    very_high = "VeryHigh"

    @property
    def label(self) -> str:
        return "Very High" if self is ComplicationRisk.very_high else self.value


class OutcomeBasis(str, Enum):
    cohort = "cohort"
    demographic = "demographic"


@dataclass(frozen=True)
class ComplicationAssessment:
    score: int
    risk: ComplicationRisk
    factors: Tuple[str, ...]

    @property
    def longer_hospital_stay_expected(self) -> bool:
        return self.score >= 3


@dataclass(frozen=True)
class SurgicalOutcome:
    """Outcome of one simulated journey"""
    survived: bool
    recovery_time_days: int
    complication_risk: ComplicationRisk
    complication_score: int
    contributing_factors: Tuple[str, ...]
    longer_hospital_stay_expected: bool
    icu_stay_required: bool
    icu_days: int
    # cohort mortality rate or demographic mortality risk
    mortality_estimate: float = 0.0
    basis: OutcomeBasis = OutcomeBasis.demographic

    def to_dict(self) -> Dict[str, object]:
        payload = asdict(self)
        payload["complication_risk"] = self.complication_risk.value
        payload["complication_risk_label"] = self.complication_risk.label
        payload["contributing_factors"] = list(self.contributing_factors)
        payload["basis"] = self.basis.value
        return payload


def risk_from_score(score: int) -> ComplicationRisk:
    if score >= 6:
        return ComplicationRisk.very_high
    if score >= 4:
        return ComplicationRisk.high
    if score >= 2:
        return ComplicationRisk.moderate
    return ComplicationRisk.low


def score_complications(profile: PatientProfile) -> ComplicationAssessment:
    """Additive complication score with the factor behind each increment."""
    score = 0
    factors: List[str] = []

    if profile.age > 75:
        score += 3
        factors.append("Advanced age significantly increases risk")
    elif profile.age > 65:
        score += 2
        factors.append("Advanced age increases complication risk")

    if profile.asa >= 3:
        score += 3
        factors.append("Higher ASA physical status associated with increased risk")

    bmi = profile.bmi_value
    if bmi is not None:
        if bmi > 35:
            score += 3
            factors.append("Obesity (BMI > 35) increases complication risk")
        elif bmi > 30:
            score += 2
            factors.append("Elevated BMI associated with increased complication risk")
        elif bmi < 18.5:
            score += 1
            factors.append("Low BMI may impact recovery")

    if profile.department == Department.thoracic_surgery:
        score += 2
        factors.append("Thoracic procedures have higher complication rates")

    if profile.approach == Approach.open:
        score += 1
        factors.append("Open surgical approach typically requires longer recovery")
    elif profile.approach == Approach.robotic:
        score -= 1
        factors.append("Robotic approach may reduce complications")

    return ComplicationAssessment(score=score, risk=risk_from_score(score), factors=tuple(factors))


@dataclass
class _Draft:
    survived: bool = True
    recovery_time_days: int = 5
    icu_stay_required: bool = False
    icu_days: int = 0
    mortality_estimate: float = 0.0
    basis: OutcomeBasis = OutcomeBasis.demographic
    factors: List[str] = field(default_factory=list)


class OutcomeEngine:
    """Outcome derivation with an injectable random source."""

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self.rng = resolve_rng(rng)

    def determine(
        self,
        profile: PatientProfile,
        cohort: Sequence[HistoricalCaseRecord] = (),
    ) -> SurgicalOutcome:
        profile = profile.with_bmi()
        if cohort:
            draft = self._from_cohort(profile, cohort)
        else:
            logger.info("No similar patients found, using demographic-based estimates")
            draft = self._from_demographics(profile)

        assessment = score_complications(profile)
        draft.factors.extend(assessment.factors)
        self._append_closing_factors(profile, draft, assessment.risk)

        outcome = SurgicalOutcome(
            survived=draft.survived,
            recovery_time_days=draft.recovery_time_days,
            complication_risk=assessment.risk,
            complication_score=assessment.score,
            contributing_factors=tuple(draft.factors),
            longer_hospital_stay_expected=assessment.longer_hospital_stay_expected,
            icu_stay_required=draft.icu_stay_required,
            icu_days=draft.icu_days,
            mortality_estimate=draft.mortality_estimate,
            basis=draft.basis,
        )
        logger.info(
            "Outcome determined: survived=%s recovery=%sd risk=%s icu=%sd",
            outcome.survived,
            outcome.recovery_time_days,
            outcome.complication_risk.value,
            outcome.icu_days,
        )
        return outcome

    def _from_cohort(
        self,
        profile: PatientProfile,
        cohort: Sequence[HistoricalCaseRecord],
    ) -> _Draft:
        rate = mortality_rate(cohort)
        logger.debug("Mortality rate from similar patients: %.1f%%", rate * 100)
        draft = _Draft(mortality_estimate=rate, basis=OutcomeBasis.cohort)
        draft.survived = self.rng.random() < 1 - rate

        mean_los = average_los(cohort)
        if mean_los is not None:
            draft.recovery_time_days = round_int(mean_los)
        else:
            draft.recovery_time_days = estimate_recovery_days(profile.department, profile.approach)
            logger.debug("No valid LOS in cohort, estimated %s days", draft.recovery_time_days)

        mean_icu = average_icu_days(cohort)
        if mean_icu is not None:
            draft.icu_stay_required = mean_icu > 0
            draft.icu_days = round_int(mean_icu)
        return draft

    def _from_demographics(self, profile: PatientProfile) -> _Draft:
        risk = demographic_mortality_risk(profile)
        draft = _Draft(mortality_estimate=risk, basis=OutcomeBasis.demographic)
        draft.survived = self.rng.random() > risk
        draft.recovery_time_days = estimate_recovery_days(profile.department, profile.approach)
        draft.icu_stay_required = (
            profile.asa >= 3 or profile.department == Department.thoracic_surgery
        )
        if draft.icu_stay_required:
            draft.icu_days = profile.asa - 1 if profile.asa >= 3 else 1
        return draft

    @staticmethod
    def _append_closing_factors(
        profile: PatientProfile,
        draft: _Draft,
        risk: ComplicationRisk,
    ) -> None:
        if draft.survived:
            if risk is ComplicationRisk.low:
                draft.factors.append("Low risk profile contributed to positive outcome")
            elif draft.recovery_time_days > 10:
                draft.factors.append("Extended hospital stay due to complex recovery")
            if draft.icu_stay_required:
                unit = "day" if draft.icu_days == 1 else "days"
                draft.factors.append(f"Required {draft.icu_days} {unit} in intensive care unit")
        else:
            draft.factors.append("Multiple risk factors contributed to negative outcome")
            if profile.asa >= 3:
                draft.factors.append("Pre-existing severe health conditions increased mortality risk")


def determine_outcome(
    profile: PatientProfile,
    cohort: Sequence[HistoricalCaseRecord] = (),
    rng: Optional[RandomSource] = None,
) -> SurgicalOutcome:
    return OutcomeEngine(rng).determine(profile, cohort)

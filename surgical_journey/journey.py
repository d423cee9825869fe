# -*- coding: utf-8 -*-
"""
Surgical journey

One call matches the profile against the case dataset, simulates vitals for
the three phases, composes their narratives and derives the outcome. The
result is an immutable value; restarting means generating a new one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from .cases.models import HistoricalCaseRecord
from .matching import CohortSummary, MatchedCohort, find_similar_patients
from .narrative import compose_narrative
from .outcome.engine import OutcomeEngine, SurgicalOutcome
from .profile import PHASE_ORDER, Phase, PatientProfile
from .simulation.rng import RandomSource, resolve_rng
from .simulation.vitals import PhaseVitals, VitalSignsSimulator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Journey:
    profile: PatientProfile
    cohort: MatchedCohort
    cohort_summary: CohortSummary
    phases: Mapping[Phase, PhaseVitals]
    outcome: SurgicalOutcome

    @property
    def pre(self) -> PhaseVitals:
        return self.phases[Phase.pre]

    @property
    def during(self) -> PhaseVitals:
        return self.phases[Phase.during]

    @property
    def post(self) -> PhaseVitals:
        return self.phases[Phase.post]

    def to_dict(self) -> Dict[str, object]:
        profile = self.profile
        return {
            "profile": {
                "age": profile.age,
                "sex": profile.sex.value,
                "height_cm": profile.height_cm,
                "weight_kg": profile.weight_kg,
                "bmi": profile.bmi_value,
                "asa": profile.asa,
                "department": profile.department.value,
                "approach": profile.approach.value,
                "anesthesia": profile.anesthesia.value,
                "is_emergency": profile.is_emergency,
            },
            "cohort": self.cohort_summary.to_dict(),
            "phases": {phase.value: self.phases[phase].to_dict() for phase in PHASE_ORDER},
            "outcome": self.outcome.to_dict(),
        }


def generate_journey(
    profile: PatientProfile,
    dataset: Iterable[HistoricalCaseRecord],
    rng: Optional[RandomSource] = None,
) -> Journey:
    """Build a complete journey for ``profile``.

    Vitals are drawn phase by phase (heart rate, blood pressure, SpO2) before
    the outcome, all from the same random source.
    """
    rng = resolve_rng(rng)
    profile = profile.with_bmi()
    cohort = find_similar_patients(profile, dataset)

    simulator = VitalSignsSimulator(rng)
    phases: Dict[Phase, PhaseVitals] = {}
    for phase in PHASE_ORDER:
        vitals = simulator.phase_vitals(profile, phase, cohort)
        phases[phase] = replace(vitals, narrative=compose_narrative(profile, vitals, phase))

    outcome = OutcomeEngine(rng).determine(profile, cohort)
    journey = Journey(
        profile=profile,
        cohort=cohort,
        cohort_summary=CohortSummary.from_cohort(cohort),
        phases=MappingProxyType(phases),
        outcome=outcome,
    )
    logger.info(
        "Surgical journey generated: cohort=%s pre_hr=%s during_hr=%s post_hr=%s",
        len(cohort),
        journey.pre.heart_rate,
        journey.during.heart_rate,
        journey.post.heart_rate,
    )
    return journey

# -*- coding: utf-8 -*-
"""
Outcome derivation

Survival, recovery time, ICU stay and complication risk.
"""

from .engine import (
    ComplicationAssessment,
    ComplicationRisk,
    OutcomeBasis,
    OutcomeEngine,
    SurgicalOutcome,
    determine_outcome,
    risk_from_score,
    score_complications,
)
from .recovery import demographic_mortality_risk, estimate_recovery_days

__all__ = [
    'ComplicationAssessment',
    'ComplicationRisk',
    'OutcomeBasis',
    'OutcomeEngine',
    'SurgicalOutcome',
    'determine_outcome',
    'risk_from_score',
    'score_complications',
    'demographic_mortality_risk',
    'estimate_recovery_days',
]

# -*- coding: utf-8 -*-
"""
Demographic estimators

Recovery time by department and approach, and the mortality risk used when
no similar historical cases are available.
"""

from __future__ import annotations

import logging
from typing import Dict

from ..numeric import round_int
from ..profile import Approach, Department, PatientProfile

logger = logging.getLogger(__name__)

DEFAULT_RECOVERY_DAYS = 5.0

RECOVERY_DAYS_BY_DEPARTMENT: Dict[Department, float] = {
    Department.general_surgery: 7.0,
    Department.thoracic_surgery: 10.0,
    Department.gynecology: 5.0,
    Department.urology: 4.0,
}

APPROACH_FACTOR: Dict[Approach, float] = {
    Approach.open: 1.5,
    Approach.videoscopic: 0.8,
    Approach.robotic: 0.7,
}


def estimate_recovery_days(department: Department, approach: Approach) -> int:
    """Expected post-operative days for a department and approach."""
    days = RECOVERY_DAYS_BY_DEPARTMENT.get(department, DEFAULT_RECOVERY_DAYS)
    days *= APPROACH_FACTOR.get(approach, 1.0)
    return round_int(days)


def demographic_mortality_risk(profile: PatientProfile) -> float:
    """
    In-hospital mortality probability from demographics and procedure

    Returns:
        float: probability in [0, 1]
    """
    risk = 0.01

    if profile.age > 80:
        risk += 0.04
    elif profile.age > 70:
        risk += 0.025
    elif profile.age > 60:
        risk += 0.015

    risk += (profile.asa - 1) * 0.015

    if profile.department == Department.thoracic_surgery:
        risk += 0.01
    if profile.approach == Approach.open:
        risk += 0.01

    bmi = profile.bmi_value
    if bmi is not None and (bmi > 35 or bmi < 18.5):
        risk += 0.01

    if profile.is_emergency:
        risk += 0.03

    logger.debug("Calculated mortality risk: %.1f%%", risk * 100)
    return risk

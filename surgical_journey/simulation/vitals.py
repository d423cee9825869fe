from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence

from ..cases.models import HistoricalCaseRecord
from ..matching import average_heart_rate
from ..numeric import clamp, round_half_up, round_int
from ..profile import Anesthesia, Department, Phase, PatientProfile, Sex, parse_enum
from .rng import RandomSource, resolve_rng, symmetric

HR_LIMITS = (40, 180)
SYSTOLIC_LIMITS = (80, 200)
DIASTOLIC_LIMITS = (40, 110)
SPO2_LIMITS = (80.0, 100.0)
DESATURATION_PROBABILITY = 0.2


@dataclass(frozen=True)
class BloodPressure:
    systolic: int
    diastolic: int

    def __str__(self) -> str:
        return f"{self.systolic}/{self.diastolic}"


@dataclass(frozen=True)
class PhaseVitals:
    heart_rate: int
    blood_pressure: BloodPressure
    oxygen_saturation: float
    narrative: str = ""

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class VitalSignsSimulator:
    """Draw heart rate, blood pressure and SpO2 for one surgical phase.

    Every call is an independent draw from ``rng``; repeated calls with the
    same inputs vary within the documented limits.
    """

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self.rng = resolve_rng(rng)

    def baseline_heart_rate(
        self,
        profile: PatientProfile,
        cohort: Sequence[HistoricalCaseRecord] = (),
    ) -> float:
        cohort_mean = average_heart_rate(cohort) if cohort else None
        if cohort_mean is not None:
            return cohort_mean
        base = 75.0
        if profile.age > 60:
            base -= min(15.0, (profile.age - 60) * 0.3)
        elif profile.age < 30:
            base += min(10.0, (30 - profile.age) * 0.5)
        base += (profile.asa - 1) * 2
        return base

    def heart_rate(
        self,
        profile: PatientProfile,
        phase: Phase,
        cohort: Sequence[HistoricalCaseRecord] = (),
    ) -> int:
        phase = parse_enum(Phase, phase)
        base = self.baseline_heart_rate(profile, cohort)
        if phase is Phase.pre:
            adjustment, variability = 5.0, 8.0
        elif phase is Phase.during:
            if profile.anesthesia == Anesthesia.general:
                adjustment, variability = -10.0, 5.0
            else:
                adjustment, variability = -5.0, 10.0
        else:
            adjustment, variability = 8.0, 12.0
        value = round_int(base + adjustment + symmetric(self.rng, variability))
        return int(clamp(value, *HR_LIMITS))

    def baseline_systolic(self, profile: PatientProfile) -> float:
        systolic = 120.0
        if profile.age > 40:
            systolic += (profile.age - 40) * 0.5
        bmi = profile.bmi_value
        if bmi is not None and bmi > 25:
            systolic += (bmi - 25) * 0.8
        if profile.sex == Sex.male:
            systolic += 5
        systolic += (profile.asa - 1) * 5
        return systolic

    def blood_pressure(
        self,
        profile: PatientProfile,
        phase: Phase,
        cohort: Sequence[HistoricalCaseRecord] = (),
    ) -> BloodPressure:
        phase = parse_enum(Phase, phase)
        baseline = self.baseline_systolic(profile)
        if phase is Phase.pre:
            systolic = baseline + self.rng.random() * 15 - 5
        elif phase is Phase.during:
            effect = -20 if profile.anesthesia == Anesthesia.general else -10
            systolic = baseline + effect + self.rng.random() * 15 - 5
        else:
            systolic = baseline - 5 + self.rng.random() * 20 - 5
        diastolic = systolic * (0.65 + self.rng.random() * 0.05)
        return BloodPressure(
            systolic=round_int(clamp(systolic, *SYSTOLIC_LIMITS)),
            diastolic=round_int(clamp(diastolic, *DIASTOLIC_LIMITS)),
        )

    def baseline_spo2(self, profile: PatientProfile) -> float:
        spo2 = 98.0
        if profile.age > 70:
            spo2 -= min(3.0, (profile.age - 70) * 0.1)
        spo2 -= (profile.asa - 1) * 0.5
        return spo2

    def oxygen_saturation(
        self,
        profile: PatientProfile,
        phase: Phase,
        cohort: Sequence[HistoricalCaseRecord] = (),
    ) -> float:
        phase = parse_enum(Phase, phase)
        adjustment = 0.0
        if phase is Phase.pre:
            variability = 1.0
        elif phase is Phase.during:
            if profile.anesthesia == Anesthesia.general:
                adjustment, variability = 1.0, 2.0
                # transient desaturation event
                if self.rng.random() < DESATURATION_PROBABILITY:
                    adjustment = -3.0
            else:
                variability = 1.5
            if profile.department == Department.thoracic_surgery:
                adjustment -= 2.0
        else:
            adjustment, variability = -1.0, 2.0
        value = self.baseline_spo2(profile) + adjustment + symmetric(self.rng, variability)
        return round_half_up(clamp(value, *SPO2_LIMITS), 1)

    def phase_vitals(
        self,
        profile: PatientProfile,
        phase: Phase,
        cohort: Sequence[HistoricalCaseRecord] = (),
    ) -> PhaseVitals:
        return PhaseVitals(
            heart_rate=self.heart_rate(profile, phase, cohort),
            blood_pressure=self.blood_pressure(profile, phase, cohort),
            oxygen_saturation=self.oxygen_saturation(profile, phase, cohort),
        )


def simulate_heart_rate(
    profile: PatientProfile,
    phase: Phase,
    cohort: Sequence[HistoricalCaseRecord] = (),
    rng: Optional[RandomSource] = None,
) -> int:
    return VitalSignsSimulator(rng).heart_rate(profile, phase, cohort)


def simulate_blood_pressure(
    profile: PatientProfile,
    phase: Phase,
    cohort: Sequence[HistoricalCaseRecord] = (),
    rng: Optional[RandomSource] = None,
) -> BloodPressure:
    return VitalSignsSimulator(rng).blood_pressure(profile, phase, cohort)


def simulate_oxygen_saturation(
    profile: PatientProfile,
    phase: Phase,
    cohort: Sequence[HistoricalCaseRecord] = (),
    rng: Optional[RandomSource] = None,
) -> float:
    return VitalSignsSimulator(rng).oxygen_saturation(profile, phase, cohort)


def simulate_phase_vitals(
    profile: PatientProfile,
    phase: Phase,
    cohort: Sequence[HistoricalCaseRecord] = (),
    rng: Optional[RandomSource] = None,
) -> PhaseVitals:
    return VitalSignsSimulator(rng).phase_vitals(profile, phase, cohort)

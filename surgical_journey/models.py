# -*- coding: utf-8 -*-
"""Pydantic models for the HTTP layer."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from .profile import Anesthesia, Approach, Department, PatientProfile, Sex


class PatientProfileRequest(BaseModel):
    age: int = Field(..., ge=18, le=100)
    sex: Sex
    height_cm: Optional[float] = Field(None, gt=0, le=300)
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    bmi: Optional[float] = Field(None, gt=0, le=100, description="Derived from height/weight when omitted")
    asa: int = Field(..., ge=1, le=5, description="ASA physical status 1-5")
    department: Department
    approach: Approach
    anesthesia: Anesthesia
    is_emergency: bool = False

    @model_validator(mode="after")
    def _check_profile(self) -> "PatientProfileRequest":
        if self.bmi is None and (self.height_cm is None or self.weight_kg is None):
            raise ValueError("provide bmi or both height_cm and weight_kg")
        if self.department == Department.gynecology and self.sex != Sex.female:
            raise ValueError("Gynecology procedures require a female patient")
        return self

    def to_profile(self) -> PatientProfile:
        return PatientProfile(
            age=self.age,
            sex=self.sex,
            asa=self.asa,
            department=self.department,
            approach=self.approach,
            anesthesia=self.anesthesia,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            bmi=self.bmi,
            is_emergency=self.is_emergency,
        )


class JourneyRequest(PatientProfileRequest):
    seed: Optional[int] = Field(None, description="Fix the random draws for a reproducible journey")


class CohortSummaryResponse(BaseModel):
    size: int
    mortality_rate: float
    average_los: Optional[float] = None
    average_los_label: str = "N/A"


class BloodPressureOut(BaseModel):
    systolic: int
    diastolic: int


class PhaseVitalsOut(BaseModel):
    heart_rate: int
    blood_pressure: BloodPressureOut
    oxygen_saturation: float
    narrative: str


class OutcomeOut(BaseModel):
    survived: bool
    recovery_time_days: int
    complication_risk: str
    complication_risk_label: str
    complication_score: int
    contributing_factors: List[str] = Field(default_factory=list)
    longer_hospital_stay_expected: bool
    icu_stay_required: bool
    icu_days: int = Field(0, ge=0)
    mortality_estimate: float
    basis: str


class ProfileOut(BaseModel):
    age: int
    sex: str
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    bmi: Optional[float] = None
    asa: int
    department: str
    approach: str
    anesthesia: str
    is_emergency: bool


class JourneyResponse(BaseModel):
    profile: ProfileOut
    cohort: CohortSummaryResponse
    phases: Dict[str, PhaseVitalsOut]
    outcome: OutcomeOut


class WaveformResponse(BaseModel):
    heart_rate: float
    window_sec: float
    points: List[List[float]] = Field(..., description="[time_sec, amplitude] pairs")

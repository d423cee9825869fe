# -*- coding: utf-8 -*-
"""
Physiological simulation

Phase vital signs and the synthetic ECG trace.
"""

from .rng import RandomSource, SequenceRandom, make_rng
from .vitals import (
    BloodPressure,
    PhaseVitals,
    VitalSignsSimulator,
    simulate_blood_pressure,
    simulate_heart_rate,
    simulate_oxygen_saturation,
    simulate_phase_vitals,
)
from .waveform import generate_waveform

__all__ = [
    'RandomSource',
    'SequenceRandom',
    'make_rng',
    'BloodPressure',
    'PhaseVitals',
    'VitalSignsSimulator',
    'simulate_blood_pressure',
    'simulate_heart_rate',
    'simulate_oxygen_saturation',
    'simulate_phase_vitals',
    'generate_waveform',
]

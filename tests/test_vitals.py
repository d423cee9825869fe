# -*- coding: utf-8 -*-

from __future__ import annotations

import itertools
import math
import random
import unittest

from surgical_journey.cases.models import HistoricalCaseRecord
from surgical_journey.profile import Anesthesia, Approach, Department, Phase, PatientProfile, Sex
from surgical_journey.simulation import (
    SequenceRandom,
    VitalSignsSimulator,
    simulate_blood_pressure,
    simulate_heart_rate,
    simulate_oxygen_saturation,
    simulate_phase_vitals,
)


def _profile(**overrides) -> PatientProfile:
    values = dict(
        age=70,
        sex=Sex.male,
        asa=2,
        department=Department.general_surgery,
        approach=Approach.open,
        anesthesia=Anesthesia.general,
        height_cm=170,
        weight_kg=98,
    )
    values.update(overrides)
    return PatientProfile(**values)


def _hr_record(avg_hr: float) -> HistoricalCaseRecord:
    return HistoricalCaseRecord(
        age=70, sex=Sex.male, bmi=33.9, asa=2,
        department=Department.general_surgery,
        ane_type=Anesthesia.general,
        approach=Approach.open,
        avg_hr=avg_hr,
    )


class TestHeartRate(unittest.TestCase):
    def test_demographic_base_by_phase(self) -> None:
        profile = _profile()  # base 75 - 3 + 2 = 74
        mid = SequenceRandom([0.5])
        self.assertEqual(simulate_heart_rate(profile, Phase.pre, rng=mid), 79)
        self.assertEqual(simulate_heart_rate(profile, Phase.during, rng=mid), 64)
        self.assertEqual(simulate_heart_rate(profile, Phase.post, rng=mid), 82)

    def test_jitter_range(self) -> None:
        profile = _profile()
        self.assertEqual(simulate_heart_rate(profile, Phase.pre, rng=SequenceRandom([0.0])), 71)
        spinal = _profile(anesthesia=Anesthesia.spinal)
        self.assertEqual(simulate_heart_rate(spinal, Phase.during, rng=SequenceRandom([0.0])), 59)

    def test_young_patient_adjustment_is_capped(self) -> None:
        simulator = VitalSignsSimulator(SequenceRandom([0.5]))
        self.assertAlmostEqual(simulator.baseline_heart_rate(_profile(age=25, asa=1)), 77.5)
        self.assertAlmostEqual(simulator.baseline_heart_rate(_profile(age=18, asa=1)), 81.0)
        self.assertAlmostEqual(simulator.baseline_heart_rate(_profile(age=100, asa=1)), 63.0)

    def test_cohort_mean_ignores_missing_values(self) -> None:
        cohort = [_hr_record(60.0), _hr_record(80.0), _hr_record(math.nan)]
        value = simulate_heart_rate(_profile(), "pre", cohort, rng=SequenceRandom([0.5]))
        self.assertEqual(value, 75)

    def test_cohort_without_heart_rates_falls_back(self) -> None:
        cohort = [_hr_record(math.nan)]
        value = simulate_heart_rate(_profile(), Phase.pre, cohort, rng=SequenceRandom([0.5]))
        self.assertEqual(value, 79)

    def test_clamped(self) -> None:
        high = simulate_heart_rate(_profile(), Phase.post, [_hr_record(300.0)], rng=SequenceRandom([0.99]))
        low = simulate_heart_rate(_profile(), Phase.during, [_hr_record(10.0)], rng=SequenceRandom([0.0]))
        self.assertEqual(high, 180)
        self.assertEqual(low, 40)


class TestBloodPressure(unittest.TestCase):
    def test_phase_formulas(self) -> None:
        profile = _profile()  # baseline 152.12
        pre = simulate_blood_pressure(profile, Phase.pre, rng=SequenceRandom([0.0, 0.0]))
        self.assertEqual((pre.systolic, pre.diastolic), (147, 96))
        during = simulate_blood_pressure(profile, Phase.during, rng=SequenceRandom([0.0, 0.0]))
        self.assertEqual((during.systolic, during.diastolic), (127, 83))
        post = simulate_blood_pressure(profile, Phase.post, rng=SequenceRandom([0.5, 0.5]))
        self.assertEqual((post.systolic, post.diastolic), (152, 103))

    def test_healthy_baseline(self) -> None:
        profile = _profile(age=30, sex=Sex.female, asa=1, bmi=22.0, height_cm=None, weight_kg=None)
        bp = simulate_blood_pressure(profile, Phase.pre, rng=SequenceRandom([0.0, 0.0]))
        self.assertEqual((bp.systolic, bp.diastolic), (115, 75))
        self.assertEqual(str(bp), "115/75")

    def test_regional_anesthesia_effect(self) -> None:
        profile = _profile(anesthesia=Anesthesia.spinal)
        bp = simulate_blood_pressure(profile, Phase.during, rng=SequenceRandom([0.0, 0.0]))
        self.assertEqual(bp.systolic, 137)


class TestOxygenSaturation(unittest.TestCase):
    def test_baseline_and_phases(self) -> None:
        profile = _profile(age=80, asa=3)  # baseline 96
        self.assertEqual(simulate_oxygen_saturation(profile, Phase.pre, rng=SequenceRandom([0.5])), 96.0)
        self.assertEqual(simulate_oxygen_saturation(profile, Phase.post, rng=SequenceRandom([0.5])), 95.0)

    def test_general_anesthesia_desaturation_event(self) -> None:
        profile = _profile(age=80, asa=3)
        normal = simulate_oxygen_saturation(profile, Phase.during, rng=SequenceRandom([0.5, 0.5]))
        event = simulate_oxygen_saturation(profile, Phase.during, rng=SequenceRandom([0.1, 0.5]))
        self.assertEqual(normal, 97.0)
        self.assertEqual(event, 93.0)

    def test_thoracic_shift_only_during_surgery(self) -> None:
        profile = _profile(age=80, asa=3, department=Department.thoracic_surgery)
        during = simulate_oxygen_saturation(profile, Phase.during, rng=SequenceRandom([0.5, 0.5]))
        pre = simulate_oxygen_saturation(profile, Phase.pre, rng=SequenceRandom([0.5]))
        self.assertEqual(during, 95.0)
        self.assertEqual(pre, 96.0)

    def test_regional_anesthesia_draws_no_event(self) -> None:
        rng = SequenceRandom([0.5])
        value = simulate_oxygen_saturation(_profile(age=80, asa=3, anesthesia=Anesthesia.spinal), Phase.during, rng=rng)
        self.assertEqual(value, 96.0)
        self.assertEqual(rng.calls, 1)


class TestPhaseVitals(unittest.TestCase):
    def test_draw_order_and_values(self) -> None:
        rng = SequenceRandom([0.5])
        vitals = simulate_phase_vitals(_profile(), Phase.pre, rng=rng)
        self.assertEqual(vitals.heart_rate, 79)
        self.assertEqual(str(vitals.blood_pressure), "155/104")
        self.assertEqual(vitals.oxygen_saturation, 97.5)
        self.assertEqual(vitals.narrative, "")
        self.assertEqual(rng.calls, 4)


class TestVitalBounds(unittest.TestCase):
    def test_bounds_hold_across_profiles(self) -> None:
        rng = random.Random(1234)
        simulator = VitalSignsSimulator(rng)
        combos = itertools.product(
            (18, 45, 70, 100),
            (1, 3, 5),
            (15.0, 33.9, 60.0),
            Department,
            Anesthesia,
        )
        for age, asa, bmi, department, anesthesia in combos:
            profile = _profile(age=age, asa=asa, bmi=bmi, department=department, anesthesia=anesthesia)
            for phase in Phase:
                for _ in range(3):
                    hr = simulator.heart_rate(profile, phase)
                    bp = simulator.blood_pressure(profile, phase)
                    spo2 = simulator.oxygen_saturation(profile, phase)
                    self.assertTrue(40 <= hr <= 180)
                    self.assertTrue(80 <= bp.systolic <= 200)
                    self.assertTrue(40 <= bp.diastolic <= 110)
                    self.assertLess(bp.diastolic, bp.systolic)
                    self.assertTrue(80.0 <= spo2 <= 100.0)
                    self.assertEqual(spo2, round(spo2, 1))

    def test_repeated_calls_vary(self) -> None:
        simulator = VitalSignsSimulator(random.Random(5))
        values = {simulator.heart_rate(_profile(), Phase.post) for _ in range(50)}
        self.assertGreater(len(values), 1)


if __name__ == "__main__":
    unittest.main()

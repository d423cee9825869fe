# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from surgical_journey.api import app, get_dataset
from surgical_journey.cases import CaseDataset, HistoricalCaseRecord
from surgical_journey.profile import Anesthesia, Approach, Department, Sex


PROFILE = {
    "age": 70,
    "sex": "Male",
    "height_cm": 170,
    "weight_kg": 98,
    "asa": 2,
    "department": "GeneralSurgery",
    "approach": "Open",
    "anesthesia": "General",
}


def _dataset() -> CaseDataset:
    return CaseDataset([
        HistoricalCaseRecord(
            age=68, sex=Sex.male, bmi=32.0, asa=2,
            department=Department.general_surgery,
            ane_type=Anesthesia.general,
            approach=Approach.open,
            avg_hr=76.0,
            los_postop=8.0,
            death_inhosp=0,
        ),
        HistoricalCaseRecord(
            age=30, sex=Sex.female, bmi=21.0, asa=1,
            department=Department.gynecology,
            ane_type=Anesthesia.spinal,
            approach=Approach.robotic,
        ),
    ])


class TestApiWithEmptyDataset(unittest.TestCase):
    def setUp(self) -> None:
        app.dependency_overrides[get_dataset] = CaseDataset.empty
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"ok": True, "dataset_records": 0})

    def test_journey_falls_back_to_estimates(self) -> None:
        resp = self.client.post("/api/journey", json={**PROFILE, "seed": 3})
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(data["cohort"]["size"], 0)
        self.assertEqual(data["cohort"]["average_los_label"], "N/A")
        self.assertEqual(set(data["phases"]), {"pre", "during", "post"})
        self.assertEqual(data["profile"]["bmi"], 33.9)
        outcome = data["outcome"]
        self.assertEqual(outcome["recovery_time_days"], 11)
        self.assertEqual(outcome["complication_risk"], "High")
        self.assertEqual(outcome["basis"], "demographic")

    def test_journey_seed_is_reproducible(self) -> None:
        first = self.client.post("/api/journey", json={**PROFILE, "seed": 11}).json()
        second = self.client.post("/api/journey", json={**PROFILE, "seed": 11}).json()
        self.assertEqual(first, second)

    def test_gynecology_requires_female(self) -> None:
        payload = {**PROFILE, "department": "Gynecology"}
        resp = self.client.post("/api/journey", json=payload)
        self.assertEqual(resp.status_code, 422)

    def test_bmi_or_height_and_weight_required(self) -> None:
        payload = {k: v for k, v in PROFILE.items() if k != "weight_kg"}
        self.assertEqual(self.client.post("/api/journey", json=payload).status_code, 422)
        payload["bmi"] = 27.5
        self.assertEqual(self.client.post("/api/journey", json=payload).status_code, 200)

    def test_unknown_enum_value(self) -> None:
        resp = self.client.post("/api/journey", json={**PROFILE, "approach": "Laser"})
        self.assertEqual(resp.status_code, 422)


class TestApiWithCases(unittest.TestCase):
    def setUp(self) -> None:
        app.dependency_overrides[get_dataset] = _dataset
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_match(self) -> None:
        resp = self.client.post("/api/match", json=PROFILE)
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(data["size"], 1)
        self.assertEqual(data["mortality_rate"], 0.0)
        self.assertEqual(data["average_los_label"], "8.0")

    def test_journey_uses_cohort(self) -> None:
        resp = self.client.post("/api/journey", json={**PROFILE, "seed": 5})
        self.assertEqual(resp.status_code, 200, resp.text)
        outcome = resp.json()["outcome"]
        self.assertTrue(outcome["survived"])
        self.assertEqual(outcome["recovery_time_days"], 8)
        self.assertEqual(outcome["basis"], "cohort")


class TestWaveformEndpoint(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)

    def test_points(self) -> None:
        resp = self.client.get("/api/waveform", params={"heart_rate": 72, "samples": 50, "seed": 1})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["window_sec"], 5.0)
        self.assertEqual(len(data["points"]), 50)
        self.assertEqual(data["points"][0][0], 0.0)

    def test_default_sample_count(self) -> None:
        resp = self.client.get("/api/waveform", params={"heart_rate": 60})
        self.assertEqual(len(resp.json()["points"]), 100)

    def test_rejects_non_positive_heart_rate(self) -> None:
        self.assertEqual(self.client.get("/api/waveform", params={"heart_rate": 0}).status_code, 422)
        self.assertEqual(self.client.get("/api/waveform", params={"heart_rate": -10}).status_code, 422)


class TestCatalogEndpoints(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)

    def test_list(self) -> None:
        data = self.client.get("/api/catalog/departments").json()
        self.assertEqual(len(data["departments"]), 4)
        self.assertIn("Robotic", data["descriptions"]["approaches"])

    def test_single_department(self) -> None:
        resp = self.client.get("/api/catalog/departments/Gynecology")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["sexes"], ["Female"])
        self.assertEqual([opt["value"] for opt in data["anesthesia"]], ["General", "Spinal"])

    def test_unknown_department(self) -> None:
        resp = self.client.get("/api/catalog/departments/Cardiology")
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()

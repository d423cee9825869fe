# -*- coding: utf-8 -*-

from __future__ import annotations

import math
import unittest

from surgical_journey.catalog import (
    DEPARTMENT_CATALOG,
    CatalogOption,
    department_options,
    is_combination_allowed,
)
from surgical_journey.numeric import round_half_up, round_int, safe_float
from surgical_journey.profile import (
    Anesthesia,
    Approach,
    Department,
    Phase,
    PatientProfile,
    Sex,
    calculate_bmi,
    convert_height_to_cm,
    convert_weight_to_kg,
    parse_enum,
)


class TestProfile(unittest.TestCase):
    def test_bmi_and_unit_conversion(self) -> None:
        self.assertEqual(calculate_bmi(170, 98), 33.9)
        self.assertEqual(calculate_bmi(160, 64), 25.0)
        self.assertEqual(convert_height_to_cm(5, 10), 177.8)
        self.assertEqual(convert_weight_to_kg(150), 68.0)

    def test_bmi_derived_once(self) -> None:
        profile = PatientProfile(
            age=50, sex=Sex.female, asa=1,
            department=Department.urology,
            approach=Approach.robotic,
            anesthesia=Anesthesia.general,
            height_cm=160, weight_kg=64,
        )
        self.assertEqual(profile.bmi, 25.0)
        explicit = PatientProfile(
            age=50, sex=Sex.female, asa=1,
            department=Department.urology,
            approach=Approach.robotic,
            anesthesia=Anesthesia.general,
            height_cm=160, weight_kg=64, bmi=30.0,
        )
        self.assertEqual(explicit.bmi, 30.0)
        unknown = PatientProfile(
            age=50, sex=Sex.female, asa=1,
            department=Department.urology,
            approach=Approach.robotic,
            anesthesia=Anesthesia.general,
            height_cm=160,
        )
        self.assertIsNone(unknown.bmi_value)
        self.assertIs(unknown.with_bmi(), unknown)

    def test_parse_enum_aliases(self) -> None:
        self.assertEqual(parse_enum(Sex, "M"), Sex.male)
        self.assertEqual(parse_enum(Sex, "female"), Sex.female)
        self.assertEqual(parse_enum(Department, "General surgery"), Department.general_surgery)
        self.assertEqual(parse_enum(Department, "thoracic_surgery"), Department.thoracic_surgery)
        self.assertEqual(parse_enum(Phase, "intraop"), Phase.during)
        self.assertEqual(parse_enum(Approach, Approach.open), Approach.open)
        with self.assertRaises(ValueError):
            parse_enum(Department, "Cardiology")
        with self.assertRaises(ValueError):
            parse_enum(Sex, None)

    def test_from_dict(self) -> None:
        profile = PatientProfile.from_dict({
            "age": "45",
            "sex": "F",
            "asa": 1,
            "department": "Gynecology",
            "approach": "Robotic",
            "ane_type": "Spinal",
            "height": 160,
            "weight": 64,
            "emop": 1,
        })
        self.assertEqual(profile.age, 45)
        self.assertEqual(profile.anesthesia, Anesthesia.spinal)
        self.assertEqual(profile.bmi, 25.0)
        self.assertTrue(profile.is_emergency)


class TestNumeric(unittest.TestCase):
    def test_rounding_matches_half_up(self) -> None:
        self.assertEqual(round_int(2.5), 3)
        self.assertEqual(round_int(3.5), 4)
        self.assertEqual(round_int(-2.5), -2)
        self.assertEqual(round_int(5 * 0.7), 4)
        self.assertEqual(round_half_up(6.25, 1), 6.3)

    def test_safe_float(self) -> None:
        self.assertEqual(safe_float("3.5"), 3.5)
        self.assertIsNone(safe_float("abc"))
        self.assertIsNone(safe_float(math.nan))
        self.assertEqual(safe_float(None, 0.0), 0.0)


class TestCatalog(unittest.TestCase):
    def test_every_department_listed(self) -> None:
        self.assertEqual(set(DEPARTMENT_CATALOG), set(Department))

    def test_option_display_keeps_value_separate(self) -> None:
        option = CatalogOption("Open", 63.0)
        self.assertEqual(option.value, "Open")
        self.assertEqual(option.display, "Open (63.0%)")
        self.assertEqual(CatalogOption("Robotic").display, "Robotic")

    def test_lookup_by_label(self) -> None:
        entry = department_options("Thoracic surgery")
        self.assertEqual(entry.department, Department.thoracic_surgery)
        self.assertEqual([opt.value for opt in entry.anesthesia], ["General", "Sedation"])

    def test_allowed_combinations(self) -> None:
        def profile(**overrides) -> PatientProfile:
            values = dict(
                age=60, sex=Sex.male, asa=2, bmi=26.0,
                department=Department.general_surgery,
                approach=Approach.open,
                anesthesia=Anesthesia.general,
            )
            values.update(overrides)
            return PatientProfile(**values)

        self.assertTrue(is_combination_allowed(profile()))
        self.assertFalse(is_combination_allowed(profile(department=Department.gynecology)))
        self.assertTrue(is_combination_allowed(profile(department=Department.gynecology, sex=Sex.female)))
        self.assertFalse(is_combination_allowed(profile(department=Department.urology, anesthesia=Anesthesia.spinal)))
        self.assertFalse(is_combination_allowed(profile(department=Department.thoracic_surgery,
                                                        anesthesia=Anesthesia.spinal)))


if __name__ == "__main__":
    unittest.main()

# -*- coding: utf-8 -*-
"""
Department catalog

Options offered per department together with the dataset statistics shown
next to them. Option values and their display percentages are kept in
separate fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .narrative import DEPARTMENT_LABELS
from .profile import Anesthesia, Approach, Department, PatientProfile, Sex, parse_enum


@dataclass(frozen=True)
class CatalogOption:
    value: str
    percentage: Optional[float] = None

    @property
    def display(self) -> str:
        if self.percentage is None:
            return self.value
        return f"{self.value} ({self.percentage:.1f}%)"


@dataclass(frozen=True)
class DepartmentCatalog:
    department: Department
    title: str
    description: str
    case_count: int
    dataset_share: float
    sexes: Tuple[Sex, ...]
    male_percentage: float
    age_range: str
    height_range: str
    weight_range: str
    approaches: Tuple[CatalogOption, ...]
    anesthesia: Tuple[CatalogOption, ...]

    def allows(self, approach: Approach, anesthesia: Anesthesia, sex: Sex) -> bool:
        return (
            sex in self.sexes
            and approach.value in {opt.value for opt in self.approaches}
            and anesthesia.value in {opt.value for opt in self.anesthesia}
        )

    def to_dict(self) -> dict:
        return {
            "department": self.department.value,
            "label": DEPARTMENT_LABELS[self.department],
            "title": self.title,
            "description": self.description,
            "case_count": self.case_count,
            "dataset_share": self.dataset_share,
            "sexes": [sex.value for sex in self.sexes],
            "male_percentage": self.male_percentage,
            "age_range": self.age_range,
            "height_range": self.height_range,
            "weight_range": self.weight_range,
            "approaches": [
                {"value": opt.value, "percentage": opt.percentage, "display": opt.display}
                for opt in self.approaches
            ],
            "anesthesia": [
                {"value": opt.value, "percentage": opt.percentage, "display": opt.display}
                for opt in self.anesthesia
            ],
        }


DEPARTMENT_CATALOG: Dict[Department, DepartmentCatalog] = {
    Department.general_surgery: DepartmentCatalog(
        department=Department.general_surgery,
        title="General Surgery",
        description=(
            "General surgery encompasses a wide range of procedures including abdominal "
            "surgeries, such as gastrointestinal procedures, appendectomy, and gallbladder "
            "removal; hernia repairs; and various tumor removals."
        ),
        case_count=4930,
        dataset_share=77.2,
        sexes=(Sex.male, Sex.female),
        male_percentage=51.2,
        age_range="59 (48-68)",
        height_range="162 (156-169)",
        weight_range="60 (53-69)",
        approaches=(
            CatalogOption("Open", 63.0),
            CatalogOption("Videoscopic", 34.2),
            CatalogOption("Robotic", 2.7),
        ),
        anesthesia=(
            CatalogOption("General", 93.9),
            CatalogOption("Spinal", 5.0),
            CatalogOption("Sedation", 1.1),
        ),
    ),
    Department.thoracic_surgery: DepartmentCatalog(
        department=Department.thoracic_surgery,
        title="Thoracic Surgery",
        description=(
            "Thoracic surgery includes operations on the lungs, esophagus, and other "
            "structures within the chest cavity. These surgeries often involve "
            "video-assisted techniques."
        ),
        case_count=1111,
        dataset_share=17.4,
        sexes=(Sex.male, Sex.female),
        male_percentage=55.6,
        age_range="61 (52-70)",
        height_range="163 (156-169)",
        weight_range="61 (54-69)",
        approaches=(
            CatalogOption("Open", 17.1),
            CatalogOption("Videoscopic", 80.0),
            CatalogOption("Robotic", 2.9),
        ),
        anesthesia=(
            CatalogOption("General", 98.4),
            CatalogOption("Sedation", 1.6),
        ),
    ),
    Department.gynecology: DepartmentCatalog(
        department=Department.gynecology,
        title="Gynecology",
        description=(
            "Gynecological surgery involves procedures on the female reproductive system, "
            "including hysterectomy and ovarian cyst removal. These surgeries are "
            "performed exclusively on female patients."
        ),
        case_count=230,
        dataset_share=3.6,
        sexes=(Sex.female,),
        male_percentage=0.0,
        age_range="45 (35-55)",
        height_range="159 (155-163)",
        weight_range="59 (53-66)",
        approaches=(
            CatalogOption("Open", 28.3),
            CatalogOption("Videoscopic", 60.9),
            CatalogOption("Robotic", 10.9),
        ),
        anesthesia=(
            CatalogOption("General", 88.3),
            CatalogOption("Spinal", 11.7),
        ),
    ),
    Department.urology: DepartmentCatalog(
        department=Department.urology,
        title="Urology",
        description=(
            "Urologic surgery encompasses procedures on the urinary tract and male "
            "reproductive organs, including prostate, kidney and bladder operations."
        ),
        case_count=117,
        dataset_share=1.8,
        sexes=(Sex.male, Sex.female),
        male_percentage=86.3,
        age_range="64 (58-72)",
        height_range="168 (161-173)",
        weight_range="69 (62-77)",
        approaches=(
            CatalogOption("Open", 5.1),
            CatalogOption("Videoscopic", 29.1),
            CatalogOption("Robotic", 65.8),
        ),
        anesthesia=(CatalogOption("General", 100.0),),
    ),
}

APPROACH_DESCRIPTIONS: Dict[Approach, str] = {
    Approach.open: (
        "Open surgery involves a larger incision to directly access the surgical site. "
        "Recovery time is typically longer than with minimally invasive approaches."
    ),
    Approach.videoscopic: (
        "Videoscopic surgery (laparoscopy/thoracoscopy) uses several small incisions, a "
        "camera and specialized instruments, typically with faster recovery than open surgery."
    ),
    Approach.robotic: (
        "Robotic surgery uses a surgeon-controlled robotic system for precise, minimally "
        "invasive procedures through small incisions."
    ),
}

ANESTHESIA_DESCRIPTIONS: Dict[Anesthesia, str] = {
    Anesthesia.general: (
        "General anesthesia involves complete loss of consciousness, sensation, and "
        "movement. The patient is typically intubated during surgery."
    ),
    Anesthesia.spinal: (
        "Spinal anesthesia numbs the lower half of the body; the patient remains awake "
        "but feels no sensation in the numbed area."
    ),
    Anesthesia.sedation: (
        "Sedation makes the patient drowsy and relaxed but not completely unconscious; "
        "it is typically used for less invasive procedures."
    ),
}


def department_options(department: object) -> DepartmentCatalog:
    """Catalog entry for a department value, name or dataset label."""
    return DEPARTMENT_CATALOG[parse_enum(Department, department)]


def is_combination_allowed(profile: PatientProfile) -> bool:
    entry = DEPARTMENT_CATALOG.get(profile.department)
    if entry is None:
        return False
    return entry.allows(profile.approach, profile.anesthesia, profile.sex)


def catalog_payload() -> List[dict]:
    return [entry.to_dict() for entry in DEPARTMENT_CATALOG.values()]


def descriptions_payload() -> dict:
    return {
        "approaches": {k.value: v for k, v in APPROACH_DESCRIPTIONS.items()},
        "anesthesia": {k.value: v for k, v in ANESTHESIA_DESCRIPTIONS.items()},
    }

# -*- coding: utf-8 -*-
"""
Patient profile

Input description of the hypothetical patient and the procedure they are
scheduled for, plus the enum vocabularies shared with the case dataset.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Type, TypeVar

from .numeric import round_half_up, safe_float


class Sex(str, Enum):
    male = "Male"
    female = "Female"


class Department(str, Enum):
    general_surgery = "GeneralSurgery"
    thoracic_surgery = "ThoracicSurgery"
    gynecology = "Gynecology"
    urology = "Urology"


class Approach(str, Enum):
    open = "Open"
    videoscopic = "Videoscopic"
    robotic = "Robotic"


class Anesthesia(str, Enum):
    general = "General"
    spinal = "Spinal"
    sedation = "Sedation"


class Phase(str, Enum):
    pre = "pre"
    during = "during"
    post = "post"


PHASE_ORDER = (Phase.pre, Phase.during, Phase.post)

# Labels used by the case dataset export and older form values.
_ALIASES: Dict[Type[Enum], Dict[str, Enum]] = {
    Sex: {
        "m": Sex.male,
        "male": Sex.male,
        "f": Sex.female,
        "female": Sex.female,
    },
    Department: {
        "general surgery": Department.general_surgery,
        "generalsurgery": Department.general_surgery,
        "general_surgery": Department.general_surgery,
        "thoracic surgery": Department.thoracic_surgery,
        "thoracicsurgery": Department.thoracic_surgery,
        "thoracic_surgery": Department.thoracic_surgery,
        "gynecology": Department.gynecology,
        "urology": Department.urology,
    },
    Approach: {
        "open": Approach.open,
        "videoscopic": Approach.videoscopic,
        "robotic": Approach.robotic,
    },
    Anesthesia: {
        "general": Anesthesia.general,
        "spinal": Anesthesia.spinal,
        "sedation": Anesthesia.sedation,
        "sedationalgesia": Anesthesia.sedation,
    },
    Phase: {
        "pre": Phase.pre,
        "preop": Phase.pre,
        "during": Phase.during,
        "intraop": Phase.during,
        "post": Phase.post,
        "postop": Phase.post,
    },
}

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: object) -> E:
    """Resolve an enum member from its value, member name or dataset label.

    Raises:
        ValueError: the value names no member of ``enum_cls``.
    """
    if isinstance(value, enum_cls):
        return value
    key = str(value or "").strip()
    for member in enum_cls:
        if key == member.value or key == member.name:
            return member
    alias = _ALIASES.get(enum_cls, {}).get(key.lower())
    if alias is None:
        raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}")
    return alias  # type: ignore[return-value]


def parse_enum_or_none(enum_cls: Type[E], value: object) -> Optional[E]:
    try:
        return parse_enum(enum_cls, value)
    except ValueError:
        return None


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """BMI from height (cm) and weight (kg), one decimal."""
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)


def convert_height_to_cm(feet: float, inches: float = 0) -> float:
    total_inches = (feet or 0) * 12 + (inches or 0)
    return round_half_up(total_inches * 2.54, 1)


def convert_weight_to_kg(lb: float) -> float:
    return round_half_up(lb * 0.45359237, 1)


@dataclass(frozen=True)
class PatientProfile:
    """Hypothetical patient plus the planned procedure.

    ``bmi`` is derived from height and weight when it is not given.
    Gynecology implies a female patient; callers are expected to guarantee it.
    """
    age: int
    sex: Sex
    asa: int
    department: Department
    approach: Approach
    anesthesia: Anesthesia
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    bmi: Optional[float] = None
    is_emergency: bool = False

    def __post_init__(self) -> None:
        if self.bmi is None and self.height_cm and self.weight_kg:
            object.__setattr__(
                self, "bmi", calculate_bmi(self.height_cm, self.weight_kg)
            )

    @property
    def bmi_value(self) -> Optional[float]:
        """BMI as a finite float, or None when it cannot be known."""
        return safe_float(self.bmi)

    def with_bmi(self) -> "PatientProfile":
        if self.bmi_value is not None:
            return self
        if self.height_cm and self.weight_kg:
            return replace(self, bmi=calculate_bmi(self.height_cm, self.weight_kg))
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "PatientProfile":
        """Build a profile from loosely typed form data.

        Accepts ``ane_type``/``anesthesia`` and ``emop``/``is_emergency``.
        """
        anesthesia = data.get("anesthesia", data.get("ane_type"))
        emergency = data.get("is_emergency", data.get("emop", False))
        height = safe_float(data.get("height_cm", data.get("height")))
        weight = safe_float(data.get("weight_kg", data.get("weight")))
        return cls(
            age=int(data["age"]),  # type: ignore[arg-type]
            sex=parse_enum(Sex, data.get("sex")),
            asa=int(data["asa"]),  # type: ignore[arg-type]
            department=parse_enum(Department, data.get("department")),
            approach=parse_enum(Approach, data.get("approach")),
            anesthesia=parse_enum(Anesthesia, anesthesia),
            height_cm=height,
            weight_kg=weight,
            bmi=safe_float(data.get("bmi")),
            is_emergency=bool(emergency),
        )

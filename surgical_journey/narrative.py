from __future__ import annotations

from typing import Dict

from .profile import Anesthesia, Approach, Department, Phase, PatientProfile, Sex, parse_enum
from .simulation.vitals import PhaseVitals

DEPARTMENT_LABELS: Dict[Department, str] = {
    Department.general_surgery: "General surgery",
    Department.thoracic_surgery: "Thoracic surgery",
    Department.gynecology: "Gynecology",
    Department.urology: "Urology",
}

INTRAOP_DEPARTMENT_NOTES: Dict[Department, str] = {
    Department.general_surgery: (
        "Abdominal access has been established and the surgical team is "
        "proceeding with the planned intervention. "
    ),
    Department.thoracic_surgery: (
        "Thoracic access has been established and the procedure is underway "
        "with careful monitoring of respiratory parameters. "
    ),
    Department.gynecology: (
        "Pelvic access has been established and the surgical team is "
        "proceeding with the gynecological procedure. "
    ),
    Department.urology: (
        "Urological procedure is in progress with the surgical team "
        "maintaining careful attention to fluid balance. "
    ),
}

INTRAOP_ANESTHESIA_NOTES: Dict[Anesthesia, str] = {
    Anesthesia.general: "Anesthesia is being maintained at appropriate depth with stable parameters. ",
    Anesthesia.spinal: "Spinal block is providing adequate anesthesia with patient remaining stable. ",
    Anesthesia.sedation: "Sedation is being maintained at appropriate level with patient remaining comfortable. ",
}

POSTOP_ANESTHESIA_NOTES: Dict[Anesthesia, str] = {
    Anesthesia.general: "Patient is emerging from general anesthesia with protective reflexes returning. ",
    Anesthesia.spinal: "Spinal anesthesia is gradually resolving with return of motor function expected. ",
    Anesthesia.sedation: "Sedation effects are diminishing and patient is becoming more alert. ",
}


def _procedure(profile: PatientProfile) -> str:
    department = DEPARTMENT_LABELS.get(profile.department, str(profile.department.value))
    return f"{profile.approach.value.lower()} {department.lower()} procedure"


def _vitals_sentence(vitals: PhaseVitals) -> str:
    return (
        f"heart rate of {vitals.heart_rate} bpm, blood pressure of "
        f"{vitals.blood_pressure} mmHg, and oxygen saturation at "
        f"{vitals.oxygen_saturation}%. "
    )


def compose_narrative(profile: PatientProfile, vitals: PhaseVitals, phase: Phase) -> str:
    """Descriptive text for one phase of the journey."""
    phase = parse_enum(Phase, phase)
    anesthesia = profile.anesthesia.value.lower()
    procedure = _procedure(profile)

    if phase is Phase.pre:
        sex = "male" if profile.sex == Sex.male else "female"
        text = (
            f"Patient is a {profile.age}-year-old {sex} scheduled for {procedure} "
            f"under {anesthesia} anesthesia. "
        )
        text += "Vital signs are stable with " + _vitals_sentence(vitals)
        if profile.asa >= 3:
            text += f"ASA physical status {profile.asa} indicates significant pre-existing health concerns. "
        else:
            status = "a healthy patient" if profile.asa == 1 else "mild systemic disease"
            text += f"ASA physical status {profile.asa} indicates {status}. "
        text += "Patient has been prepared for surgery and anesthesia will begin shortly."
        return text

    if phase is Phase.during:
        text = f"Patient is now under {anesthesia} anesthesia for {procedure}. "
        text += "Current vital signs show " + _vitals_sentence(vitals)
        text += INTRAOP_DEPARTMENT_NOTES.get(profile.department, "")
        text += INTRAOP_ANESTHESIA_NOTES.get(profile.anesthesia, "")

        if vitals.heart_rate > 100:
            text += "Note: Heart rate is slightly elevated and being monitored closely. "
        elif vitals.heart_rate < 60:
            text += "Note: Heart rate is on the lower side but within acceptable limits for anesthesia. "

        bp = vitals.blood_pressure
        if bp.systolic > 160 or bp.diastolic > 100:
            text += "Blood pressure is elevated and being addressed. "
        elif bp.systolic < 90:
            text += "Blood pressure is running low but within manageable range. "

        if vitals.oxygen_saturation < 94:
            text += "Oxygen saturation is below optimal levels and being closely monitored. "
        return text.rstrip()

    text = f"Patient has completed {procedure} under {anesthesia} anesthesia and is now in recovery. "
    text += "Current vital signs show " + _vitals_sentence(vitals)
    text += POSTOP_ANESTHESIA_NOTES.get(profile.anesthesia, "")
    if profile.department in (Department.general_surgery, Department.thoracic_surgery):
        text += "Pain is being managed with appropriate analgesics. "
    if profile.approach == Approach.open:
        text += "Surgical site has been dressed and shows no immediate concerns. "
    else:
        text += "Minimal access sites have been dressed and appear clean. "
    text += "Recovery is proceeding as expected with continued monitoring."
    return text

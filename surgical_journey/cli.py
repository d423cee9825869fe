# -*- coding: utf-8 -*-
"""
CLI tool for running surgical journeys from a terminal.

Usage:
    python -m surgical_journey.cli simulate --age 70 --sex Male --height 170 --weight 98 \
        --asa 2 --department GeneralSurgery --approach Open --anesthesia General
    python -m surgical_journey.cli waveform --heart-rate 72
    python -m surgical_journey.cli catalog
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import settings
from .logging_config import configure_logging


def cmd_simulate(args: argparse.Namespace) -> int:
    """Generate and print one journey."""
    from .cases.storage import CaseDataset
    from .journey import generate_journey
    from .profile import PatientProfile
    from .simulation.rng import make_rng

    try:
        profile = PatientProfile.from_dict({
            "age": args.age,
            "sex": args.sex,
            "height_cm": args.height,
            "weight_kg": args.weight,
            "bmi": args.bmi,
            "asa": args.asa,
            "department": args.department,
            "approach": args.approach,
            "anesthesia": args.anesthesia,
            "is_emergency": args.emergency,
        })
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    if profile.bmi_value is None:
        print("Error: provide --bmi or both --height and --weight")
        return 1

    data_file = Path(args.dataset) if args.dataset else settings.data_file
    dataset = CaseDataset.from_csv(data_file)
    rng = make_rng(args.seed) if args.seed is not None else None
    journey = generate_journey(profile, dataset, rng=rng)

    if args.json:
        print(json.dumps(journey.to_dict(), indent=2, ensure_ascii=False))
        return 0

    summary = journey.cohort_summary
    print(f"Similar patients: {summary.size} (dataset: {len(dataset)})")
    print(f"Mortality rate in similar cases: {summary.mortality_rate * 100:.1f}%")
    print(f"Average hospital stay: {summary.average_los_label()} days")
    print("-" * 50)
    for phase, vitals in journey.phases.items():
        print(f"\n[{phase.value}] HR {vitals.heart_rate} bpm | BP {vitals.blood_pressure} mmHg "
              f"| SpO2 {vitals.oxygen_saturation}%")
        print(f"    {vitals.narrative}")

    outcome = journey.outcome
    print("-" * 50)
    print("Surgery Successful" if outcome.survived else "Surgery Unsuccessful")
    print(f"Recovery: {outcome.recovery_time_days} days")
    print(f"Complication risk: {outcome.complication_risk.label} (score {outcome.complication_score})")
    if outcome.icu_stay_required:
        print(f"ICU stay: {outcome.icu_days} days")
    print("Key factors:")
    for factor in outcome.contributing_factors:
        print(f"  - {factor}")
    return 0


def cmd_waveform(args: argparse.Namespace) -> int:
    """Print an ECG trace as time/amplitude rows."""
    from .simulation.rng import make_rng
    from .simulation.waveform import generate_waveform

    rng = make_rng(args.seed) if args.seed is not None else None
    try:
        points = generate_waveform(args.heart_rate, args.samples, rng=rng)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    for t, value in points:
        print(f"{t:.3f}\t{value:.4f}")
    return 0


def cmd_catalog(args: argparse.Namespace) -> int:
    """Show department options with dataset statistics."""
    from .catalog import DEPARTMENT_CATALOG

    for entry in DEPARTMENT_CATALOG.values():
        print(f"\n{entry.title} [{entry.department.value}] - {entry.case_count} cases ({entry.dataset_share}%)")
        print(f"  Sexes: {', '.join(sex.value for sex in entry.sexes)}")
        print(f"  Approaches: {', '.join(opt.display for opt in entry.approaches)}")
        print(f"  Anesthesia: {', '.join(opt.display for opt in entry.anesthesia)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Surgical Journey CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: SURGJ_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # simulate command
    sim_parser = subparsers.add_parser("simulate", help="Generate a surgical journey")
    sim_parser.add_argument("--age", type=int, required=True)
    sim_parser.add_argument("--sex", required=True, help="Male | Female")
    sim_parser.add_argument("--height", type=float, help="Height (cm)")
    sim_parser.add_argument("--weight", type=float, help="Weight (kg)")
    sim_parser.add_argument("--bmi", type=float, help="BMI, overrides height/weight")
    sim_parser.add_argument("--asa", type=int, required=True, choices=range(1, 6))
    sim_parser.add_argument("--department", required=True,
                            help="GeneralSurgery | ThoracicSurgery | Gynecology | Urology")
    sim_parser.add_argument("--approach", required=True, help="Open | Videoscopic | Robotic")
    sim_parser.add_argument("--anesthesia", required=True, help="General | Spinal | Sedation")
    sim_parser.add_argument("--emergency", action="store_true", help="Emergency operation")
    sim_parser.add_argument("--dataset", help="Case dataset CSV (default: SURGJ_DATA_FILE)")
    sim_parser.add_argument("--seed", type=int, help="Random seed for reproducible draws")
    sim_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    # waveform command
    wave_parser = subparsers.add_parser("waveform", help="Print a synthetic ECG trace")
    wave_parser.add_argument("--heart-rate", type=float, required=True)
    wave_parser.add_argument(
        "--samples",
        type=int,
        default=settings.waveform_samples,
        help=f"Number of points (default: {settings.waveform_samples})",
    )
    wave_parser.add_argument("--seed", type=int)

    # catalog command
    subparsers.add_parser("catalog", help="Show department options")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.log_level)

    commands = {
        "simulate": cmd_simulate,
        "waveform": cmd_waveform,
        "catalog": cmd_catalog,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())

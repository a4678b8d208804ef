#!/usr/bin/env python3
"""
BMI evaluation script.

Usage:
    python scripts/evaluate_bmi.py --height 170 --weight 70
    python scripts/evaluate_bmi.py --height 170 --weight 70 --json
    python scripts/evaluate_bmi.py --height 170 --weight 70 --patient-id 12 --submit
    python scripts/evaluate_bmi.py --csv measurements.csv --output results.csv
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import pandas as pd

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from patientbmi.api.client import AssessmentClient
from patientbmi.classifier.batch import evaluate_frame
from patientbmi.classifier.bmi import evaluate, parse_measurement
from patientbmi.core.config import get_settings
from patientbmi.core.constants import DATE_FORMAT
from patientbmi.core.exceptions import (
    ApiError,
    FormValidationError,
    InvalidMeasurement,
    NavigationError,
)
from patientbmi.workflow.vitals import VitalsScreen, submission_error_message


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else getattr(logging, get_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_date(date_str: str | None) -> date | None:
    """Parse date string to date object."""
    if date_str is None:
        return None

    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError:
        print(f"Error: Invalid date format '{date_str}'. Use YYYY-MM-DD.")
        sys.exit(1)


def run_single(args: argparse.Namespace) -> int:
    """Evaluate one measurement and optionally submit it."""
    height = parse_measurement(args.height)
    weight = parse_measurement(args.weight)
    if height is None or weight is None:
        print("Error: Please enter valid numbers for height and weight.")
        return 1

    try:
        result = evaluate(height, weight)
    except InvalidMeasurement as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print("\n" + "=" * 40)
        print("BMI RESULT")
        print("=" * 40)
        print(f"Height:     {height:g} cm")
        print(f"Weight:     {weight:g} kg")
        print(f"{result.display}")
        print(f"Category:   {result.category.value} ({result.category.description})")
        print(f"Next form:  {result.next_assessment.value} assessment")
        print("=" * 40 + "\n")

    if not args.submit:
        return 0

    try:
        screen = VitalsScreen(patient_id=args.patient_id or "", patient_name=args.patient_name)
        with AssessmentClient(base_url=args.base_url) as client:
            outcome = screen.submit(
                client,
                args.height,
                args.weight,
                visit_date=parse_date(args.date),
            )
    except (NavigationError, FormValidationError) as e:
        print(f"Error: {e}")
        return 1
    except ApiError as e:
        logging.error(f"Submission failed: {e}")
        print(f"Error: {submission_error_message(e)}")
        return 1

    print("Vitals recorded successfully!")
    print(f"Service BMI: {outcome.response.bmi} ({outcome.response.bmi_status})")
    print(f"Next form:   {outcome.response.next_form.value}")
    if outcome.routing_mismatch:
        print("Warning: service routing differs from local classification; following the service.")
    return 0


def run_batch(args: argparse.Namespace) -> int:
    """Evaluate every row of a CSV file."""
    source = Path(args.csv)
    if not source.exists():
        print(f"Error: File not found: {source}")
        return 1

    frame = pd.read_csv(source)
    try:
        results = evaluate_frame(frame)
    except KeyError as e:
        print(f"Error: {e}")
        return 1

    if args.output:
        results.to_csv(args.output, index=False)
        print(f"Wrote {len(results)} rows to {args.output}")
    else:
        print(results.to_string(index=False))

    return 0 if results["error"].isna().all() else 2


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Compute BMI, WHO category and follow-up assessment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/evaluate_bmi.py --height 170 --weight 70
    python scripts/evaluate_bmi.py --height 160 --weight 64 --patient-id 12 --submit
    python scripts/evaluate_bmi.py --csv vitals.csv --output vitals_bmi.csv

WHO BMI bands:
    Underweight  below 18.5   -> General assessment
    Normal       18.5 - 24.9  -> General assessment
    Overweight   25 - 29.9    -> Overweight assessment
    Obese        30 and above -> Overweight assessment
        """,
    )

    parser.add_argument("--height", type=str, help="Height in centimeters")
    parser.add_argument("--weight", type=str, help="Weight in kilograms")
    parser.add_argument("--csv", type=str, help="CSV with height_cm and weight_kg columns")
    parser.add_argument("--output", "-o", type=str, help="Output CSV for --csv mode")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    parser.add_argument("--submit", action="store_true", help="Submit vitals to the service")
    parser.add_argument("--patient-id", type=str, default=None, help="Patient id (with --submit)")
    parser.add_argument("--patient-name", type=str, default="", help="Patient name (with --submit)")
    parser.add_argument(
        "--date",
        "-d",
        type=str,
        default=None,
        help="Visit date (YYYY-MM-DD format, default: today)",
    )
    parser.add_argument("--base-url", type=str, default=None, help="Override the service base URL")

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.csv:
        return run_batch(args)
    if args.height is None or args.weight is None:
        parser.error("--height and --weight are required unless --csv is given")
    return run_single(args)


if __name__ == "__main__":
    sys.exit(main())

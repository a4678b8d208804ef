"""BMI computation, WHO classification and assessment routing."""

from patientbmi.classifier.batch import evaluate_frame
from patientbmi.classifier.bmi import (
    BmiPreview,
    classify,
    compute_bmi,
    evaluate,
    parse_measurement,
    preview,
    round_bmi,
    route_for_bmi,
    route_next,
)

__all__ = [
    "BmiPreview",
    "classify",
    "compute_bmi",
    "evaluate",
    "evaluate_frame",
    "parse_measurement",
    "preview",
    "round_bmi",
    "route_for_bmi",
    "route_next",
]

"""
PatientBMI - patient registration, BMI vitals and follow-up assessments.

Front-end toolkit for a remote patient/assessment REST service.

Outputs:
    - BMI rounded to one decimal
    - WHO category: Underweight / Normal / Overweight / Obese
    - Follow-up route: General or Overweight assessment

Design Philosophy:
    - The BMI classifier is pure: no I/O, no state
    - The remote service is the source of truth for routing
    - Screens pass their parameters explicitly
"""

from patientbmi.classifier.bmi import classify, compute_bmi, evaluate, route_next
from patientbmi.core.exceptions import InvalidMeasurement
from patientbmi.core.types import (
    AssessmentRoute,
    BmiCategory,
    BmiResult,
    NextAssessment,
    VitalMeasurement,
)

__version__ = "1.0.0"

__all__ = [
    "AssessmentRoute",
    "BmiCategory",
    "BmiResult",
    "InvalidMeasurement",
    "NextAssessment",
    "VitalMeasurement",
    "classify",
    "compute_bmi",
    "evaluate",
    "route_next",
    "__version__",
]

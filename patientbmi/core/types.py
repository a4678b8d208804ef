"""
Core type definitions for PatientBMI.

Defines enums and dataclasses shared by the classifier, the API layer
and the screen workflow.
"""

from dataclasses import dataclass
from enum import Enum


class BmiCategory(str, Enum):
    """
    WHO adult BMI categories.

    Band Thresholds:
        - UNDERWEIGHT: bmi < 18.5
        - NORMAL: 18.5 <= bmi < 25
        - OVERWEIGHT: 25 <= bmi < 30
        - OBESE: bmi >= 30

    Values match the ``bmi_status`` strings used by the remote service.
    """

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"

    @property
    def description(self) -> str:
        """Human-readable range of the band."""
        descriptions = {
            BmiCategory.UNDERWEIGHT: "BMI below 18.5",
            BmiCategory.NORMAL: "BMI 18.5 to 24.9",
            BmiCategory.OVERWEIGHT: "BMI 25 to 29.9",
            BmiCategory.OBESE: "BMI 30 and above",
        }
        return descriptions[self]

    @property
    def color(self) -> str:
        """Display colour for the category label."""
        colors = {
            BmiCategory.UNDERWEIGHT: "#ffbb33",
            BmiCategory.NORMAL: "#99cc00",
            BmiCategory.OVERWEIGHT: "#ff8800",
            BmiCategory.OBESE: "#ff4444",
        }
        return colors[self]


class NextAssessment(str, Enum):
    """Follow-up assessment screen chosen after vitals are recorded."""

    GENERAL = "General"
    OVERWEIGHT = "Overweight"


class NextForm(str, Enum):
    """
    Routing token reported by the remote service in ``next_form``.

    The service distinguishes obese patients, but both overweight and
    obese patients complete the same assessment.
    """

    GENERAL = "general"
    OVERWEIGHT = "overweight"
    OBESE = "obese"

    @property
    def assessment(self) -> NextAssessment:
        if self is NextForm.GENERAL:
            return NextAssessment.GENERAL
        return NextAssessment.OVERWEIGHT


class Gender(str, Enum):
    """Single-letter gender codes expected by the registration endpoint."""

    MALE = "M"
    FEMALE = "F"

    @property
    def label(self) -> str:
        return "Male" if self is Gender.MALE else "Female"


class GeneralHealth(str, Enum):
    """Answers offered for the general health question."""

    GOOD = "Good"
    POOR = "Poor"


@dataclass(frozen=True)
class VitalMeasurement:
    """A single height/weight reading. Not retained after evaluation."""

    height_cm: float
    weight_kg: float


@dataclass(frozen=True)
class BmiResult:
    """
    Result of evaluating a vital measurement.

    Derived and immutable: recomputed whenever the inputs change.
    """

    bmi_value: float  # rounded to one decimal
    category: BmiCategory
    next_assessment: NextAssessment

    @property
    def display(self) -> str:
        """Text shown under the vitals form."""
        return f"BMI: {self.bmi_value:.1f}"

    @property
    def needs_weight_assessment(self) -> bool:
        return self.next_assessment is NextAssessment.OVERWEIGHT

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "bmi": self.bmi_value,
            "bmi_status": self.category.value,
            "next_assessment": self.next_assessment.value,
        }


@dataclass(frozen=True)
class AssessmentRoute:
    """
    Parameters handed from the vitals screen to an assessment screen.

    Carries patient identity and the BMI explicitly instead of relying
    on state shared between screens.
    """

    patient_id: str
    patient_name: str
    bmi: float
    next_assessment: NextAssessment

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "patient_id": self.patient_id,
            "patient_name": self.patient_name,
            "bmi": self.bmi,
            "next_assessment": self.next_assessment.value,
        }

"""
Wire models for the patient/assessment REST service.

Field names are the snake_case JSON keys the service expects. Dates
travel as ISO-8601 calendar dates (YYYY-MM-DD).
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from patientbmi.core.types import (
    BmiCategory,
    BmiResult,
    Gender,
    GeneralHealth,
    NextAssessment,
    NextForm,
)


class WireModel(BaseModel):
    """Base for all request/response bodies."""

    # Service ids may arrive as integers
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    def to_payload(self) -> dict:
        """JSON-ready body with ISO dates."""
        return self.model_dump(mode="json")


class PatientRegistrationRequest(WireModel):
    """Fields sent when registering a patient. Server fills id, age, full name."""

    patient_id: str | None = Field(default=None, description="Hospital patient number")
    first_name: str = Field(min_length=1)
    middle_name: str | None = None
    last_name: str = Field(min_length=1)
    gender: Gender
    date_of_birth: date
    registration_date: date | None = None

    @field_validator("middle_name", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None or not str(v).strip():
            return None
        return v


class Patient(WireModel):
    """Patient record returned by the service."""

    id: str
    patient_id: str | None = None
    first_name: str
    middle_name: str | None = None
    last_name: str
    gender: str
    date_of_birth: date | None = None
    registration_date: date
    full_name: str | None = None
    age: int | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or f"{self.first_name} {self.last_name}"


class PatientListingItem(WireModel):
    """Row of the patient listing screen."""

    id: str
    full_name: str
    age: int | None = None
    last_bmi_status: str | None = None
    last_assessment_date: date | None = None

    @property
    def age_display(self) -> str:
        return str(self.age) if self.age and self.age > 0 else "N/A"


class PatientVital(WireModel):
    """Height/weight measurement submitted for a visit."""

    patient_id: str = Field(min_length=1)
    visit_date: date
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    bmi: float | None = None
    bmi_status: BmiCategory | None = None

    @classmethod
    def from_result(
        cls,
        patient_id: str,
        visit_date: date,
        height_cm: float,
        weight_kg: float,
        result: BmiResult,
    ) -> "PatientVital":
        return cls(
            patient_id=patient_id,
            visit_date=visit_date,
            height_cm=height_cm,
            weight_kg=weight_kg,
            bmi=result.bmi_value,
            bmi_status=result.category,
        )


class VitalResponse(WireModel):
    """
    Service answer to a vitals submission.

    next_form is the service's own routing decision: "general",
    "overweight" or "obese". bmi_status is display text; a known
    category in any case is normalised to its canonical spelling and
    anything else is kept as sent.
    """

    id: str | None = None
    patient_name: str | None = None
    bmi: float
    bmi_status: str = ""
    next_form: NextForm

    @field_validator("bmi_status", mode="before")
    @classmethod
    def canonical_status(cls, v: str | None) -> str:
        text = "" if v is None else str(v).strip()
        for category in BmiCategory:
            if text.lower() == category.value.lower():
                return category.value
        return text

    @field_validator("next_form", mode="before")
    @classmethod
    def lowercase_next_form(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def category(self) -> BmiCategory | None:
        """bmi_status as a category, or None if the service used other text."""
        try:
            return BmiCategory(self.bmi_status)
        except ValueError:
            return None

    @property
    def next_assessment(self) -> NextAssessment:
        return self.next_form.assessment


class GeneralAssessment(WireModel):
    """General health assessment for patients with BMI below 25."""

    patient_id: str = Field(min_length=1)
    visit_date: date
    general_health: GeneralHealth
    currently_using_drugs: bool
    comments: str = Field(min_length=1)


class OverweightAssessment(WireModel):
    """Assessment for overweight and obese patients, with diet history."""

    patient_id: str = Field(min_length=1)
    visit_date: date
    general_health: GeneralHealth
    diet_history: bool
    comments: str = Field(min_length=1)

"""
Vitals screen workflow.

Workflow:
    1. Opened for one patient (from registration or the listing)
    2. User enters height (cm) and weight (kg)
    3. BMI and category are previewed as the fields change
    4. Vitals are submitted to the service
    5. The patient is routed to the general or overweight assessment

Routing Note:
    The service recomputes bmi_status and next_form. Its next_form is
    used for navigation; the local classification is only feedback.
    A disagreement is logged and reported on the outcome.
"""

import logging
from dataclasses import dataclass
from datetime import date

from patientbmi.api.client import AssessmentClient
from patientbmi.api.models import PatientVital, VitalResponse
from patientbmi.classifier.bmi import BmiPreview, evaluate, parse_measurement, preview
from patientbmi.core.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    FormValidationError,
    InvalidMeasurement,
    NavigationError,
)
from patientbmi.core.types import AssessmentRoute, BmiResult
from patientbmi.workflow.fields import clean

logger = logging.getLogger(__name__)

VITALS_SAVED_UNREADABLE = (
    "Vitals saved, but the service response could not be read. "
    "Check the patient listing before submitting again."
)


@dataclass(frozen=True)
class VitalsOutcome:
    """Everything the UI needs after a successful vitals submission."""

    vital: PatientVital
    local_result: BmiResult
    response: VitalResponse
    route: AssessmentRoute

    @property
    def routing_mismatch(self) -> bool:
        """True when the service routed differently from the local classifier."""
        return self.local_result.next_assessment is not self.response.next_assessment


@dataclass(frozen=True)
class VitalsScreen:
    """Vitals entry for a single patient."""

    patient_id: str
    patient_name: str = ""

    def __post_init__(self) -> None:
        if not clean(self.patient_id):
            raise NavigationError("Error: No patient data")

    @property
    def title(self) -> str:
        return f"Patient: {self.patient_name}"

    def preview(self, height_text: str | None, weight_text: str | None) -> BmiPreview:
        """Live BMI feedback for the current field contents."""
        return preview(height_text, weight_text)

    def build_vital(
        self,
        height_text: str | None,
        weight_text: str | None,
        visit_date: date | None = None,
    ) -> tuple[PatientVital, BmiResult]:
        """
        Validate the fields on submit and build the vitals record.

        Args:
            height_text: Height field contents (cm)
            weight_text: Weight field contents (kg)
            visit_date: Visit date (default: today)

        Returns:
            The record to submit and its local BMI evaluation

        Raises:
            FormValidationError: With the message to show the user
        """
        if not clean(height_text) or not clean(weight_text):
            raise FormValidationError("Please enter height and weight")

        height = parse_measurement(height_text)
        weight = parse_measurement(weight_text)
        if height is None or weight is None:
            raise FormValidationError("Please enter valid numbers")

        try:
            result = evaluate(height, weight)
        except InvalidMeasurement as e:
            raise FormValidationError(
                "Height and weight must be positive numbers",
                field=e.field,
            ) from e

        vital = PatientVital.from_result(
            patient_id=self.patient_id,
            visit_date=visit_date or date.today(),
            height_cm=height,
            weight_kg=weight,
            result=result,
        )
        logger.debug(
            f"Built vitals for {self.patient_id}: height={height}, "
            f"weight={weight}, bmi={result.bmi_value}, category={result.category.value}"
        )
        return vital, result

    def submit(
        self,
        client: AssessmentClient,
        height_text: str | None,
        weight_text: str | None,
        visit_date: date | None = None,
    ) -> VitalsOutcome:
        """
        Submit vitals and resolve the next assessment screen.

        Raises:
            FormValidationError: If the fields are not valid
            ApiError: If the service rejects the record or is unreachable
        """
        vital, local_result = self.build_vital(height_text, weight_text, visit_date)
        response = client.submit_vitals(vital)

        outcome = VitalsOutcome(
            vital=vital,
            local_result=local_result,
            response=response,
            route=AssessmentRoute(
                patient_id=self.patient_id,
                patient_name=response.patient_name or self.patient_name,
                bmi=response.bmi,
                next_assessment=response.next_assessment,
            ),
        )

        if outcome.routing_mismatch:
            logger.warning(
                f"Routing mismatch for {self.patient_id}: local BMI "
                f"{local_result.bmi_value} -> {local_result.next_assessment.value}, "
                f"service BMI {response.bmi} -> {response.next_form.value}. "
                f"Following the service."
            )
        logger.info(
            f"Next form for {self.patient_id}: {outcome.route.next_assessment.value} "
            f"(BMI {outcome.route.bmi})"
        )
        return outcome


def submission_error_message(error: ApiError) -> str:
    """Map a failed vitals submission to the message shown to the user."""
    if isinstance(error, ApiConnectionError):
        return error.user_message
    if isinstance(error, ApiResponseError):
        # Record already stored
        return VITALS_SAVED_UNREADABLE

    if error.status_code is not None and 400 <= error.status_code < 500:
        body = error.body or ""
        if "bmi" in body:
            return "BMI value error. Please check your values."
        if "5 digits" in body:
            return "Value too precise. Please use whole numbers or 1 decimal place."
    return "Failed to submit vitals. Please try again."

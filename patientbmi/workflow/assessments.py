"""
Follow-up assessment workflow.

Patients with BMI below 25 complete the general assessment; overweight
and obese patients complete the overweight assessment, which adds diet
history. Both return to the patient listing once submitted.
"""

import logging
from dataclasses import dataclass
from datetime import date

from patientbmi.api.client import AssessmentClient
from patientbmi.api.models import GeneralAssessment, OverweightAssessment
from patientbmi.core.exceptions import FormValidationError, NavigationError
from patientbmi.core.types import AssessmentRoute, GeneralHealth, NextAssessment
from patientbmi.workflow.fields import clean, format_date, parse_iso_date, parse_yes_no
from patientbmi.workflow.listing import ListingScreen

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required"


def _check_route(route: AssessmentRoute, expected: NextAssessment) -> None:
    if not clean(route.patient_id):
        raise NavigationError("Error: No patient data")
    if route.next_assessment is not expected:
        raise NavigationError(
            f"Patient {route.patient_id} is routed to the "
            f"{route.next_assessment.value} assessment, not {expected.value}"
        )


@dataclass
class GeneralAssessmentForm:
    """Raw contents of the general assessment screen."""

    visit_date: str = ""
    general_health: GeneralHealth | None = None
    using_drugs: str | None = None  # "Yes" / "No"
    comments: str = ""

    ASSESSMENT = NextAssessment.GENERAL

    @classmethod
    def with_defaults(cls, today: date | None = None) -> "GeneralAssessmentForm":
        return cls(visit_date=format_date(today or date.today()))

    def validate(self, route: AssessmentRoute) -> GeneralAssessment:
        """
        Check the form and build the assessment for the routed patient.

        Raises:
            NavigationError: If the route is for the other assessment
            FormValidationError: With the message to show the user
        """
        _check_route(route, self.ASSESSMENT)
        if (
            not clean(self.visit_date)
            or self.general_health is None
            or self.using_drugs is None
            or not clean(self.comments)
        ):
            raise FormValidationError(ALL_FIELDS_REQUIRED)

        return GeneralAssessment(
            patient_id=route.patient_id,
            visit_date=parse_iso_date(self.visit_date, "visit_date"),
            general_health=self.general_health,
            currently_using_drugs=parse_yes_no(self.using_drugs, "using_drugs"),
            comments=clean(self.comments),
        )

    def submit(self, client: AssessmentClient, route: AssessmentRoute) -> GeneralAssessment:
        return client.submit_general_assessment(self.validate(route))


@dataclass
class OverweightAssessmentForm:
    """Raw contents of the overweight/obese assessment screen."""

    visit_date: str = ""
    general_health: GeneralHealth | None = None
    diet_history: str | None = None  # "Yes" / "No"
    comments: str = ""

    ASSESSMENT = NextAssessment.OVERWEIGHT

    @classmethod
    def with_defaults(cls, today: date | None = None) -> "OverweightAssessmentForm":
        return cls(visit_date=format_date(today or date.today()))

    def validate(self, route: AssessmentRoute) -> OverweightAssessment:
        """
        Check the form and build the assessment for the routed patient.

        Raises:
            NavigationError: If the route is for the other assessment
            FormValidationError: With the message to show the user
        """
        _check_route(route, self.ASSESSMENT)
        if (
            not clean(self.visit_date)
            or self.general_health is None
            or self.diet_history is None
            or not clean(self.comments)
        ):
            raise FormValidationError(ALL_FIELDS_REQUIRED)

        return OverweightAssessment(
            patient_id=route.patient_id,
            visit_date=parse_iso_date(self.visit_date, "visit_date"),
            general_health=self.general_health,
            diet_history=parse_yes_no(self.diet_history, "diet_history"),
            comments=clean(self.comments),
        )

    def submit(
        self,
        client: AssessmentClient,
        route: AssessmentRoute,
    ) -> OverweightAssessment:
        return client.submit_overweight_assessment(self.validate(route))


AssessmentForm = GeneralAssessmentForm | OverweightAssessmentForm


def form_for(route: AssessmentRoute, today: date | None = None) -> AssessmentForm:
    """Blank form for the assessment the route points at."""
    if route.next_assessment is NextAssessment.OVERWEIGHT:
        return OverweightAssessmentForm.with_defaults(today)
    return GeneralAssessmentForm.with_defaults(today)


def submit_assessment(
    client: AssessmentClient,
    route: AssessmentRoute,
    form: AssessmentForm,
) -> ListingScreen:
    """
    Submit the assessment and return to the patient listing.

    Raises:
        NavigationError: If the form does not match the route
        FormValidationError: If the form is incomplete
        ApiError: If the service rejects the assessment
    """
    form.submit(client, route)
    logger.info(
        f"{route.next_assessment.value} assessment submitted for {route.patient_id}"
    )
    return ListingScreen()

"""
Patient registration workflow.

Validates the registration form, registers the patient and opens the
vitals screen for the new record.
"""

import logging
from dataclasses import dataclass
from datetime import date

from patientbmi.api.client import AssessmentClient
from patientbmi.api.models import PatientRegistrationRequest
from patientbmi.core.constants import DEFAULT_BIRTH_YEARS_AGO
from patientbmi.core.exceptions import FormValidationError
from patientbmi.core.types import Gender
from patientbmi.workflow.fields import clean, format_date, parse_iso_date
from patientbmi.workflow.vitals import VitalsScreen

logger = logging.getLogger(__name__)


def years_ago(today: date, years: int) -> date:
    """Same calendar day `years` earlier; Feb 29 falls back to Feb 28."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


@dataclass
class RegistrationForm:
    """Raw contents of the registration screen."""

    patient_number: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    gender: Gender | None = None
    date_of_birth: str = ""
    registration_date: str = ""

    @classmethod
    def with_defaults(cls, today: date | None = None) -> "RegistrationForm":
        """Blank form with registration today and birth 30 years back."""
        today = today or date.today()
        return cls(
            date_of_birth=format_date(years_ago(today, DEFAULT_BIRTH_YEARS_AGO)),
            registration_date=format_date(today),
        )

    def validate(self) -> PatientRegistrationRequest:
        """
        Check the form and build the registration request.

        Raises:
            FormValidationError: With the message to show the user
        """
        if self.gender is None:
            raise FormValidationError("Please select gender", field="gender")

        required = {
            "patient_number": self.patient_number,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth,
            "registration_date": self.registration_date,
        }
        missing = [name for name, value in required.items() if not clean(value)]
        if missing:
            raise FormValidationError("Please fill all required fields", field=missing[0])

        date_of_birth = parse_iso_date(self.date_of_birth, "date_of_birth")
        registration_date = parse_iso_date(self.registration_date, "registration_date")
        if date_of_birth > registration_date:
            raise FormValidationError(
                "Date of birth cannot be after the registration date",
                field="date_of_birth",
            )

        return PatientRegistrationRequest(
            patient_id=clean(self.patient_number),
            first_name=clean(self.first_name),
            middle_name=clean(self.middle_name) or None,
            last_name=clean(self.last_name),
            gender=self.gender,
            date_of_birth=date_of_birth,
            registration_date=registration_date,
        )


def register(client: AssessmentClient, form: RegistrationForm) -> VitalsScreen:
    """
    Register the patient on the form and open their vitals screen.

    Raises:
        FormValidationError: If the form is incomplete
        ApiError: If the service rejects the registration
    """
    request = form.validate()
    logger.info(f"Registering patient {request.patient_id}")
    patient = client.register_patient(request)
    return VitalsScreen(
        patient_id=patient.id,
        patient_name=f"{patient.first_name} {patient.last_name}",
    )

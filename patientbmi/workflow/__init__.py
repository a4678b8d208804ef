"""Screen workflow: form validation and explicit screen-to-screen parameters."""

from patientbmi.workflow.assessments import (
    GeneralAssessmentForm,
    OverweightAssessmentForm,
    form_for,
    submit_assessment,
)
from patientbmi.workflow.listing import ListingScreen, listing_frame, status_counts
from patientbmi.workflow.registration import RegistrationForm, register
from patientbmi.workflow.vitals import VitalsOutcome, VitalsScreen, submission_error_message

__all__ = [
    "GeneralAssessmentForm",
    "ListingScreen",
    "OverweightAssessmentForm",
    "RegistrationForm",
    "VitalsOutcome",
    "VitalsScreen",
    "form_for",
    "listing_frame",
    "register",
    "status_counts",
    "submission_error_message",
    "submit_assessment",
]

"""REST client and wire models for the patient/assessment service."""

from patientbmi.api.base import BaseAPIClient
from patientbmi.api.client import AssessmentClient
from patientbmi.api.models import (
    GeneralAssessment,
    OverweightAssessment,
    Patient,
    PatientListingItem,
    PatientRegistrationRequest,
    PatientVital,
    VitalResponse,
)

__all__ = [
    "AssessmentClient",
    "BaseAPIClient",
    "GeneralAssessment",
    "OverweightAssessment",
    "Patient",
    "PatientListingItem",
    "PatientRegistrationRequest",
    "PatientVital",
    "VitalResponse",
]

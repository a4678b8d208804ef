"""
Client for the patient/assessment REST service.

Endpoints:
- POST patients/                 register a patient
- GET  patients/listing/         list patients, optionally by date range
- POST vitals/                   record height/weight, returns routing
- POST general-assessments/      general health follow-up
- POST overweight-assessments/   overweight/obese follow-up
"""

import logging
from datetime import date

import requests

from patientbmi.api.base import BaseAPIClient
from patientbmi.api.models import (
    GeneralAssessment,
    OverweightAssessment,
    Patient,
    PatientListingItem,
    PatientRegistrationRequest,
    PatientVital,
    VitalResponse,
)
from patientbmi.core.config import ApiConfig, Settings, get_settings, load_config
from patientbmi.core.constants import DATE_FORMAT
from patientbmi.core.exceptions import ApiError, ApiResponseError

logger = logging.getLogger(__name__)


class AssessmentClient(BaseAPIClient):
    """
    Patient/assessment service client.

    One instance owns one HTTP session; use it as a context manager or
    call close() when done.
    """

    SOURCE_NAME = "assessment-api"

    def __init__(
        self,
        base_url: str | None = None,
        settings: Settings | None = None,
        api_config: ApiConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize assessment client.

        Args:
            base_url: Service root (from settings if not provided)
            settings: Settings object
            api_config: Endpoint/header config (from api.yaml if present)
            session: HTTP session (created if not provided)
        """
        self.settings = settings or get_settings()
        self.api_config = api_config or load_config("api", required=False)
        self.endpoints = self.api_config.endpoints

        super().__init__(
            base_url=base_url or self.settings.api_base_url,
            timeout=self.settings.timeout,
            headers=self.api_config.headers,
            session=session,
            log_bodies=self.settings.log_http_bodies,
        )

    def with_base_url(self, base_url: str) -> "AssessmentClient":
        """
        Replace this client with one pointed at another service root.

        The new client shares settings and endpoint config. This client's
        session is closed; use the returned client from here on.
        """
        logger.info(f"Switching {self.SOURCE_NAME} base URL to {base_url}")
        client = AssessmentClient(
            base_url=base_url,
            settings=self.settings,
            api_config=self.api_config,
        )
        self.close()
        return client

    def register_patient(self, request: PatientRegistrationRequest) -> Patient:
        """
        Register a new patient.

        Args:
            request: Registration fields

        Returns:
            Created patient with server-generated id

        Raises:
            ApiError: 400 on invalid data, 409 if the patient number exists
        """
        endpoint = self.endpoints["register_patient"]
        data = self._post(endpoint, request.to_payload())
        patient = self._parse(Patient, data, endpoint)
        logger.info(f"Registered patient {patient.id} ({patient.display_name})")
        return patient

    def get_patient_listing(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[PatientListingItem]:
        """
        Get patients for the listing screen.

        Args:
            from_date: Optional start of the visit date range
            to_date: Optional end of the visit date range

        Returns:
            Listing rows, possibly empty
        """
        endpoint = self.endpoints["patient_listing"]
        params = {
            "from_date": from_date.strftime(DATE_FORMAT) if from_date else None,
            "to_date": to_date.strftime(DATE_FORMAT) if to_date else None,
        }
        data = self._get(endpoint, params=params)

        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiResponseError(
                f"Expected a list from {endpoint}, got {type(data).__name__}",
                endpoint=endpoint,
                body=str(data),
            )
        items = [self._parse(PatientListingItem, row, endpoint) for row in data]
        logger.debug(f"Listing returned {len(items)} patients")
        return items

    def submit_vitals(self, vital: PatientVital) -> VitalResponse:
        """
        Record a vitals measurement.

        The response carries the service's own BMI classification and
        the next_form routing token.
        """
        endpoint = self.endpoints["submit_vitals"]
        data = self._post(endpoint, vital.to_payload())
        response = self._parse(VitalResponse, data, endpoint)
        logger.info(
            f"Vitals recorded for {vital.patient_id}: BMI {response.bmi} "
            f"({response.bmi_status}), next form {response.next_form.value}"
        )
        return response

    def submit_general_assessment(
        self,
        assessment: GeneralAssessment,
    ) -> GeneralAssessment:
        """Submit a general health assessment."""
        endpoint = self.endpoints["general_assessment"]
        data = self._post(endpoint, assessment.to_payload())
        return self._parse(GeneralAssessment, data, endpoint)

    def submit_overweight_assessment(
        self,
        assessment: OverweightAssessment,
    ) -> OverweightAssessment:
        """Submit an overweight/obese assessment."""
        endpoint = self.endpoints["overweight_assessment"]
        data = self._post(endpoint, assessment.to_payload())
        return self._parse(OverweightAssessment, data, endpoint)

    def health_check(self) -> bool:
        """Check service connectivity by fetching the listing."""
        try:
            self.get_patient_listing()
            return True
        except ApiError as e:
            logger.error(f"{self.SOURCE_NAME} health check failed: {e}")
            return False

"""
Tests for the vitals screen workflow.

CRITICAL: The service's next_form decides navigation; a disagreement
with the local classifier is surfaced, never hidden.
"""

import logging
from datetime import date

import pytest

from patientbmi.core.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    FormValidationError,
    NavigationError,
)
from patientbmi.core.types import BmiCategory, NextAssessment
from patientbmi.workflow.vitals import (
    VITALS_SAVED_UNREADABLE,
    VitalsScreen,
    submission_error_message,
)


@pytest.fixture
def screen() -> VitalsScreen:
    return VitalsScreen(patient_id="42", patient_name="Jane Doe")


class TestVitalsScreen:
    """Tests for screen parameters and preview."""

    def test_requires_patient_id(self):
        with pytest.raises(NavigationError, match="No patient data"):
            VitalsScreen(patient_id="  ", patient_name="Nobody")

    def test_title(self, screen):
        assert screen.title == "Patient: Jane Doe"

    def test_preview_delegates_to_classifier(self, screen):
        assert screen.preview("", "").label == "Enter height & weight"
        assert screen.preview("150", "90").label == "Obese"


class TestBuildVital:
    """Tests for submit-time validation."""

    def test_builds_record(self, screen, visit_date):
        vital, result = screen.build_vital("170", "70", visit_date)

        assert vital.to_payload() == {
            "patient_id": "42",
            "visit_date": "2024-01-15",
            "height_cm": 170.0,
            "weight_kg": 70.0,
            "bmi": 24.2,
            "bmi_status": "Normal",
        }
        assert result.category == BmiCategory.NORMAL

    @pytest.mark.parametrize(
        "height, weight, message",
        [
            ("", "70", "Please enter height and weight"),
            ("170", "   ", "Please enter height and weight"),
            ("abc", "70", "Please enter valid numbers"),
            ("0", "70", "Height and weight must be positive numbers"),
            ("170", "-5", "Height and weight must be positive numbers"),
        ],
    )
    def test_validation_messages(self, screen, height, weight, message):
        with pytest.raises(FormValidationError) as exc_info:
            screen.build_vital(height, weight)
        assert str(exc_info.value) == message

    def test_defaults_to_today(self, screen):
        vital, _ = screen.build_vital("170", "70")
        assert vital.visit_date == date.today()


class TestSubmit:
    """Tests for submission and routing."""

    def test_general_route(self, screen, client, session, make_response, vital_response_payload, visit_date):
        session.queue(make_response(201, vital_response_payload))

        outcome = screen.submit(client, "170", "70", visit_date)

        assert not outcome.routing_mismatch
        assert outcome.route.patient_id == "42"
        assert outcome.route.patient_name == "Jane Doe"
        assert outcome.route.bmi == 24.2
        assert outcome.route.next_assessment == NextAssessment.GENERAL

    def test_boundary_routes_overweight(self, screen, client, session, make_response, visit_date):
        session.queue(
            make_response(
                201,
                {"bmi": 25.0, "bmi_status": "Overweight", "next_form": "overweight"},
            )
        )

        outcome = screen.submit(client, "160", "64", visit_date)

        assert session.calls[0]["json"]["bmi"] == 25.0
        assert outcome.route.next_assessment == NextAssessment.OVERWEIGHT
        assert outcome.route.patient_name == "Jane Doe"  # service sent no name

    def test_obese_token_routes_overweight(self, screen, client, session, make_response, visit_date):
        session.queue(make_response(201, {"bmi": 40.0, "bmi_status": "Obese", "next_form": "obese"}))

        outcome = screen.submit(client, "150", "90", visit_date)

        assert outcome.route.next_assessment == NextAssessment.OVERWEIGHT
        assert not outcome.routing_mismatch

    def test_service_wins_on_mismatch(self, screen, client, session, make_response, visit_date, caplog):
        """CRITICAL: Navigation follows the service and the mismatch is logged."""
        session.queue(
            make_response(
                201,
                {"bmi": 25.1, "bmi_status": "Overweight", "next_form": "overweight"},
            )
        )

        with caplog.at_level(logging.WARNING, logger="patientbmi.workflow.vitals"):
            outcome = screen.submit(client, "170", "70", visit_date)

        assert outcome.local_result.next_assessment == NextAssessment.GENERAL
        assert outcome.routing_mismatch
        assert outcome.route.next_assessment == NextAssessment.OVERWEIGHT
        assert outcome.route.bmi == 25.1
        assert "Routing mismatch" in caplog.text

    def test_status_case_tolerated(self, screen, client, session, make_response, visit_date):
        """Test a differently cased status from the service is accepted."""
        session.queue(
            make_response(201, {"bmi": 24.2, "bmi_status": "normal", "next_form": "General"})
        )

        outcome = screen.submit(client, "170", "70", visit_date)

        assert outcome.response.bmi_status == "Normal"
        assert outcome.response.category == BmiCategory.NORMAL
        assert outcome.route.next_assessment == NextAssessment.GENERAL
        assert not outcome.routing_mismatch

    def test_unreadable_accepted_response(self, screen, client, session, make_response, visit_date):
        """Test a stored record with an unreadable answer is not reported as bad input."""
        session.queue(make_response(201, {"bmi": 24.2, "bmi_status": "Normal"}))

        with pytest.raises(ApiResponseError) as exc_info:
            screen.submit(client, "170", "70", visit_date)

        message = submission_error_message(exc_info.value)
        assert message == VITALS_SAVED_UNREADABLE
        assert "BMI value error" not in message

    def test_invalid_json_on_success(self, screen, client, session, make_response, visit_date):
        session.queue(make_response(201, text="Created"))

        with pytest.raises(ApiResponseError) as exc_info:
            screen.submit(client, "170", "70", visit_date)
        assert submission_error_message(exc_info.value) == VITALS_SAVED_UNREADABLE

    def test_invalid_input_not_sent(self, screen, client, session):
        with pytest.raises(FormValidationError):
            screen.submit(client, "0", "70")
        assert session.calls == []

    def test_service_error_propagates(self, screen, client, session, make_response):
        session.queue(make_response(400, text='{"bmi": ["invalid"]}'))

        with pytest.raises(ApiError) as exc_info:
            screen.submit(client, "170", "70")
        assert submission_error_message(exc_info.value) == "BMI value error. Please check your values."


class TestSubmissionErrorMessage:
    """Tests for user-facing submission errors."""

    def test_precision_error(self):
        error = ApiError("failed", status_code=400, body="Ensure that there are no more than 5 digits in total.")
        assert submission_error_message(error) == (
            "Value too precise. Please use whole numbers or 1 decimal place."
        )

    def test_generic_error(self):
        error = ApiError("failed", status_code=500, body="boom")
        assert submission_error_message(error) == "Failed to submit vitals. Please try again."

    def test_network_error(self):
        error = ApiConnectionError("timed out")
        assert submission_error_message(error) == "Network error: timed out"

    def test_server_error_ignores_body(self):
        """Test body hints only apply to rejected input, not server failures."""
        error = ApiError("failed", status_code=500, body='{"bmi": "internal"}')
        assert submission_error_message(error) == "Failed to submit vitals. Please try again."

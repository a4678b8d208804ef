"""
Pytest configuration and fixtures for PatientBMI tests.
"""

import json
from datetime import date
from typing import Any

import pytest

from patientbmi.api.client import AssessmentClient
from patientbmi.core.config import ApiConfig, Settings
from patientbmi.core.types import AssessmentRoute, NextAssessment


class FakeResponse:
    """Stand-in for requests.Response with the attributes the client reads."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None):
        self.status_code = status_code
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text
        self.content = text.encode()

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Records requests and replays queued responses in order."""

    def __init__(self, responses: list[FakeResponse | Exception] | None = None):
        self.headers: dict[str, str] = {}
        self.responses = list(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, response: FakeResponse | Exception) -> None:
        self.responses.append(response)

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "params": params, "json": json, "timeout": timeout}
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def visit_date() -> date:
    """Standard test visit date."""
    return date(2024, 1, 15)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a local test service."""
    return Settings(
        api_base_url="http://testserver/api",
        connect_timeout=5,
        read_timeout=10,
        config_dir=tmp_path,
    )


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""
    return FakeResponse


@pytest.fixture
def client(settings, session) -> AssessmentClient:
    """Client wired to the fake session."""
    return AssessmentClient(settings=settings, api_config=ApiConfig(), session=session)


@pytest.fixture
def general_route() -> AssessmentRoute:
    """Route for a normal-weight patient."""
    return AssessmentRoute(
        patient_id="42",
        patient_name="Jane Doe",
        bmi=22.5,
        next_assessment=NextAssessment.GENERAL,
    )


@pytest.fixture
def overweight_route() -> AssessmentRoute:
    """Route for an obese patient."""
    return AssessmentRoute(
        patient_id="43",
        patient_name="John Roe",
        bmi=31.2,
        next_assessment=NextAssessment.OVERWEIGHT,
    )


@pytest.fixture
def vital_response_payload() -> dict:
    """Service answer for 170 cm / 70 kg."""
    return {
        "id": "7",
        "patient_name": "Jane Doe",
        "bmi": 24.2,
        "bmi_status": "Normal",
        "next_form": "general",
    }


@pytest.fixture
def listing_payload() -> list[dict]:
    return [
        {
            "id": 1,
            "full_name": "Jane Doe",
            "age": 34,
            "last_bmi_status": "Normal",
            "last_assessment_date": "2024-01-10",
        },
        {
            "id": 2,
            "full_name": "John Roe",
            "age": 0,
            "last_bmi_status": "Obese",
            "last_assessment_date": None,
        },
    ]

"""Tests for registration, listing and assessment workflows."""

from datetime import date

import pytest

from patientbmi.api.models import PatientListingItem
from patientbmi.core.exceptions import FormValidationError, NavigationError
from patientbmi.core.types import Gender, GeneralHealth
from patientbmi.workflow.assessments import (
    GeneralAssessmentForm,
    OverweightAssessmentForm,
    form_for,
    submit_assessment,
)
from patientbmi.workflow.listing import ListingScreen, listing_frame, status_counts
from patientbmi.workflow.registration import RegistrationForm, register, years_ago
from patientbmi.workflow.vitals import VitalsScreen


@pytest.fixture
def filled_registration() -> RegistrationForm:
    return RegistrationForm(
        patient_number=" P-001 ",
        first_name="Jane",
        middle_name="",
        last_name="Doe",
        gender=Gender.FEMALE,
        date_of_birth="1994-01-15",
        registration_date="2024-01-15",
    )


class TestRegistrationForm:
    """Tests for registration validation."""

    def test_defaults(self):
        form = RegistrationForm.with_defaults(today=date(2024, 1, 15))

        assert form.registration_date == "2024-01-15"
        assert form.date_of_birth == "1994-01-15"

    def test_leap_day_default(self):
        assert years_ago(date(2024, 2, 29), 30) == date(1994, 2, 28)

    def test_valid(self, filled_registration):
        request = filled_registration.validate()

        assert request.patient_id == "P-001"
        assert request.middle_name is None
        assert request.gender == Gender.FEMALE
        assert request.to_payload()["gender"] == "F"
        assert request.date_of_birth == date(1994, 1, 15)

    def test_gender_checked_first(self):
        """Test a blank form reports the missing gender first."""
        with pytest.raises(FormValidationError, match="Please select gender"):
            RegistrationForm().validate()

    @pytest.mark.parametrize(
        "field",
        ["patient_number", "first_name", "last_name", "date_of_birth", "registration_date"],
    )
    def test_required_fields(self, filled_registration, field):
        setattr(filled_registration, field, "  ")

        with pytest.raises(FormValidationError) as exc_info:
            filled_registration.validate()
        assert str(exc_info.value) == "Please fill all required fields"
        assert exc_info.value.field == field

    def test_bad_date(self, filled_registration):
        filled_registration.date_of_birth = "15/01/1994"

        with pytest.raises(FormValidationError, match="YYYY-MM-DD"):
            filled_registration.validate()

    def test_birth_after_registration(self, filled_registration):
        filled_registration.date_of_birth = "2024-02-01"

        with pytest.raises(FormValidationError, match="cannot be after"):
            filled_registration.validate()

    def test_register_opens_vitals(self, filled_registration, client, session, make_response):
        session.queue(
            make_response(
                201,
                {
                    "id": "17",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "gender": "F",
                    "registration_date": "2024-01-15",
                },
            )
        )

        screen = register(client, filled_registration)

        assert screen == VitalsScreen(patient_id="17", patient_name="Jane Doe")
        assert session.calls[0]["json"]["patient_id"] == "P-001"

    def test_invalid_form_not_sent(self, client, session):
        with pytest.raises(FormValidationError):
            register(client, RegistrationForm())
        assert session.calls == []


class TestListing:
    """Tests for the patient listing."""

    def test_date_filter(self, client, session, make_response, listing_payload):
        session.queue(make_response(200, listing_payload))

        items = ListingScreen(filter_date=date(2024, 1, 10)).load(client)

        assert len(items) == 2
        assert session.calls[0]["params"] == {"from_date": "2024-01-10", "to_date": "2024-01-10"}

    def test_no_filter(self, client, session, make_response):
        session.queue(make_response(200, []))

        assert ListingScreen().load(client) == []
        assert session.calls[0]["params"] is None

    def test_frame(self, listing_payload):
        items = [PatientListingItem.model_validate(row) for row in listing_payload]

        frame = listing_frame(items)

        assert list(frame.columns) == ["id", "Name", "Age", "Last BMI Status", "Last Assessment"]
        assert frame["Age"].tolist() == ["34", "N/A"]
        assert frame["Last Assessment"].tolist() == ["2024-01-10", "N/A"]

    def test_patient_without_vitals(self, client, session, make_response):
        """Test a newly registered patient with null status and age is listed."""
        session.queue(
            make_response(
                200,
                [
                    {
                        "id": 3,
                        "full_name": "New Patient",
                        "age": None,
                        "last_bmi_status": None,
                        "last_assessment_date": None,
                    }
                ],
            )
        )

        items = ListingScreen().load(client)
        frame = listing_frame(items)

        assert items[0].last_bmi_status is None
        assert frame.iloc[0].tolist() == ["3", "New Patient", "N/A", "N/A", "N/A"]

    def test_empty_frame(self):
        frame = listing_frame([])

        assert frame.empty
        assert "Name" in frame.columns

    def test_status_counts(self, listing_payload):
        items = [PatientListingItem.model_validate(row) for row in listing_payload]

        counts = status_counts(items)

        assert counts["Normal"] == 1
        assert counts["Obese"] == 1
        assert status_counts([]).empty

    def test_open_vitals(self, listing_payload):
        item = PatientListingItem.model_validate(listing_payload[0])

        screen = ListingScreen.open_vitals(item)

        assert screen.patient_id == "1"
        assert screen.patient_name == "Jane Doe"


class TestAssessmentForms:
    """Tests for the follow-up assessment forms."""

    def test_form_for_route(self, general_route, overweight_route):
        assert isinstance(form_for(general_route), GeneralAssessmentForm)
        assert isinstance(form_for(overweight_route), OverweightAssessmentForm)
        assert form_for(general_route, today=date(2024, 1, 15)).visit_date == "2024-01-15"

    def test_general_valid(self, general_route):
        form = GeneralAssessmentForm(
            visit_date="2024-01-15",
            general_health=GeneralHealth.GOOD,
            using_drugs="No",
            comments=" Feeling well ",
        )

        assessment = form.validate(general_route)

        assert assessment.patient_id == "42"
        assert assessment.currently_using_drugs is False
        assert assessment.comments == "Feeling well"

    def test_overweight_valid(self, overweight_route):
        form = OverweightAssessmentForm(
            visit_date="2024-01-15",
            general_health=GeneralHealth.POOR,
            diet_history="Yes",
            comments="Discussed diet",
        )

        assessment = form.validate(overweight_route)

        assert assessment.patient_id == "43"
        assert assessment.diet_history is True

    @pytest.mark.parametrize(
        "changes",
        [
            {"visit_date": ""},
            {"general_health": None},
            {"using_drugs": None},
            {"comments": "   "},
        ],
    )
    def test_all_fields_required(self, general_route, changes):
        values = {
            "visit_date": "2024-01-15",
            "general_health": GeneralHealth.GOOD,
            "using_drugs": "Yes",
            "comments": "ok",
        }
        values.update(changes)

        with pytest.raises(FormValidationError, match="All fields are required"):
            GeneralAssessmentForm(**values).validate(general_route)

    def test_wrong_form_for_route(self, general_route, overweight_route):
        """Test an assessment cannot be filed against the other route."""
        overweight_form = OverweightAssessmentForm(
            visit_date="2024-01-15",
            general_health=GeneralHealth.GOOD,
            diet_history="No",
            comments="ok",
        )
        with pytest.raises(NavigationError):
            overweight_form.validate(general_route)

        general_form = GeneralAssessmentForm(
            visit_date="2024-01-15",
            general_health=GeneralHealth.GOOD,
            using_drugs="No",
            comments="ok",
        )
        with pytest.raises(NavigationError):
            general_form.validate(overweight_route)

    def test_submit_returns_to_listing(self, overweight_route, client, session, make_response):
        form = OverweightAssessmentForm(
            visit_date="2024-01-15",
            general_health=GeneralHealth.GOOD,
            diet_history="No",
            comments="ok",
        )
        session.queue(make_response(201, form.validate(overweight_route).to_payload()))

        next_screen = submit_assessment(client, overweight_route, form)

        assert next_screen == ListingScreen()
        assert session.calls[0]["url"].endswith("overweight-assessments/")
        assert session.calls[0]["json"]["diet_history"] is False

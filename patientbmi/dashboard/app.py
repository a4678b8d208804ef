"""
PatientBMI Streamlit Dashboard.

Main entry point for the front-end.
Run with: streamlit run patientbmi/dashboard/app.py

Screens:
    listing -> registration -> vitals -> general/overweight assessment -> listing
    listing -> vitals (existing patient)

The current screen object lives in st.session_state["screen"] and
carries its own parameters (patient id, name, BMI).
"""

import logging
import time
from datetime import date

import streamlit as st

from patientbmi.api.client import AssessmentClient
from patientbmi.core.config import get_settings
from patientbmi.core.exceptions import (
    ApiError,
    ApiResponseError,
    FormValidationError,
    NavigationError,
    PatientBmiError,
)
from patientbmi.core.types import (
    AssessmentRoute,
    BmiCategory,
    Gender,
    GeneralHealth,
    NextAssessment,
)
from patientbmi.dashboard.components.bmi_card import render_bmi_card
from patientbmi.dashboard.components.bmi_gauge import render_bmi_gauge
from patientbmi.dashboard.components.patient_table import render_patient_table
from patientbmi.workflow import (
    GeneralAssessmentForm,
    ListingScreen,
    OverweightAssessmentForm,
    RegistrationForm,
    VitalsScreen,
    listing_frame,
    register,
    submission_error_message,
    submit_assessment,
)
from patientbmi.workflow.fields import NO, YES

logger = logging.getLogger(__name__)

REGISTRATION = "registration"


@st.cache_resource
def get_client() -> AssessmentClient:
    """Shared client for the dashboard process."""
    return AssessmentClient()


def go_to(screen: object) -> None:
    """Switch screens and rerun the script."""
    st.session_state["screen"] = screen
    st.rerun()


def render_listing(screen: ListingScreen) -> None:
    """Patient listing with an optional single-date filter."""
    st.header("Patients")

    col1, col2 = st.columns([2, 1])
    with col1:
        use_filter = st.checkbox("Filter by date", value=screen.filter_date is not None)
        filter_date = (
            st.date_input("Visit date", value=screen.filter_date or date.today())
            if use_filter
            else None
        )
    with col2:
        if st.button("Register patient", type="primary"):
            go_to(REGISTRATION)

    if filter_date != screen.filter_date:
        go_to(ListingScreen(filter_date=filter_date))

    try:
        items = screen.load(get_client())
    except ApiError as e:
        logger.error(f"Listing failed: {e}")
        st.error(e.user_message)
        return

    if not items:
        st.toast("No patients found")
        st.info("No patients found.")
        return

    render_patient_table(listing_frame(items))

    by_label = {f"{item.full_name} ({item.id})": item for item in items}
    choice = st.selectbox("Record vitals for", list(by_label))
    if st.button("Open vitals"):
        go_to(ListingScreen.open_vitals(by_label[choice]))


def render_registration() -> None:
    """Registration form."""
    st.header("Register Patient")
    defaults = RegistrationForm.with_defaults()

    with st.form("registration"):
        patient_number = st.text_input("Patient number *")
        first_name = st.text_input("First name *")
        middle_name = st.text_input("Middle name")
        last_name = st.text_input("Last name *")
        gender = st.radio(
            "Gender *",
            options=list(Gender),
            format_func=lambda g: g.label,
            index=None,
            horizontal=True,
        )
        date_of_birth = st.text_input("Date of birth (YYYY-MM-DD) *", value=defaults.date_of_birth)
        registration_date = st.text_input(
            "Registration date (YYYY-MM-DD) *", value=defaults.registration_date
        )
        col1, col2 = st.columns(2)
        submitted = col1.form_submit_button("Register Patient", type="primary")
        cancelled = col2.form_submit_button("Cancel")

    if cancelled:
        go_to(ListingScreen())
    if not submitted:
        return

    form = RegistrationForm(
        patient_number=patient_number,
        first_name=first_name,
        middle_name=middle_name,
        last_name=last_name,
        gender=gender,
        date_of_birth=date_of_birth,
        registration_date=registration_date,
    )
    try:
        with st.spinner("Registering..."):
            vitals_screen = register(get_client(), form)
    except FormValidationError as e:
        st.warning(str(e))
        return
    except ApiError as e:
        st.error(e.user_message)
        return

    st.toast("Patient registered successfully!")
    go_to(vitals_screen)


def render_vitals(screen: VitalsScreen) -> None:
    """Height/weight entry with live BMI feedback."""
    st.header("Vitals")
    st.subheader(screen.title)

    col1, col2 = st.columns([1, 1])
    with col1:
        height_text = st.text_input("Height (cm)")
        weight_text = st.text_input("Weight (kg)")
        preview = screen.preview(height_text, weight_text)
        render_bmi_card(preview)
    with col2:
        render_bmi_gauge(preview.bmi_value)

    if not st.button("Submit Vitals", type="primary"):
        return

    try:
        with st.spinner("Submitting..."):
            outcome = screen.submit(get_client(), height_text, weight_text)
    except FormValidationError as e:
        st.warning(str(e))
        return
    except ApiResponseError as e:
        logger.warning(f"Vitals accepted but response unreadable: {e}")
        st.warning(submission_error_message(e))
        return
    except ApiError as e:
        st.error(submission_error_message(e))
        return

    st.toast("Vitals recorded successfully!")
    if outcome.routing_mismatch:
        st.warning(
            f"Server classified BMI {outcome.response.bmi} as "
            f"{outcome.response.bmi_status}; following the server."
        )
    time.sleep(get_settings().navigation_delay_ms / 1000)
    go_to(outcome.route)


def render_assessment(route: AssessmentRoute) -> None:
    """General or overweight assessment for the routed patient."""
    overweight = route.next_assessment is NextAssessment.OVERWEIGHT
    title = "Overweight/Obese Assessment" if overweight else "General Assessment"
    st.header(title)
    st.subheader(f"Patient: {route.patient_name}")
    st.caption(f"BMI: {route.bmi:.1f}")

    with st.form("assessment"):
        visit_date = st.text_input("Visit date (YYYY-MM-DD)", value=date.today().isoformat())
        general_health = st.radio(
            "General health",
            options=list(GeneralHealth),
            format_func=lambda h: h.value,
            index=None,
            horizontal=True,
        )
        question = "Have you ever been on a diet to lose weight?" if overweight else "Currently using any drugs?"
        answer = st.radio(question, options=[YES, NO], index=None, horizontal=True)
        comments = st.text_area("Comments")
        submitted = st.form_submit_button("Submit", type="primary")

    if not submitted:
        return

    if overweight:
        form = OverweightAssessmentForm(
            visit_date=visit_date,
            general_health=general_health,
            diet_history=answer,
            comments=comments,
        )
    else:
        form = GeneralAssessmentForm(
            visit_date=visit_date,
            general_health=general_health,
            using_drugs=answer,
            comments=comments,
        )

    try:
        next_screen = submit_assessment(get_client(), route, form)
    except FormValidationError as e:
        st.warning(str(e))
        return
    except ApiResponseError as e:
        logger.warning(f"Assessment accepted but response unreadable: {e}")
        st.warning(e.user_message)
        return
    except ApiError as e:
        st.error(f"Error: {e.body or e.user_message}")
        return

    st.toast("Assessment submitted!")
    go_to(next_screen)


def main() -> None:
    """Main dashboard application."""
    st.set_page_config(
        page_title="PatientBMI",
        page_icon="🩺",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.title("PatientBMI")
    st.markdown("**Patient registration, vitals and follow-up assessments**")

    with st.sidebar:
        st.header("WHO BMI Bands")
        for category in BmiCategory:
            st.markdown(
                f"<span style='color: {category.color}; font-weight: bold'>"
                f"{category.value}</span>: {category.description}",
                unsafe_allow_html=True,
            )
        st.divider()
        if st.button("Patient listing"):
            go_to(ListingScreen())
        st.caption(f"Service: {get_settings().api_base_url}")

    screen = st.session_state.setdefault("screen", ListingScreen())

    try:
        if screen == REGISTRATION:
            render_registration()
        elif isinstance(screen, VitalsScreen):
            render_vitals(screen)
        elif isinstance(screen, AssessmentRoute):
            render_assessment(screen)
        else:
            render_listing(screen)
    except NavigationError as e:
        logger.error(f"Navigation failed: {e}")
        st.error(str(e))
        st.session_state["screen"] = ListingScreen()
    except PatientBmiError as e:
        logger.error(f"Unexpected application error: {e}")
        st.error(str(e))


if __name__ == "__main__":
    main()

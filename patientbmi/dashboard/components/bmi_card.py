"""
BMI card component for the PatientBMI dashboard.

Shows the live BMI preview with the category colour.
"""

import streamlit as st

from patientbmi.classifier.bmi import BmiPreview

PLACEHOLDER_COLOR = "#6b7280"


def render_bmi_card(preview: BmiPreview) -> None:
    """
    Render the BMI value and category label.

    Args:
        preview: Current preview state from the vitals screen
    """
    color = preview.category.color if preview.category else PLACEHOLDER_COLOR
    description = preview.category.description if preview.category else ""

    st.markdown(
        f"""
        <div style="
            background: linear-gradient(135deg, {color}20, {color}10);
            border-left: 4px solid {color};
            padding: 1.25rem;
            border-radius: 0.5rem;
            margin-bottom: 1rem;
        ">
            <div style="font-size: 2rem; font-weight: bold; color: #1f2937;">
                {preview.display}
            </div>
            <div style="font-size: 1.25rem; color: {color}; margin-top: 0.25rem;">
                {preview.label}
            </div>
            <div style="font-size: 0.875rem; color: #6b7280;">
                {description}
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )

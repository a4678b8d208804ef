"""
Patient table component for the PatientBMI dashboard.

Renders the listing with colour-coded BMI status.
"""

import pandas as pd
import streamlit as st

from patientbmi.core.types import BmiCategory

STATUS_COLORS = {category.value: category.color for category in BmiCategory}


def _status_style(value: str) -> str:
    color = STATUS_COLORS.get(value)
    return f"color: {color}; font-weight: bold" if color else ""


def render_patient_table(frame: pd.DataFrame) -> None:
    """
    Render the patient listing table.

    Args:
        frame: Output of listing_frame()
    """
    display = frame.drop(columns=["id"])
    styled = display.style.map(_status_style, subset=["Last BMI Status"])
    st.dataframe(styled, use_container_width=True, hide_index=True)

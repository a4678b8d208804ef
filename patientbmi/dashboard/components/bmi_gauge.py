"""
BMI gauge component for the PatientBMI dashboard.

Displays a semicircular gauge with the WHO bands as coloured steps.
"""

import plotly.graph_objects as go
import streamlit as st

from patientbmi.core.constants import NORMAL_BELOW, OVERWEIGHT_BELOW, UNDERWEIGHT_BELOW
from patientbmi.core.types import BmiCategory

GAUGE_MIN = 10.0
GAUGE_MAX = 45.0


def build_bmi_gauge(bmi: float | None) -> go.Figure:
    """
    Build the gauge figure.

    Args:
        bmi: BMI value, or None to show an empty gauge

    Returns:
        Plotly figure
    """
    # Keep the needle on the dial for extreme values
    needle = None if bmi is None else min(max(bmi, GAUGE_MIN), GAUGE_MAX)

    fig = go.Figure(
        go.Indicator(
            mode="gauge+number" if bmi is not None else "gauge",
            value=bmi if bmi is not None else GAUGE_MIN,
            title={"text": "BMI", "font": {"size": 16, "color": "#6b7280"}},
            number={"font": {"size": 48, "color": "#1f2937"}, "valueformat": ".1f"},
            gauge={
                "axis": {
                    "range": [GAUGE_MIN, GAUGE_MAX],
                    "tickwidth": 2,
                    "tickcolor": "#9ca3af",
                    "tickfont": {"color": "#6b7280", "size": 12},
                    "tickvals": [GAUGE_MIN, UNDERWEIGHT_BELOW, NORMAL_BELOW, OVERWEIGHT_BELOW, 40, GAUGE_MAX],
                },
                "bar": {"color": "rgba(0,0,0,0)"},
                "bgcolor": "#f3f4f6",
                "borderwidth": 0,
                "steps": [
                    {"range": [GAUGE_MIN, UNDERWEIGHT_BELOW], "color": BmiCategory.UNDERWEIGHT.color},
                    {"range": [UNDERWEIGHT_BELOW, NORMAL_BELOW], "color": BmiCategory.NORMAL.color},
                    {"range": [NORMAL_BELOW, OVERWEIGHT_BELOW], "color": BmiCategory.OVERWEIGHT.color},
                    {"range": [OVERWEIGHT_BELOW, GAUGE_MAX], "color": BmiCategory.OBESE.color},
                ],
                "threshold": {
                    "line": {"color": "#1f2937", "width": 4},
                    "thickness": 0.8,
                    "value": needle if needle is not None else GAUGE_MIN,
                },
            },
        )
    )

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font={"color": "#374151"},
        height=260,
        margin=dict(l=30, r=30, t=50, b=20),
    )
    return fig


def render_bmi_gauge(bmi: float | None) -> None:
    """Render the BMI gauge."""
    st.plotly_chart(build_bmi_gauge(bmi), use_container_width=True)

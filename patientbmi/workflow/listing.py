"""
Patient listing workflow.

Loads the listing, optionally filtered to a single visit date, and
turns it into a table for display.
"""

import logging
from dataclasses import dataclass
from datetime import date

import pandas as pd

from patientbmi.api.client import AssessmentClient
from patientbmi.api.models import PatientListingItem
from patientbmi.workflow.fields import format_date
from patientbmi.workflow.vitals import VitalsScreen

logger = logging.getLogger(__name__)

LISTING_COLUMNS = ["id", "Name", "Age", "Last BMI Status", "Last Assessment"]


@dataclass(frozen=True)
class ListingScreen:
    """Patient listing, optionally restricted to one date."""

    filter_date: date | None = None

    def load(self, client: AssessmentClient) -> list[PatientListingItem]:
        """Fetch the rows for the current filter."""
        if self.filter_date is not None:
            items = client.get_patient_listing(
                from_date=self.filter_date,
                to_date=self.filter_date,
            )
        else:
            items = client.get_patient_listing()

        if not items:
            logger.info("No patients found")
        return items

    @staticmethod
    def open_vitals(item: PatientListingItem) -> VitalsScreen:
        """Open the vitals screen for a listing row."""
        return VitalsScreen(patient_id=item.id, patient_name=item.full_name)


def listing_frame(items: list[PatientListingItem]) -> pd.DataFrame:
    """
    Convert listing rows to a display table.

    Args:
        items: Rows from the service

    Returns:
        DataFrame with LISTING_COLUMNS, one row per patient
    """
    if not items:
        return pd.DataFrame(columns=LISTING_COLUMNS)

    return pd.DataFrame(
        [
            {
                "id": item.id,
                "Name": item.full_name,
                "Age": item.age_display,
                "Last BMI Status": item.last_bmi_status or "N/A",
                "Last Assessment": (
                    format_date(item.last_assessment_date)
                    if item.last_assessment_date
                    else "N/A"
                ),
            }
            for item in items
        ],
        columns=LISTING_COLUMNS,
    )


def status_counts(items: list[PatientListingItem]) -> pd.Series:
    """Number of patients per last BMI status."""
    frame = listing_frame(items)
    if frame.empty:
        return pd.Series(dtype="int64")
    return frame["Last BMI Status"].value_counts()

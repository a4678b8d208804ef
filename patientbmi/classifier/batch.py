"""
Batch BMI evaluation over tabular data.

Applies the classifier row by row so that batch results are identical
to what the vitals screen shows. Invalid rows are kept and flagged
rather than dropped.
"""

import logging

import pandas as pd

from patientbmi.classifier.bmi import evaluate
from patientbmi.core.exceptions import InvalidMeasurement

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("height_cm", "weight_kg")
RESULT_COLUMNS = ("bmi", "bmi_status", "next_assessment", "error")


def evaluate_frame(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Evaluate every row of a measurements table.

    Args:
        frame: DataFrame with height_cm and weight_kg columns

    Returns:
        Copy of frame with bmi, bmi_status, next_assessment and error
        columns. Rows that fail validation have an error message and
        empty result columns.

    Raises:
        KeyError: If a required column is missing
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise KeyError(f"Missing required columns: {missing}")

    rows = []
    for height, weight in zip(frame["height_cm"], frame["weight_kg"]):
        try:
            # Object columns can hold numpy scalars; .item() unwraps them
            result = evaluate(
                height.item() if hasattr(height, "item") else height,
                weight.item() if hasattr(weight, "item") else weight,
            )
        except InvalidMeasurement as e:
            rows.append((None, None, None, str(e)))
            continue
        rows.append(
            (
                result.bmi_value,
                result.category.value,
                result.next_assessment.value,
                None,
            )
        )

    results = pd.DataFrame(rows, columns=list(RESULT_COLUMNS), index=frame.index)
    invalid = int(results["error"].notna().sum())
    if invalid:
        logger.warning(f"{invalid} of {len(frame)} rows could not be evaluated")

    return pd.concat([frame.drop(columns=list(RESULT_COLUMNS), errors="ignore"), results], axis=1)

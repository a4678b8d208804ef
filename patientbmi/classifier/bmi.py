"""
BMI classifier.

Converts a height/weight reading into a BMI value, a WHO category and
the follow-up assessment the patient should be routed to.

Formula:
    BMI = weight_kg / (height_cm / 100) ** 2

Rounding:
    One decimal, round-half-away-from-zero, applied to the shortest
    decimal representation of the float. 24.25 -> 24.3, 24.35 -> 24.4.

Bands (edges belong to the higher category):
    - bmi < 18.5        Underweight  -> General assessment
    - 18.5 <= bmi < 25  Normal       -> General assessment
    - 25 <= bmi < 30    Overweight   -> Overweight assessment
    - bmi >= 30         Obese        -> Overweight assessment

Design Note:
    Everything here is a pure function. The remote service recomputes
    bmi_status and next_form on submission and is the source of truth;
    this module only drives immediate on-screen feedback.
"""

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

from patientbmi.core.constants import (
    BMI_DECIMALS,
    CM_PER_METER,
    NORMAL_BELOW,
    OVERWEIGHT_BELOW,
    OVERWEIGHT_ROUTE_FROM,
    PROMPT_ENTER_VITALS,
    PROMPT_INVALID_NUMBER,
    PROMPT_INVALID_VALUES,
    UNDERWEIGHT_BELOW,
)
from patientbmi.core.exceptions import InvalidMeasurement
from patientbmi.core.types import BmiCategory, BmiResult, NextAssessment

logger = logging.getLogger(__name__)

_QUANTUM = Decimal(1).scaleb(-BMI_DECIMALS)
# Wide enough to quantize any finite float
_CONTEXT = Context(prec=400)


def _require_positive(value: object, field: str) -> float:
    """Return value as float or raise InvalidMeasurement."""
    # bool is an int subclass but never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMeasurement(
            f"{field} must be a number, got {type(value).__name__}",
            field=field,
            value=value,
        )

    try:
        number = float(value)
    except OverflowError as e:
        raise InvalidMeasurement(f"{field} is out of range", field=field, value=value) from e
    if not math.isfinite(number):
        raise InvalidMeasurement(f"{field} must be finite, got {value}", field=field, value=value)
    if number <= 0:
        raise InvalidMeasurement(
            f"{field} must be greater than zero, got {value}",
            field=field,
            value=value,
        )
    return number


def round_bmi(value: float) -> float:
    """Round to one decimal, half away from zero."""
    return float(
        Decimal(repr(value)).quantize(_QUANTUM, rounding=ROUND_HALF_UP, context=_CONTEXT)
    )


def compute_bmi(height_cm: float, weight_kg: float) -> float:
    """
    Compute BMI from height in centimeters and weight in kilograms.

    Args:
        height_cm: Height in centimeters, finite and > 0
        weight_kg: Weight in kilograms, finite and > 0

    Returns:
        BMI rounded to one decimal

    Raises:
        InvalidMeasurement: If either input is not a finite positive number
    """
    height_cm = _require_positive(height_cm, "height_cm")
    weight_kg = _require_positive(weight_kg, "weight_kg")

    height_m = height_cm / CM_PER_METER
    area = height_m * height_m

    # Extreme inputs can overflow or vanish
    if area == 0:
        raise InvalidMeasurement(
            f"height_cm is too small to compute BMI, got {height_cm}",
            field="height_cm",
            value=height_cm,
        )
    bmi = weight_kg / area
    if not math.isfinite(bmi):
        raise InvalidMeasurement(
            f"BMI is not finite for height={height_cm}, weight={weight_kg}",
        )
    rounded = round_bmi(bmi)
    if rounded <= 0:
        raise InvalidMeasurement(
            f"BMI rounds to zero for height={height_cm}, weight={weight_kg}",
        )
    return rounded


def classify(bmi_value: float) -> BmiCategory:
    """
    Map a BMI value to its WHO category.

    Boundaries belong to the higher category: 18.5 is Normal,
    25.0 is Overweight, 30.0 is Obese.
    """
    if bmi_value < UNDERWEIGHT_BELOW:
        return BmiCategory.UNDERWEIGHT
    elif bmi_value < NORMAL_BELOW:
        return BmiCategory.NORMAL
    elif bmi_value < OVERWEIGHT_BELOW:
        return BmiCategory.OVERWEIGHT
    else:
        return BmiCategory.OBESE


def route_next(category: BmiCategory) -> NextAssessment:
    """Overweight and obese patients get the overweight assessment."""
    if category in (BmiCategory.OVERWEIGHT, BmiCategory.OBESE):
        return NextAssessment.OVERWEIGHT
    return NextAssessment.GENERAL


def route_for_bmi(bmi_value: float) -> NextAssessment:
    """Route directly from a BMI value (bmi >= 25 -> Overweight)."""
    if bmi_value >= OVERWEIGHT_ROUTE_FROM:
        return NextAssessment.OVERWEIGHT
    return NextAssessment.GENERAL


def evaluate(height_cm: float, weight_kg: float) -> BmiResult:
    """
    Compute, classify and route a single measurement.

    Raises:
        InvalidMeasurement: Exactly when compute_bmi would
    """
    bmi_value = compute_bmi(height_cm, weight_kg)
    category = classify(bmi_value)
    result = BmiResult(
        bmi_value=bmi_value,
        category=category,
        next_assessment=route_next(category),
    )
    logger.debug(
        f"height={height_cm}cm weight={weight_kg}kg -> "
        f"BMI {result.bmi_value} ({result.category.value}, "
        f"next={result.next_assessment.value})"
    )
    return result


# =============================================================================
# TEXT FIELD HELPERS
# =============================================================================


def parse_measurement(text: str | None) -> float | None:
    """
    Parse a decimal text field.

    Returns None for empty or non-numeric input ("not ready yet")
    rather than raising. Digit separators ("1_70") and non-finite
    spellings ("nan", "inf") count as non-numeric. Sign and range are
    not checked here.
    """
    if text is None:
        return None
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class BmiPreview:
    """Live feedback shown while the user types height and weight."""

    bmi_value: float | None
    label: str
    category: BmiCategory | None = None

    @property
    def display(self) -> str:
        if self.bmi_value is None:
            return "BMI: --"
        return f"BMI: {self.bmi_value:.1f}"

    @property
    def is_ready(self) -> bool:
        return self.bmi_value is not None


def preview(height_text: str | None, weight_text: str | None) -> BmiPreview:
    """
    Compute on-screen BMI feedback from raw text fields.

    Empty fields prompt for input, unparseable text reports an invalid
    number, and non-positive values report invalid values. Never raises.
    """
    if not (height_text or "").strip() or not (weight_text or "").strip():
        return BmiPreview(bmi_value=None, label=PROMPT_ENTER_VITALS)

    height = parse_measurement(height_text)
    weight = parse_measurement(weight_text)
    if height is None or weight is None:
        return BmiPreview(bmi_value=None, label=PROMPT_INVALID_NUMBER)

    try:
        result = evaluate(height, weight)
    except InvalidMeasurement:
        return BmiPreview(bmi_value=None, label=PROMPT_INVALID_VALUES)

    return BmiPreview(
        bmi_value=result.bmi_value,
        label=result.category.value,
        category=result.category,
    )

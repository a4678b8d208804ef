"""
Constants for PatientBMI.

WHO adult BMI bands and the client defaults shared across modules.
Band edges are clinical definitions, not tunable parameters.
"""

from typing import Final

# =============================================================================
# WHO BMI THRESHOLDS (FIXED)
# =============================================================================
# Half-open bands: each edge belongs to the HIGHER category.

UNDERWEIGHT_BELOW: Final[float] = 18.5
NORMAL_BELOW: Final[float] = 25.0
OVERWEIGHT_BELOW: Final[float] = 30.0

# Route to the overweight assessment at or above this value
OVERWEIGHT_ROUTE_FROM: Final[float] = NORMAL_BELOW

assert UNDERWEIGHT_BELOW < NORMAL_BELOW < OVERWEIGHT_BELOW, "Bands must ascend"

# =============================================================================
# ROUNDING
# =============================================================================

BMI_DECIMALS: Final[int] = 1
CM_PER_METER: Final[float] = 100.0

# =============================================================================
# DATES
# =============================================================================
# All dates travel as ISO-8601 calendar dates.

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DEFAULT_BIRTH_YEARS_AGO: Final[int] = 30

# =============================================================================
# REMOTE SERVICE DEFAULTS
# =============================================================================

DEFAULT_API_BASE_URL: Final[str] = "http://127.0.0.1:8000/api/"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0
NAVIGATION_DELAY_MS: Final[int] = 500

ENDPOINTS: Final[dict[str, str]] = {
    "register_patient": "patients/",
    "patient_listing": "patients/listing/",
    "submit_vitals": "vitals/",
    "general_assessment": "general-assessments/",
    "overweight_assessment": "overweight-assessments/",
}

# =============================================================================
# UI PLACEHOLDERS
# =============================================================================

PROMPT_ENTER_VITALS: Final[str] = "Enter height & weight"
PROMPT_INVALID_NUMBER: Final[str] = "Invalid number"
PROMPT_INVALID_VALUES: Final[str] = "Invalid values"

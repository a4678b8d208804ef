"""Core types, constants, configuration, and exceptions for PatientBMI."""

from patientbmi.core.config import (
    ApiConfig,
    Settings,
    get_settings,
    load_config,
)
from patientbmi.core.constants import (
    BMI_DECIMALS,
    DATE_FORMAT,
    NORMAL_BELOW,
    OVERWEIGHT_BELOW,
    UNDERWEIGHT_BELOW,
)
from patientbmi.core.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    ConfigurationError,
    FormValidationError,
    InvalidMeasurement,
    NavigationError,
    PatientBmiError,
)
from patientbmi.core.types import (
    AssessmentRoute,
    BmiCategory,
    BmiResult,
    Gender,
    GeneralHealth,
    NextAssessment,
    NextForm,
    VitalMeasurement,
)

__all__ = [
    # Types
    "AssessmentRoute",
    "BmiCategory",
    "BmiResult",
    "Gender",
    "GeneralHealth",
    "NextAssessment",
    "NextForm",
    "VitalMeasurement",
    # Constants
    "BMI_DECIMALS",
    "DATE_FORMAT",
    "NORMAL_BELOW",
    "OVERWEIGHT_BELOW",
    "UNDERWEIGHT_BELOW",
    # Config
    "ApiConfig",
    "Settings",
    "get_settings",
    "load_config",
    # Exceptions
    "ApiConnectionError",
    "ApiError",
    "ApiResponseError",
    "ConfigurationError",
    "FormValidationError",
    "InvalidMeasurement",
    "NavigationError",
    "PatientBmiError",
]

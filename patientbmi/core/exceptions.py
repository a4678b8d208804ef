"""
Custom exceptions for PatientBMI.

All exceptions inherit from PatientBmiError for easy catching.
"""

from typing import Any


class PatientBmiError(Exception):
    """Base exception for all PatientBMI errors."""

    pass


class InvalidMeasurement(PatientBmiError, ValueError):
    """
    Raised when a height or weight cannot be used to compute BMI.

    Always recoverable: the caller re-prompts for input.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        self.field = field
        self.value = value
        super().__init__(message)


class FormValidationError(PatientBmiError):
    """Raised when a form is submitted with missing or malformed fields."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class ConfigurationError(PatientBmiError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        super().__init__(message)


class NavigationError(PatientBmiError):
    """Raised when a screen is opened without the parameters it needs."""

    pass


class ApiError(PatientBmiError):
    """Raised when the remote service answers with an error."""

    STATUS_MESSAGES: dict[int, str] = {
        400: "Bad request. Check your data.",
        404: "Record not found.",
        409: "Patient ID already exists.",
        500: "Server error. Please try again.",
    }

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @property
    def user_message(self) -> str:
        """Short text suitable for a toast."""
        if self.status_code in self.STATUS_MESSAGES:
            return self.STATUS_MESSAGES[self.status_code]
        return f"Request failed: {self.body or 'Unknown error'}"


class ApiConnectionError(ApiError):
    """Raised when the remote service cannot be reached."""

    @property
    def user_message(self) -> str:
        return f"Network error: {self}"


class ApiResponseError(ApiError):
    """
    Raised when a successful response body cannot be read.

    The request itself was accepted, so any write it carried has
    already been stored.
    """

    @property
    def user_message(self) -> str:
        return "The service accepted the request, but its response could not be read."

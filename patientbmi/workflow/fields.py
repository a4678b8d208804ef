"""Parsing helpers shared by the form screens."""

from datetime import date, datetime

from patientbmi.core.constants import DATE_FORMAT
from patientbmi.core.exceptions import FormValidationError

YES = "Yes"
NO = "No"


def clean(text: str | None) -> str:
    """Strip a text field; None becomes empty."""
    return (text or "").strip()


def parse_iso_date(text: str | None, field: str) -> date:
    """
    Parse a YYYY-MM-DD field.

    Raises:
        FormValidationError: If the text is empty or not a valid date
    """
    text = clean(text)
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise FormValidationError(
            f"Invalid date '{text}' for {field.replace('_', ' ')}. Use YYYY-MM-DD.",
            field=field,
        ) from e


def parse_yes_no(answer: str | bool | None, field: str) -> bool:
    """Convert a Yes/No radio answer to a bool."""
    if isinstance(answer, bool):
        return answer
    answer = clean(answer)
    if answer == YES:
        return True
    if answer == NO:
        return False
    raise FormValidationError(f"Answer Yes or No for {field.replace('_', ' ')}", field=field)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)

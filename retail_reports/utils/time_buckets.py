"""
Date and time-of-day helpers.

Shift boundaries and month windows are defined once here so the engine, the
loader and the CLI agree on them.
"""

import calendar
import re
from datetime import date, datetime

from retail_reports.errors import InvalidParameterError

MORNING = "Morning"
AFTERNOON = "Afternoon"
EVENING = "Evening"

# Presentation order of the shift report
SHIFTS = (MORNING, AFTERNOON, EVENING)

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def shift_for_hour(hour: int) -> str:
    """
    Classify an hour of the day into a shift.

    Example:
        shift_for_hour(9)  -> "Morning"
        shift_for_hour(17) -> "Afternoon"
        shift_for_hour(18) -> "Evening"
    """
    if not 0 <= hour <= 23:
        raise InvalidParameterError(f"hour must be within 0-23, got {hour}")
    if hour < 12:
        return MORNING
    if hour <= 17:
        return AFTERNOON
    return EVENING


def parse_date(value, name: str = "date") -> date:
    """
    Accept a date, a datetime or an ISO "YYYY-MM-DD" string and return a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidParameterError(f"{name} is not a valid ISO date: {value!r}") from e
    raise InvalidParameterError(f"{name} must be a date or ISO string, got {type(value).__name__}")


def month_bounds(month: str) -> tuple[date, date]:
    """
    Return the first and last day of a "YYYY-MM" month.

    Example:
        month_bounds("2022-11") -> (date(2022, 11, 1), date(2022, 11, 30))
    """
    match = _MONTH_PATTERN.match(month.strip()) if isinstance(month, str) else None
    if match is None:
        raise InvalidParameterError(f"month must look like 'YYYY-MM', got {month!r}")

    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12:
        raise InvalidParameterError(f"month number out of range in {month!r}")

    last_day = calendar.monthrange(year, month_number)[1]
    return date(year, month_number, 1), date(year, month_number, last_day)

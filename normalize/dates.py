"""
Date helpers for the YYYY-MM-DD strings used on the command line and in queries.
"""
import re
from datetime import date, timedelta

from errors import InvalidDateError

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def is_valid_date(value) -> bool:
    """True if value is exactly four digits, dash, two digits, dash, two digits.

    Only the shape is checked; 2024-13-99 is accepted.
    """
    return isinstance(value, str) and _DATE_RE.fullmatch(value) is not None


def require_valid_date(value) -> str:
    if not is_valid_date(value):
        raise InvalidDateError(value)
    return value


def today() -> str:
    """Today's local date as YYYY-MM-DD."""
    return date.today().isoformat()


def next_day(value: str) -> str:
    """Calendar day after value, as YYYY-MM-DD."""
    return (date.fromisoformat(require_valid_date(value)) + timedelta(days=1)).isoformat()

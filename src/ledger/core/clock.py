"""Date helpers for ledger entries."""

from datetime import date, datetime

import pytz
from dateutil import parser as date_parser

DEFAULT_TZ = pytz.UTC


def today_in(tz_name: str = "UTC") -> date:
    """Return today's date in the given timezone."""
    tz = pytz.timezone(tz_name) if tz_name else DEFAULT_TZ
    return datetime.now(tz).date()


def today_iso(tz_name: str = "UTC") -> str:
    """Return today's date as YYYY-MM-DD in the given timezone."""
    return today_in(tz_name).isoformat()


def parse_iso_date(value: str) -> str:
    """
    Parse an ISO 8601 calendar date and return it as YYYY-MM-DD.

    Accepts the extended (2024-06-15) and basic (20240615) forms. Times,
    reduced precision (2024, 2024-06) and week dates are rejected, so stored
    dates always sort correctly as text.

    Raises:
        ValueError: The value is not a full calendar date
    """
    if not value or not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")
    text = value.strip()
    digits = text.replace("-", "")
    if len(digits) != 8 or not digits.isdigit():
        raise ValueError(f"Invalid date: {value!r}")
    try:
        parsed = date_parser.isoparse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid date: {value!r}") from e
    return parsed.date().isoformat()


def is_iso_date(value: str) -> bool:
    """Check that a value is a full ISO 8601 calendar date."""
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True

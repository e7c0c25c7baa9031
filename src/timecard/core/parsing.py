"""Parsing of user-supplied date/time strings for manual entries."""

from datetime import date, datetime
from typing import Optional

from timecard.core.exceptions import DateTimeFormatError

# Tried in order; the first that matches wins
DATETIME_FORMATS = ["%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d"]
TIME_FORMATS = ["%H:%M:%S", "%H:%M"]

ACCEPTED_PATTERNS = ["YYYY-MM-DD HH:MM:SS", "YYYY-MM-DD HH:MM", "YYYY-MM-DD", "HH:MM:SS", "HH:MM"]


def parse_datetime(value: str, today: Optional[date] = None) -> datetime:
    """Parse a start or end time for a manual entry.

    Full datetimes and bare dates (midnight) are tried first, then
    time-only strings which are placed on the reference date.

    Args:
        value: String to parse, e.g. '2024-01-15 14:30' or '14:30'
        today: Date used for time-only strings. Defaults to the current date.

    Returns:
        Parsed naive datetime

    Raises:
        DateTimeFormatError: If no accepted pattern matches
    """
    text = value.strip()

    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).time()
        except ValueError:
            continue
        return datetime.combine(today or date.today(), parsed)

    raise DateTimeFormatError(
        f"Invalid datetime format: {value}. "
        f"Accepted formats: {', '.join(ACCEPTED_PATTERNS)} "
        f"(e.g. 2024-01-15 14:30, 14:30, 2024-01-15)"
    )

"""Resolution of symbolic period names to date-time ranges."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from timecard.core.exceptions import InvalidPeriodError

# Canonical tokens, in the order they are listed to the user
PERIOD_TOKENS = ["today", "yesterday", "week", "last-week", "month", "last-month"]

_ALIASES = {
    "this-week": "week",
    "this-month": "month",
}

_LABELS = {
    "today": "Today",
    "yesterday": "Yesterday",
    "week": "This Week",
    "last-week": "Last Week",
    "month": "This Month",
    "last-month": "Last Month",
}

_END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True)
class Period:
    """Inclusive date-time range for a named period.

    Attributes:
        token: Canonical period token (e.g. 'last-week')
        start: First second of the range
        end: Last second of the range (23:59:59 of the final day)
        label: Human-readable name
    """

    token: str
    start: datetime
    end: datetime
    label: str

    @property
    def slug(self) -> str:
        """Token suitable for file names."""
        return self.token.replace("-", "_")


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def _first_of_previous_month(day: date) -> date:
    if day.month == 1:
        return date(day.year - 1, 12, 1)
    return date(day.year, day.month - 1, 1)


def _day_range(first: date, last: date) -> tuple[datetime, datetime]:
    return datetime.combine(first, time.min), datetime.combine(last, _END_OF_DAY)


def normalize_period(token: str) -> str:
    """Map a user-supplied token to its canonical form.

    Matching is case-insensitive and ignores surrounding whitespace.

    Raises:
        InvalidPeriodError: If the token is not recognised
    """
    key = token.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _LABELS:
        raise InvalidPeriodError(
            f"Invalid period: {token}. Use: {', '.join(PERIOD_TOKENS)}"
        )
    return key


def resolve_period(token: str, today: Optional[date] = None) -> Period:
    """Resolve a period token relative to a reference date.

    Weeks start on Monday. Month ends are found by stepping to the first
    day of the following month and going back one day.

    Args:
        token: One of PERIOD_TOKENS, or the aliases 'this-week'/'this-month'
        today: Reference date. Defaults to the current local date.

    Returns:
        Resolved Period

    Raises:
        InvalidPeriodError: If the token is not recognised
    """
    key = normalize_period(token)
    if today is None:
        today = date.today()

    if key == "today":
        first = last = today
    elif key == "yesterday":
        first = last = today - timedelta(days=1)
    elif key in ("week", "last-week"):
        first = today - timedelta(days=today.weekday())
        if key == "last-week":
            first -= timedelta(days=7)
        last = first + timedelta(days=6)
    elif key == "month":
        first = today.replace(day=1)
        last = _first_of_next_month(today) - timedelta(days=1)
    else:
        first = _first_of_previous_month(today)
        last = today.replace(day=1) - timedelta(days=1)

    start, end = _day_range(first, last)
    return Period(token=key, start=start, end=end, label=_LABELS[key])

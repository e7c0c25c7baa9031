"""Exceptions raised by the TimeCard core."""

from typing import Any, Optional


class TimeCardError(Exception):
    """Base class for all TimeCard errors."""

    pass


class InvalidPeriodError(TimeCardError, ValueError):
    """Period token could not be resolved."""

    pass


class DateTimeFormatError(TimeCardError, ValueError):
    """Date/time string did not match any accepted pattern."""

    pass


class InvalidEntryError(TimeCardError, ValueError):
    """Time entry would violate its own invariants."""

    pass


class ActiveEntryError(TimeCardError):
    """An entry is already running."""

    def __init__(self, message: str, entry: Optional[Any] = None):
        super().__init__(message)
        self.entry = entry


class NoActiveEntryError(TimeCardError):
    """No entry is currently running."""

    pass


class StorageError(TimeCardError):
    """Data file could not be read, parsed or written."""

    pass

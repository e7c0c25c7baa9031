"""Core functionality for time tracking."""

from timecard.core.models import Project, TimeCardData, TimeEntry
from timecard.core.periods import Period, resolve_period
from timecard.core.tracker import TimeTracker

__all__ = ["TimeEntry", "Project", "TimeCardData", "Period", "resolve_period", "TimeTracker"]

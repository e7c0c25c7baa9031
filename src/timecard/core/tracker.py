"""Core time tracking engine."""

import logging
from datetime import datetime
from typing import Callable, Optional

from timecard.core.exceptions import InvalidEntryError, NoActiveEntryError
from timecard.core.models import TimeCardData, TimeEntry
from timecard.core.periods import Period, resolve_period
from timecard.core.storage import StorageManager

logger = logging.getLogger(__name__)


class TimeTracker:
    """Time card operations shared by the command line and interactive UI.

    Every mutating call loads the data file, applies one change and saves
    the whole file again.
    """

    def __init__(
        self,
        storage: StorageManager,
        clock: Callable[[], datetime] = datetime.now,
        backup_on_save: bool = False,
    ):
        """Initialize time tracker.

        Args:
            storage: Storage manager for the data file
            clock: Reference clock. Every timestamp comes from here.
            backup_on_save: Copy the data file to its .backup sibling before saving
        """
        self.storage = storage
        self.clock = clock
        self.backup_on_save = backup_on_save

    def load(self) -> TimeCardData:
        """Load the current data file."""
        return self.storage.load()

    def _save(self, data: TimeCardData) -> None:
        if self.backup_on_save:
            self.storage.backup()
        self.storage.save(data)

    def clock_in(
        self,
        project: Optional[str] = None,
        description: Optional[str] = None,
    ) -> TimeEntry:
        """Start a new session.

        Args:
            project: Project label
            description: What is being worked on

        Returns:
            Created entry

        Raises:
            ActiveEntryError: If a session is already running
        """
        data = self.storage.load()
        now = self.clock()

        entry = TimeEntry.new(project, description, now=now)
        data.add_time_entry(entry, now=now)
        self._save(data)

        logger.info(f"Clocked in at {now.isoformat()} (project={project})")
        return entry

    def clock_out(self, description: Optional[str] = None) -> TimeEntry:
        """Stop the running session.

        Args:
            description: Replacement description (optional)

        Returns:
            Finished entry

        Raises:
            NoActiveEntryError: If no session is running
            InvalidEntryError: If the clock reads at or before the start time
        """
        data = self.storage.load()
        entry = data.get_active_entry()
        if entry is None:
            raise NoActiveEntryError("Not clocked in")

        now = self.clock()
        if now <= entry.start_time:
            logger.warning(
                f"Clock reads {now.isoformat()}, not after start {entry.start_time.isoformat()}"
            )
            raise InvalidEntryError(
                f"Cannot clock out at {now:%Y-%m-%d %H:%M:%S}: "
                f"session started at {entry.start_time:%Y-%m-%d %H:%M:%S}"
            )

        entry.finish(now, description)
        self._save(data)

        logger.info(f"Clocked out at {now.isoformat()} after {entry.hours:.2f}h")
        return entry

    def status(self) -> Optional[TimeEntry]:
        """Get the running entry, if any."""
        return self.storage.load().get_active_entry()

    def add_manual_entry(
        self,
        start_time: datetime,
        end_time: datetime,
        project: Optional[str] = None,
        description: Optional[str] = None,
    ) -> TimeEntry:
        """Add a finished entry with explicit times.

        Raises:
            InvalidEntryError: If end_time is not after start_time
        """
        entry = TimeEntry.manual(start_time, end_time, project, description, now=self.clock())

        data = self.storage.load()
        data.add_time_entry(entry, now=entry.created_at)
        self._save(data)

        logger.info(f"Added manual entry {start_time.isoformat()} -> {end_time.isoformat()}")
        return entry

    def list_entries(
        self,
        project: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[TimeEntry]:
        """Entries newest first.

        Args:
            project: Only entries with exactly this project
            limit: Maximum number of entries to return
        """
        data = self.storage.load()
        entries = data.get_entries_by_project(project) if project else list(data.time_entries)
        entries.sort(key=lambda e: e.start_time, reverse=True)

        if limit is not None:
            entries = entries[:limit]
        return entries

    def period_entries(
        self,
        period: str,
        project: Optional[str] = None,
    ) -> tuple[Period, list[TimeEntry]]:
        """Entries that started within a named period.

        Args:
            period: Period token such as 'today' or 'last-month'
            project: Only entries with exactly this project

        Returns:
            Tuple of (resolved period, entries in stored order)

        Raises:
            InvalidPeriodError: If the period token is not recognised
        """
        resolved = resolve_period(period, today=self.clock().date())
        entries = self.storage.load().get_entries_by_period(resolved.start, resolved.end)
        if project:
            entries = [e for e in entries if e.project == project]
        return resolved, entries

    def today_entries(self) -> list[TimeEntry]:
        return self.storage.load().get_entries_by_date(self.clock().date())

"""Core data models for time tracking."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional
from uuid import UUID, uuid4

from timecard.core.exceptions import ActiveEntryError, InvalidEntryError

NO_PROJECT = "No Project"


def sum_hours(entries: Iterable["TimeEntry"]) -> float:
    """Sum of hours, running entries counting as zero."""
    return sum(e.hours for e in entries if e.hours is not None)


def _parse_optional(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class TimeEntry:
    """A single work session.

    Attributes:
        start_time: When the session started
        id: Unique identifier (UUID), never changes
        project: Free-text project label (optional)
        description: Free-text description (optional)
        end_time: When the session ended (None while running)
        created_at: When this record was created
        updated_at: Last time end_time or description changed
    """

    start_time: datetime
    id: UUID = field(default_factory=uuid4)
    project: Optional[str] = None
    description: Optional[str] = None
    end_time: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def new(
        cls,
        project: Optional[str] = None,
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "TimeEntry":
        """Create a running entry starting now.

        The clock is read once and shared by start_time, created_at
        and updated_at.
        """
        if now is None:
            now = datetime.now()
        return cls(
            start_time=now,
            project=project,
            description=description,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def manual(
        cls,
        start_time: datetime,
        end_time: datetime,
        project: Optional[str] = None,
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "TimeEntry":
        """Create a finished entry from explicit start and end times.

        Raises:
            InvalidEntryError: If end_time is not after start_time
        """
        if end_time <= start_time:
            raise InvalidEntryError("End time must be after start time")

        if now is None:
            now = datetime.now()
        return cls(
            start_time=start_time,
            end_time=end_time,
            project=project,
            description=description,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        """Check if this entry is currently running."""
        return self.end_time is None

    @property
    def duration(self) -> Optional[timedelta]:
        """Elapsed time. Returns None if entry is still running."""
        if self.end_time is None:
            return None
        return self.end_time - self.start_time

    @property
    def hours(self) -> Optional[float]:
        """Duration in hours (whole seconds / 3600). None if running."""
        duration = self.duration
        if duration is None:
            return None
        return int(duration.total_seconds()) / 3600.0

    def finish(
        self,
        end_time: datetime,
        description: Optional[str] = None,
    ) -> None:
        """Record the end of the session.

        Args:
            end_time: When the session ended
            description: Replacement description (optional)

        Raises:
            InvalidEntryError: If the entry already ended or end_time is not
                after start_time
        """
        if self.end_time is not None:
            raise InvalidEntryError(f"Entry {self.id} has already ended")
        if end_time <= self.start_time:
            raise InvalidEntryError(
                f"End time {end_time.isoformat()} must be after "
                f"start time {self.start_time.isoformat()}"
            )

        self.end_time = end_time
        if description is not None:
            self.description = description
        self.updated_at = end_time

    def update_description(self, description: Optional[str], now: Optional[datetime] = None) -> None:
        """Replace the description and refresh updated_at."""
        self.description = description
        self.updated_at = now or datetime.now()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": str(self.id),
            "project": self.project,
            "description": self.description,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeEntry":
        """Create TimeEntry from dictionary (JSON deserialization)."""
        return cls(
            id=UUID(data["id"]),
            project=data.get("project"),
            description=data.get("description"),
            start_time=datetime.fromisoformat(data["start_time"]),
            end_time=_parse_optional(data.get("end_time")),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )


@dataclass
class Project:
    """Project metadata.

    Entries refer to projects by name only; this list is informational.
    """

    name: str
    id: UUID = field(default_factory=uuid4)
    description: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def new(
        cls,
        name: str,
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Project":
        """Create a project with identical creation and update timestamps."""
        if now is None:
            now = datetime.now()
        return cls(name=name, description=description, created_at=now, updated_at=now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create Project from dictionary (JSON deserialization)."""
        return cls(
            id=UUID(data["id"]),
            name=data["name"],
            description=data.get("description"),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )


@dataclass
class TimeCardData:
    """Everything stored in one data file.

    Attributes:
        time_entries: Entries in insertion order (not sorted by time)
        projects: Known projects
        created_at: When the data file was first created
        updated_at: Last time an entry or project was added
    """

    time_entries: list[TimeEntry] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def add_time_entry(self, entry: TimeEntry, now: Optional[datetime] = None) -> None:
        """Append an entry.

        Raises:
            ActiveEntryError: If entry is running and another entry already is
        """
        if entry.is_active:
            active = self.get_active_entry()
            if active is not None:
                raise ActiveEntryError(
                    f"Already clocked in since {active.start_time:%Y-%m-%d %H:%M:%S}",
                    entry=active,
                )

        self.time_entries.append(entry)
        self.updated_at = now or datetime.now()

    def add_project(self, project: Project, now: Optional[datetime] = None) -> None:
        """Append a project."""
        self.projects.append(project)
        self.updated_at = now or datetime.now()

    def get_project(self, name: str) -> Optional[Project]:
        for project in self.projects:
            if project.name == name:
                return project
        return None

    def get_active_entry(self) -> Optional[TimeEntry]:
        """Return the first running entry in stored order, or None."""
        for entry in self.time_entries:
            if entry.is_active:
                return entry
        return None

    def get_entries_by_project(self, project: str) -> list[TimeEntry]:
        """Entries whose project matches exactly (case-sensitive)."""
        return [e for e in self.time_entries if e.project == project]

    def get_entries_by_date(self, day: date) -> list[TimeEntry]:
        """Entries that started on the given calendar date."""
        return [e for e in self.time_entries if e.start_time.date() == day]

    def get_entries_by_period(self, start: datetime, end: datetime) -> list[TimeEntry]:
        """Entries whose start_time lies in [start, end], both ends inclusive.

        Overlap is not considered: an entry that starts before `start` is
        excluded even if it ends inside the range.
        """
        return [e for e in self.time_entries if start <= e.start_time <= end]

    def total_hours(self, entries: Optional[Iterable[TimeEntry]] = None) -> float:
        """Sum of hours, running entries counting as zero.

        Args:
            entries: Entries to sum. Defaults to the whole collection.
        """
        if entries is None:
            entries = self.time_entries
        return sum_hours(entries)

    def total_hours_by_project(self, project: str) -> float:
        return self.total_hours(self.get_entries_by_project(project))

    def total_hours_by_period(self, start: datetime, end: datetime) -> float:
        return self.total_hours(self.get_entries_by_period(start, end))

    @staticmethod
    def project_breakdown(entries: Iterable[TimeEntry]) -> dict[str, float]:
        """Hours per project name, entries without a project under NO_PROJECT."""
        by_project: dict[str, float] = defaultdict(float)
        for entry in entries:
            by_project[entry.project or NO_PROJECT] += entry.hours or 0.0
        return dict(by_project)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "time_entries": [e.to_dict() for e in self.time_entries],
            "projects": [p.to_dict() for p in self.projects],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeCardData":
        """Create TimeCardData from dictionary (JSON deserialization)."""
        return cls(
            time_entries=[TimeEntry.from_dict(e) for e in data.get("time_entries", [])],
            projects=[Project.from_dict(p) for p in data.get("projects", [])],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )

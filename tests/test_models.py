"""Tests for core data models."""

from datetime import date, datetime, timedelta
from typing import Optional
from uuid import UUID

import pytest

from timecard.core.exceptions import ActiveEntryError, InvalidEntryError
from timecard.core.models import NO_PROJECT, Project, TimeCardData, TimeEntry


def make_entry(start: datetime, hours: float = 1.0, project: Optional[str] = None) -> TimeEntry:
    return TimeEntry(start_time=start, end_time=start + timedelta(hours=hours), project=project)


class TestTimeEntry:
    """Test TimeEntry model."""

    def test_new_uses_single_clock_reading(self) -> None:
        """Test that start, created and updated timestamps are identical."""
        now = datetime(2024, 1, 15, 9, 0, 0)
        entry = TimeEntry.new("alpha", "Planning", now=now)

        assert isinstance(entry.id, UUID)
        assert entry.project == "alpha"
        assert entry.description == "Planning"
        assert entry.start_time == entry.created_at == entry.updated_at == now
        assert entry.end_time is None

    def test_new_without_clock_reads_now_once(self) -> None:
        entry = TimeEntry.new()
        assert entry.start_time == entry.created_at == entry.updated_at

    def test_new_entries_get_unique_ids(self) -> None:
        assert TimeEntry.new().id != TimeEntry.new().id

    def test_active_entry_has_no_duration(self) -> None:
        """Test duration and hours of a running entry."""
        entry = TimeEntry.new(now=datetime(2024, 1, 15, 9, 0, 0))

        assert entry.is_active is True
        assert entry.duration is None
        assert entry.hours is None

    def test_duration_and_hours(self) -> None:
        entry = make_entry(datetime(2024, 1, 15, 9, 0, 0), hours=1.5)

        assert entry.is_active is False
        assert entry.duration == timedelta(hours=1, minutes=30)
        assert entry.hours == 1.5
        assert entry.hours == entry.duration.total_seconds() / 3600

    def test_hours_ignores_sub_second_part(self) -> None:
        start = datetime(2024, 1, 15, 9, 0, 0)
        entry = TimeEntry(start_time=start, end_time=start + timedelta(seconds=36, microseconds=900000))

        assert entry.hours == 0.01

    def test_finish_sets_end_and_updated_at(self) -> None:
        """Test finishing a running entry."""
        entry = TimeEntry.new("alpha", "Old", now=datetime(2024, 1, 15, 9, 0, 0))
        end = datetime(2024, 1, 15, 11, 0, 0)

        entry.finish(end, description="New")

        assert entry.end_time == end
        assert entry.updated_at == end
        assert entry.description == "New"
        assert entry.hours == 2.0

    def test_finish_keeps_description_when_not_given(self) -> None:
        entry = TimeEntry.new(description="Keep", now=datetime(2024, 1, 15, 9, 0, 0))
        entry.finish(datetime(2024, 1, 15, 10, 0, 0))
        assert entry.description == "Keep"

    def test_finish_rejects_end_not_after_start(self) -> None:
        start = datetime(2024, 1, 15, 9, 0, 0)
        entry = TimeEntry.new(now=start)

        with pytest.raises(InvalidEntryError, match="must be after"):
            entry.finish(start)
        with pytest.raises(InvalidEntryError):
            entry.finish(start - timedelta(minutes=5))

        assert entry.is_active is True

    def test_finish_twice_raises(self) -> None:
        entry = TimeEntry.new(now=datetime(2024, 1, 15, 9, 0, 0))
        entry.finish(datetime(2024, 1, 15, 10, 0, 0))

        with pytest.raises(InvalidEntryError, match="already ended"):
            entry.finish(datetime(2024, 1, 15, 11, 0, 0))
        assert entry.end_time == datetime(2024, 1, 15, 10, 0, 0)

    def test_update_description_refreshes_updated_at(self) -> None:
        entry = TimeEntry.new(now=datetime(2024, 1, 15, 9, 0, 0))
        later = datetime(2024, 1, 15, 9, 30, 0)

        entry.update_description("Reviewing", now=later)

        assert entry.description == "Reviewing"
        assert entry.updated_at == later
        assert entry.created_at == datetime(2024, 1, 15, 9, 0, 0)

    def test_manual_entry(self) -> None:
        start = datetime(2024, 1, 15, 9, 0, 0)
        end = datetime(2024, 1, 15, 12, 15, 0)
        now = datetime(2024, 1, 16, 8, 0, 0)

        entry = TimeEntry.manual(start, end, "alpha", "Workshop", now=now)

        assert entry.start_time == start
        assert entry.end_time == end
        assert entry.created_at == entry.updated_at == now
        assert entry.hours == 3.25

    def test_manual_entry_rejects_end_before_start(self) -> None:
        with pytest.raises(InvalidEntryError, match="End time must be after start time"):
            TimeEntry.manual(datetime(2024, 1, 15, 9, 0, 0), datetime(2024, 1, 15, 8, 0, 0))

    def test_manual_entry_rejects_zero_length(self) -> None:
        moment = datetime(2024, 1, 15, 9, 0, 0)
        with pytest.raises(InvalidEntryError):
            TimeEntry.manual(moment, moment)

    def test_to_dict_and_from_dict(self) -> None:
        entry = TimeEntry.new("alpha", None, now=datetime(2024, 1, 15, 9, 0, 0, 123456))

        data = entry.to_dict()
        assert data["id"] == str(entry.id)
        assert data["end_time"] is None
        assert data["description"] is None
        assert data["start_time"] == "2024-01-15T09:00:00.123456"

        assert TimeEntry.from_dict(data) == entry


class TestProject:
    """Test Project model."""

    def test_new_project(self) -> None:
        now = datetime(2024, 1, 15, 9, 0, 0)
        project = Project.new("alpha", "Internal tooling", now=now)

        assert project.name == "alpha"
        assert project.description == "Internal tooling"
        assert project.created_at == project.updated_at == now
        assert Project.from_dict(project.to_dict()) == project


class TestTimeCardData:
    """Test the TimeCardData aggregate."""

    def test_empty_aggregate(self) -> None:
        data = TimeCardData()

        assert data.time_entries == []
        assert data.projects == []
        assert data.get_active_entry() is None
        assert data.total_hours() == 0

    def test_add_time_entry_appends_and_refreshes_updated_at(self) -> None:
        data = TimeCardData(created_at=datetime(2024, 1, 1), updated_at=datetime(2024, 1, 1))
        later = make_entry(datetime(2024, 1, 15, 12, 0, 0))
        earlier = make_entry(datetime(2024, 1, 14, 12, 0, 0))

        data.add_time_entry(later, now=datetime(2024, 1, 15, 13, 0, 0))
        data.add_time_entry(earlier, now=datetime(2024, 1, 15, 14, 0, 0))

        assert data.time_entries == [later, earlier]
        assert data.updated_at == datetime(2024, 1, 15, 14, 0, 0)
        assert data.created_at == datetime(2024, 1, 1)

    def test_add_second_active_entry_raises(self) -> None:
        """Test that only one running entry can be stored."""
        data = TimeCardData()
        first = TimeEntry.new(now=datetime(2024, 1, 15, 9, 0, 0))
        data.add_time_entry(first)

        with pytest.raises(ActiveEntryError, match="Already clocked in") as exc_info:
            data.add_time_entry(TimeEntry.new(now=datetime(2024, 1, 15, 10, 0, 0)))

        assert exc_info.value.entry is first
        assert data.time_entries == [first]

    def test_finished_entry_can_be_added_while_active(self) -> None:
        data = TimeCardData()
        data.add_time_entry(TimeEntry.new(now=datetime(2024, 1, 15, 9, 0, 0)))
        data.add_time_entry(make_entry(datetime(2024, 1, 14, 9, 0, 0)))

        assert len(data.time_entries) == 2

    def test_get_active_entry_returns_first_match(self) -> None:
        """Test that the first running entry in stored order wins."""
        first = TimeEntry.new(now=datetime(2024, 1, 15, 12, 0, 0))
        second = TimeEntry.new(now=datetime(2024, 1, 15, 9, 0, 0))
        data = TimeCardData(time_entries=[make_entry(datetime(2024, 1, 14, 9)), first, second])

        assert data.get_active_entry() is first

    def test_get_active_entry_none_when_all_finished(self) -> None:
        data = TimeCardData(time_entries=[make_entry(datetime(2024, 1, 14, 9))])
        assert data.get_active_entry() is None

    def test_get_entries_by_project(self) -> None:
        alpha = make_entry(datetime(2024, 1, 15, 9), project="alpha")
        other = make_entry(datetime(2024, 1, 15, 11), project="Alpha")
        none = make_entry(datetime(2024, 1, 15, 13))
        data = TimeCardData(time_entries=[alpha, other, none])

        assert data.get_entries_by_project("alpha") == [alpha]
        assert data.get_entries_by_project("Alpha") == [other]
        assert data.get_entries_by_project("") == []

    def test_get_entries_by_date(self) -> None:
        late = make_entry(datetime(2024, 1, 15, 23, 30), hours=2)
        early = make_entry(datetime(2024, 1, 16, 0, 0))
        data = TimeCardData(time_entries=[late, early])

        assert data.get_entries_by_date(date(2024, 1, 15)) == [late]
        assert data.get_entries_by_date(date(2024, 1, 16)) == [early]

    def test_get_entries_by_period_bounds_are_inclusive(self) -> None:
        """Test inclusive start and end bounds on start_time."""
        start = datetime(2024, 1, 15, 0, 0, 0)
        end = datetime(2024, 1, 15, 23, 59, 59)
        at_start = make_entry(start)
        at_end = make_entry(end)
        before = make_entry(start - timedelta(seconds=1))
        after = make_entry(end + timedelta(seconds=1))
        data = TimeCardData(time_entries=[before, at_start, at_end, after])

        assert data.get_entries_by_period(start, end) == [at_start, at_end]

    def test_get_entries_by_period_ignores_overlap(self) -> None:
        """Test that an entry starting before the range is excluded."""
        spanning = make_entry(datetime(2024, 1, 14, 22, 0, 0), hours=4)
        data = TimeCardData(time_entries=[spanning])

        assert data.get_entries_by_period(
            datetime(2024, 1, 15, 0, 0, 0), datetime(2024, 1, 15, 23, 59, 59)
        ) == []

    def test_total_hours_skips_active_entries(self) -> None:
        data = TimeCardData(
            time_entries=[
                make_entry(datetime(2024, 1, 15, 9), hours=1.5, project="alpha"),
                make_entry(datetime(2024, 1, 15, 11), hours=2, project="beta"),
                make_entry(datetime(2024, 1, 16, 9), hours=0.5, project="alpha"),
                TimeEntry.new("alpha", now=datetime(2024, 1, 16, 10)),
            ]
        )

        assert data.total_hours() == 4.0
        assert data.total_hours_by_project("alpha") == 2.0
        assert data.total_hours_by_project("gamma") == 0
        assert data.total_hours_by_period(datetime(2024, 1, 15), datetime(2024, 1, 15, 23, 59, 59)) == 3.5

    def test_project_breakdown(self) -> None:
        entries = [
            make_entry(datetime(2024, 1, 15, 9), hours=1, project="alpha"),
            make_entry(datetime(2024, 1, 15, 11), hours=2),
            make_entry(datetime(2024, 1, 15, 14), hours=0.5, project="alpha"),
            TimeEntry.new("beta", now=datetime(2024, 1, 15, 16)),
        ]

        assert TimeCardData.project_breakdown(entries) == {
            "alpha": 1.5,
            NO_PROJECT: 2.0,
            "beta": 0.0,
        }

    def test_add_and_get_project(self) -> None:
        data = TimeCardData()
        project = Project.new("alpha")
        data.add_project(project, now=datetime(2024, 2, 1))

        assert data.get_project("alpha") is project
        assert data.get_project("beta") is None
        assert data.updated_at == datetime(2024, 2, 1)

    def test_round_trip_through_dict(self) -> None:
        data = TimeCardData()
        data.add_time_entry(make_entry(datetime(2024, 1, 15, 9), project="alpha"))
        data.add_time_entry(TimeEntry.new(description="running"))
        data.add_project(Project.new("alpha"))

        assert TimeCardData.from_dict(data.to_dict()) == data

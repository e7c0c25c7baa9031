"""Pytest configuration and shared fixtures."""

import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterator

import pytest  # type: ignore[import-not-found]

from timecard.core.storage import StorageManager
from timecard.core.tracker import TimeTracker


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")


class FakeClock:
    """Manually advanced reference clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at Monday 2024-01-15 09:00:00."""
    return FakeClock(datetime(2024, 1, 15, 9, 0, 0))


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def data_file(temp_dir: Path) -> Path:
    return temp_dir / "data" / "timecard.json"


@pytest.fixture
def storage(data_file: Path) -> StorageManager:
    return StorageManager(data_file)


@pytest.fixture
def tracker(storage: StorageManager, clock: FakeClock) -> TimeTracker:
    """Time tracker on temporary storage with a fixed clock."""
    return TimeTracker(storage, clock=clock)

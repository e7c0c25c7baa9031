"""JSON storage for the time card data file."""

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Optional, Union

from timecard.core.exceptions import StorageError
from timecard.core.models import TimeCardData

logger = logging.getLogger(__name__)


class StorageManager:
    """Loads and saves the whole TimeCardData aggregate as one JSON document."""

    def __init__(self, data_file: Union[str, Path]):
        """Initialize storage manager.

        Args:
            data_file: Path of the JSON data file. '~' is expanded.
        """
        self.data_file = Path(data_file).expanduser()

    @property
    def backup_file(self) -> Path:
        """Sibling path with '.backup' appended (timecard.json -> timecard.json.backup)."""
        return self.data_file.with_name(self.data_file.name + ".backup")

    def load(self) -> TimeCardData:
        """Load the data file.

        Returns:
            Stored data, or a fresh empty TimeCardData if the file doesn't exist

        Raises:
            StorageError: If the file can't be read or isn't a valid document
        """
        if not self.data_file.exists():
            logger.debug(f"No data file at {self.data_file}, starting empty")
            return TimeCardData()

        try:
            with open(self.data_file, encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in {self.data_file}: {e}")
        except OSError as e:
            raise StorageError(f"Could not read {self.data_file}: {e}")

        if not isinstance(raw, dict):
            raise StorageError(f"Invalid data file {self.data_file}: expected a JSON object")

        try:
            data = TimeCardData.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Invalid data file {self.data_file}: {e}")

        logger.debug(f"Loaded {len(data.time_entries)} entries from {self.data_file}")
        return data

    def save(self, data: TimeCardData) -> None:
        """Write the data file atomically using temporary file and rename.

        Args:
            data: Aggregate to persist

        Raises:
            StorageError: If the file can't be written
        """
        temp_file = self.data_file.with_name(self.data_file.name + ".tmp")

        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data.to_dict(), f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())

            temp_file.replace(self.data_file)

        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Could not write {self.data_file}: {e}")

        logger.debug(f"Saved {len(data.time_entries)} entries to {self.data_file}")

    def backup(self) -> Optional[Path]:
        """Copy the data file to its '.backup' sibling.

        Returns:
            Path to the backup, or None if there is no data file yet

        Raises:
            StorageError: If the copy fails
        """
        if not self.data_file.exists():
            return None

        try:
            shutil.copy2(self.data_file, self.backup_file)
        except OSError as e:
            raise StorageError(f"Could not back up {self.data_file}: {e}")

        logger.info(f"Backed up {self.data_file} to {self.backup_file}")
        return self.backup_file

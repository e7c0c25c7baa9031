"""CSV export of period reports."""

import csv
from pathlib import Path
from typing import Any, Union

from timecard.core.models import TimeEntry
from timecard.core.periods import Period
from timecard.export_import.base import Exporter

CSV_HEADER = ["Date", "Start Time", "End Time", "Duration (hours)", "Project", "Description"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def report_filename(period: Union[Period, str]) -> str:
    """File name for a period report, e.g. 'timecard_report_last_week.csv'."""
    slug = period.slug if isinstance(period, Period) else period.replace("-", "_")
    return f"timecard_report_{slug}.csv"


class CSVExporter(Exporter):
    """Export time entries as one CSV row per entry."""

    def get_file_extension(self) -> str:
        """Get CSV file extension.

        Returns:
            '.csv'
        """
        return ".csv"

    @staticmethod
    def entry_row(entry: TimeEntry) -> list[str]:
        """Format one entry; running entries get an empty end and 0.00 hours."""
        return [
            entry.start_time.strftime("%Y-%m-%d"),
            entry.start_time.strftime(TIMESTAMP_FORMAT),
            entry.end_time.strftime(TIMESTAMP_FORMAT) if entry.end_time else "",
            f"{entry.hours or 0.0:.2f}",
            entry.project or "",
            entry.description or "",
        ]

    def export_entries(self, entries: list[TimeEntry], **kwargs: Any) -> None:
        """Write entries to the CSV file, header first.

        Args:
            entries: Entries in the order they should appear
        """
        self.ensure_output_path()

        with open(self.output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for entry in entries:
                writer.writerow(self.entry_row(entry))

    @classmethod
    def for_period(cls, period: Union[Period, str], output_dir: Union[str, Path] = ".") -> "CSVExporter":
        """Exporter writing to the standard report file name inside output_dir."""
        return cls(Path(output_dir).expanduser() / report_filename(period))

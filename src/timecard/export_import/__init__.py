"""Export functionality for time tracking data."""

from timecard.export_import.base import Exporter
from timecard.export_import.csv_format import CSV_HEADER, CSVExporter, report_filename

__all__ = ["Exporter", "CSVExporter", "CSV_HEADER", "report_filename"]

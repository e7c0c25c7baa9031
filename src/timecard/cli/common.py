"""Helpers shared by the CLI commands."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn, Optional

import click  # type: ignore[import-not-found]
from rich.console import Console  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]

from timecard.analysis.reports import ReportGenerator
from timecard.core.config import ConfigManager
from timecard.core.storage import StorageManager
from timecard.core.tracker import TimeTracker

console = Console()
error_console = Console(stderr=True)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str, log_file: Optional[str] = None) -> None:
    """Configure the 'timecard' logger for this invocation.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Also write to this file when set
    """
    root_logger = logging.getLogger("timecard")
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def fail(message: Any) -> NoReturn:
    """Print an error and exit with status 1."""
    error_console.print(f"[red]Error:[/red] {escape(str(message))}")
    sys.exit(1)


def get_config(ctx: click.Context) -> ConfigManager:
    """Load configuration once per invocation and set up logging from it."""
    obj = ctx.find_root().obj
    if obj.get("config") is None:
        config_path = obj.get("config_path")
        try:
            config = ConfigManager(Path(config_path).expanduser() if config_path else None)
        except ValueError as e:
            fail(e)

        level = "DEBUG" if obj.get("verbose") else config.get("advanced.log_level", "WARNING")
        setup_logging(level, config.get("advanced.log_file"))
        obj["config"] = config
    return obj["config"]


def get_data_file(ctx: click.Context) -> Path:
    """Data file from --data-file, falling back to the configured one."""
    data_file = ctx.find_root().obj.get("data_file")
    if data_file:
        return Path(data_file).expanduser()
    return get_config(ctx).data_file


def get_tracker(ctx: click.Context) -> TimeTracker:
    """Get TimeTracker for the resolved data file."""
    config = get_config(ctx)
    data_file = get_data_file(ctx)
    logger.debug(f"Using data file {data_file}")
    return TimeTracker(
        StorageManager(data_file),
        clock=ctx.find_root().obj.get("clock") or datetime.now,
        backup_on_save=bool(config.get("general.backup_on_save", False)),
    )


def get_reporter(ctx: click.Context) -> ReportGenerator:
    config = get_config(ctx)
    return ReportGenerator(console, datetime_format=config.get("display.datetime_format"))

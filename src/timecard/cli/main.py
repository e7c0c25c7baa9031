"""Main CLI application."""

import json
from typing import Optional

import click  # type: ignore[import-not-found]

from timecard import __version__
from timecard.cli.common import (
    console,
    error_console,
    fail,
    get_config,
    get_reporter,
    get_tracker,
)
from timecard.cli.config_commands import config
from timecard.cli.interactive import ui
from timecard.core.exceptions import ActiveEntryError, TimeCardError
from timecard.core.parsing import parse_datetime
from timecard.export_import import CSVExporter


@click.group()
@click.version_option(version=__version__)
@click.option(
    "-f",
    "--data-file",
    envvar="TIMECARD_DATA_FILE",
    type=click.Path(dir_okay=False),
    help="Data file (default: general.data_file from config)",
)
@click.option(
    "--config",
    "config_path",
    envvar="TIMECARD_CONFIG",
    type=click.Path(dir_okay=False),
    help="Config file (default: ~/.timecard/config.yml)",
)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    data_file: Optional[str],
    config_path: Optional[str],
    no_color: bool,
    verbose: bool,
) -> None:
    """TimeCard - Simple time card management.

    Clock in and out of work sessions, add manual entries and report on
    your hours.
    """
    ctx.ensure_object(dict)
    ctx.obj["data_file"] = data_file
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    if no_color:
        console.no_color = True
        error_console.no_color = True


@cli.command(name="in")
@click.option("-p", "--project", help="Project name")
@click.option("-d", "--description", help="What you are working on")
@click.pass_context
def clock_in(ctx: click.Context, project: Optional[str], description: Optional[str]) -> None:
    """Clock in to start tracking time.

    Example:
        timecard in -p website -d "Landing page"
    """
    tracker = get_tracker(ctx)
    reporter = get_reporter(ctx)

    try:
        entry = tracker.clock_in(project, description)
    except ActiveEntryError as e:
        error_console.print("[red]Already clocked in![/red]")
        if e.entry is not None:
            reporter.entry_details(e.entry)
        raise SystemExit(1)
    except TimeCardError as e:
        fail(e)

    console.print("[green]✓[/green] Clocked in!")
    reporter.entry_details(entry)


@cli.command(name="out")
@click.option("-d", "--description", help="Replace the session description")
@click.pass_context
def clock_out(ctx: click.Context, description: Optional[str]) -> None:
    """Clock out to stop tracking time.

    Example:
        timecard out
        timecard out -d "Finished landing page"
    """
    tracker = get_tracker(ctx)

    try:
        entry = tracker.clock_out(description)
    except TimeCardError as e:
        fail(e)

    console.print("[green]✓[/green] Clocked out!")
    get_reporter(ctx).entry_details(entry)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show current status with today's and this week's totals."""
    tracker = get_tracker(ctx)

    try:
        active = tracker.status()
        today_entries = tracker.today_entries()
        _, week_entries = tracker.period_entries("week")
    except TimeCardError as e:
        fail(e)

    get_reporter(ctx).status_report(active, today_entries, week_entries, tracker.clock())


@cli.command()
@click.option(
    "-p",
    "--period",
    help="today, yesterday, week, last-week, month or last-month "
    "(default: report.default_period from config)",
)
@click.option("--project", help="Only include this project")
@click.option("-c", "--csv", "csv_export", is_flag=True, help="Also export the entries to CSV")
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False),
    help="Directory for the CSV file (default: report.csv_dir from config)",
)
@click.pass_context
def report(
    ctx: click.Context,
    period: Optional[str],
    project: Optional[str],
    csv_export: bool,
    output_dir: Optional[str],
) -> None:
    """Generate a report for a period.

    Examples:
        timecard report
        timecard report -p last-week --project website
        timecard report -p month --csv
    """
    config_mgr = get_config(ctx)
    tracker = get_tracker(ctx)

    try:
        resolved, entries = tracker.period_entries(
            period or config_mgr.get("report.default_period", "today"), project
        )
    except TimeCardError as e:
        fail(e)

    get_reporter(ctx).period_report(resolved, entries)

    if csv_export and entries:
        exporter = CSVExporter.for_period(resolved, output_dir or config_mgr.get("report.csv_dir", "."))
        try:
            exporter.export_entries(entries)
        except OSError as e:
            fail(f"Could not write {exporter.output_path}: {e}")
        console.print(f"[green]✓[/green] CSV exported to: {exporter.output_path}")


@cli.command(name="list")
@click.option("--project", "-p", help="Only show this project")
@click.option("--limit", "-l", type=click.IntRange(min=1), help="Maximum number of entries")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(
    ctx: click.Context,
    project: Optional[str],
    limit: Optional[int],
    as_json: bool,
) -> None:
    """List time entries, newest first.

    Example:
        timecard list
        timecard list -p website -l 20
    """
    tracker = get_tracker(ctx)

    try:
        entries = tracker.list_entries(project=project, limit=limit)
    except TimeCardError as e:
        fail(e)

    if as_json:
        click.echo(json.dumps([entry.to_dict() for entry in entries], indent=2))
        return

    get_reporter(ctx).list_report(entries)


@cli.command()
@click.option("-s", "--start", required=True, help="Start (YYYY-MM-DD HH:MM[:SS], YYYY-MM-DD or HH:MM[:SS])")
@click.option("-e", "--end", required=True, help="End (same formats as --start)")
@click.option("-p", "--project", help="Project name")
@click.option("-d", "--description", help="Description")
@click.pass_context
def add(
    ctx: click.Context,
    start: str,
    end: str,
    project: Optional[str],
    description: Optional[str],
) -> None:
    """Add a manual time entry.

    Example:
        timecard add -s "09:00" -e "10:30" -p website
        timecard add -s "2024-01-15 14:00" -e "2024-01-15 15:30"
    """
    tracker = get_tracker(ctx)
    today = tracker.clock().date()

    try:
        start_time = parse_datetime(start, today=today)
        end_time = parse_datetime(end, today=today)
        entry = tracker.add_manual_entry(start_time, end_time, project, description)
    except TimeCardError as e:
        fail(e)

    console.print("[green]✓[/green] Manual time entry added!")
    get_reporter(ctx).entry_details(entry)


cli.add_command(ui)
cli.add_command(config)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

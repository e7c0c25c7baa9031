"""Interactive console UI."""

from typing import Optional

import click  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]
from rich.prompt import Prompt  # type: ignore[import-not-found]
from rich.rule import Rule  # type: ignore[import-not-found]

from timecard.analysis.reports import ReportGenerator
from timecard.cli.common import console, error_console, fail, get_config, get_reporter, get_tracker
from timecard.core.exceptions import StorageError, TimeCardError
from timecard.core.models import TimeEntry
from timecard.core.parsing import parse_datetime
from timecard.core.periods import PERIOD_TOKENS, normalize_period, resolve_period
from timecard.core.tracker import TimeTracker

ACTIONS = ["in", "out", "add", "period", "refresh", "quit"]


def _show_overview(tracker: TimeTracker, reporter: ReportGenerator, period: str) -> Optional[TimeEntry]:
    """Print status, quick stats and the period report from one load.

    Returns:
        The running entry, if any

    Raises:
        StorageError: If the data file cannot be read
    """
    data = tracker.load()
    today = tracker.clock().date()
    active = data.get_active_entry()

    console.print(Rule("TimeCard"))
    if active is not None:
        console.print("[green bold]Clocked in[/green bold]")
        reporter.entry_details(active)
    else:
        console.print("[red bold]Not clocked in[/red bold]")

    console.print()
    reporter.quick_stats(data.get_entries_by_date(today), data.time_entries)

    resolved = resolve_period(period, today=today)
    reporter.period_report(resolved, data.get_entries_by_period(resolved.start, resolved.end))
    return active


@click.command()
@click.option(
    "-p",
    "--period",
    default=None,
    help=f"Period shown on start ({', '.join(PERIOD_TOKENS)})",
)
@click.pass_context
def ui(ctx: click.Context, period: Optional[str]) -> None:
    """Launch the interactive time card console.

    Each action loads the data file, applies the change and saves it,
    exactly like the equivalent command. An unreadable data file ends
    the session with an error.
    """
    tracker = get_tracker(ctx)
    reporter = get_reporter(ctx)
    if period is None:
        period = get_config(ctx).get("report.default_period", "today")

    try:
        period = normalize_period(period)
    except TimeCardError as e:
        fail(e)

    while True:
        try:
            active = _show_overview(tracker, reporter, period)
        except StorageError as e:
            fail(e)

        try:
            action = Prompt.ask(
                "Action",
                choices=ACTIONS,
                default="out" if active is not None else "in",
                console=console,
            )

            if action == "quit":
                break
            if action == "in":
                project = Prompt.ask("Project", default="", console=console)
                description = Prompt.ask("Description", default="", console=console)
                tracker.clock_in(project or None, description or None)
                console.print("[green]✓[/green] Clocked in!")
            elif action == "out":
                description = Prompt.ask("Description (blank to keep)", default="", console=console)
                tracker.clock_out(description or None)
                console.print("[green]✓[/green] Clocked out!")
            elif action == "add":
                today = tracker.clock().date()
                start = parse_datetime(Prompt.ask("Start", console=console), today=today)
                end = parse_datetime(Prompt.ask("End", console=console), today=today)
                project = Prompt.ask("Project", default="", console=console)
                description = Prompt.ask("Description", default="", console=console)
                tracker.add_manual_entry(start, end, project or None, description or None)
                console.print("[green]✓[/green] Manual time entry added!")
            elif action == "period":
                period = normalize_period(Prompt.ask("Period", default=period, console=console))

        except StorageError as e:
            fail(e)
        except TimeCardError as e:
            error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

"""Console rendering of time card data."""

from datetime import datetime
from typing import Optional

from rich.console import Console  # type: ignore[import-not-found]
from rich.panel import Panel  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]
from rich.text import Text  # type: ignore[import-not-found]

from timecard.core.models import NO_PROJECT, TimeCardData, TimeEntry, sum_hours
from timecard.core.periods import Period


class ReportGenerator:
    """Render status, listings and period reports."""

    def __init__(
        self,
        console: Optional[Console] = None,
        datetime_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        """Initialize report generator.

        Args:
            console: Rich console for output. Creates default if None.
            datetime_format: strftime format for timestamps
        """
        self.console = console or Console()
        self.datetime_format = datetime_format

    def entry_details(self, entry: TimeEntry) -> None:
        """Print start/end/duration/project/description of one entry."""
        self.console.print(f"  Started: {self._format_datetime(entry.start_time)}")
        if entry.end_time is not None:
            self.console.print(f"  Ended: {self._format_datetime(entry.end_time)}")
            self.console.print(f"  Duration: {self._format_hours(entry.hours)} hours")
        if entry.project:
            self.console.print(f"  Project: [blue]{entry.project}[/blue]")
        if entry.description:
            self.console.print(f"  Description: {entry.description}")

    def status_report(
        self,
        active: Optional[TimeEntry],
        today_entries: list[TimeEntry],
        week_entries: list[TimeEntry],
        now: datetime,
    ) -> None:
        """Display current session plus today's and this week's totals.

        Args:
            active: Running entry, if any
            today_entries: Entries started today
            week_entries: Entries started this week
            now: Reference time for the running duration
        """
        if active is not None:
            running_hours = int((now - active.start_time).total_seconds()) / 3600.0
            content = (
                f"[dim]Started:[/dim] {self._format_datetime(active.start_time)}\n"
                f"[dim]Duration:[/dim] {self._format_hours(running_hours)} hours"
            )
            if active.project:
                content += f"\n[dim]Project:[/dim] {active.project}"
            if active.description:
                content += f"\n[dim]Description:[/dim] {active.description}"
            self.console.print(Panel(content, title="Currently Clocked In", border_style="green"))
        else:
            self.console.print("[red bold]Not Clocked In[/red bold]")

        overview = Table(show_header=False, box=None, padding=(0, 2))
        overview.add_column(style="dim")
        overview.add_column(style="bold")
        overview.add_row("Today:", self._totals(today_entries))
        overview.add_row("This Week:", self._totals(week_entries))
        self.console.print()
        self.console.print(overview)

        if today_entries:
            self.console.print()
            self._breakdown_table("Today's Projects", today_entries, with_percent=False)

    def quick_stats(self, today_entries: list[TimeEntry], all_entries: list[TimeEntry]) -> None:
        """One line each for today's and all-time totals."""
        stats = Table(title="Quick Stats", title_justify="left", show_header=False, box=None, padding=(0, 2))
        stats.add_column(style="dim")
        stats.add_column(style="bold")
        stats.add_row("Today:", self._totals(today_entries))
        stats.add_row("Total:", self._totals(all_entries))
        self.console.print(stats)

    def list_report(self, entries: list[TimeEntry]) -> None:
        """Display entries in the given order with a summary."""
        if not entries:
            self.console.print("[yellow]No time entries found.[/yellow]")
            return

        table = Table(title=f"Time Entries (showing {len(entries)})")
        table.add_column("Status")
        table.add_column("Start", style="cyan")
        table.add_column("End", style="cyan")
        table.add_column("Hours", style="magenta", justify="right")
        table.add_column("Project", style="blue")
        table.add_column("Description")

        for entry in entries:
            table.add_row(
                "[green]ACTIVE[/green]" if entry.is_active else "done",
                entry.start_time.strftime("%Y-%m-%d %H:%M"),
                entry.end_time.strftime("%Y-%m-%d %H:%M") if entry.end_time else "-",
                self._format_hours(entry.hours),
                entry.project or NO_PROJECT,
                entry.description or "",
            )

        self.console.print(table)

        summary = Table(show_header=False, box=None, padding=(0, 2))
        summary.add_column(style="dim")
        summary.add_column(style="bold")
        summary.add_row("Total Entries:", str(len(entries)))
        summary.add_row("Total Hours:", self._format_hours(sum_hours(entries)))
        summary.add_row("Active Entries:", str(sum(1 for e in entries if e.is_active)))
        self.console.print(summary)

    def period_report(self, period: Period, entries: list[TimeEntry]) -> None:
        """Display totals, project breakdown and details for a period.

        Args:
            period: Resolved period
            entries: Entries that started within the period
        """
        self.console.print(f"\n[bold cyan]Time Report - {period.label}[/bold cyan]")
        self.console.print(
            f"Period: {period.start:%Y-%m-%d} to {period.end:%Y-%m-%d}\n"
        )

        if not entries:
            self.console.print("[yellow]No time entries found for this period.[/yellow]")
            return

        overview = Table(show_header=False, box=None, padding=(0, 2))
        overview.add_column(style="dim")
        overview.add_column(style="bold")
        overview.add_row("Total Hours:", self._format_hours(sum_hours(entries)))
        overview.add_row("Total Entries:", str(len(entries)))
        self.console.print(overview)
        self.console.print()

        if len(TimeCardData.project_breakdown(entries)) > 1:
            self._breakdown_table("Project Breakdown", entries, with_percent=True)
            self.console.print()

        details = Table(title="Detailed Entries")
        details.add_column("Start", style="cyan")
        details.add_column("Project", style="blue")
        details.add_column("Hours", style="magenta", justify="right")
        details.add_column("Description")
        for entry in sorted(entries, key=lambda e: e.start_time):
            details.add_row(
                entry.start_time.strftime("%Y-%m-%d %H:%M"),
                entry.project or NO_PROJECT,
                self._format_hours(entry.hours),
                entry.description or "",
            )
        self.console.print(details)

    def _breakdown_table(self, title: str, entries: list[TimeEntry], with_percent: bool) -> None:
        by_project = TimeCardData.project_breakdown(entries)
        total = sum(by_project.values())

        table = Table(title=title)
        table.add_column("Project", style="cyan")
        table.add_column("Hours", style="magenta", justify="right")
        if with_percent:
            table.add_column("% Total", style="green", justify="right")
            table.add_column("Bar", style="blue")

        for project, hours in sorted(by_project.items(), key=lambda x: x[1], reverse=True):
            if with_percent:
                pct = (hours / total) * 100 if total > 0 else 0.0
                table.add_row(project, self._format_hours(hours), f"{pct:.1f}%", self._create_bar(pct))
            else:
                table.add_row(project, self._format_hours(hours))

        self.console.print(table)

    def _totals(self, entries: list[TimeEntry]) -> str:
        hours = sum_hours(entries)
        return f"{self._format_hours(hours)} hours in {len(entries)} entries"

    def _format_datetime(self, dt: datetime) -> str:
        return dt.strftime(self.datetime_format)

    def _format_hours(self, hours: Optional[float]) -> str:
        """Format hours with two decimals; None means the entry is running."""
        if hours is None:
            return "running"
        return f"{hours:.2f}"

    def _create_bar(self, percentage: float, width: int = 25) -> Text:
        """Create a visual bar for percentage display.

        Args:
            percentage: Percentage value (0-100)
            width: Width of the bar in characters

        Returns:
            Rich Text object with colored bar
        """
        filled = int((percentage / 100) * width)
        empty = width - filled

        bar = Text()
        bar.append("█" * filled, style="blue")
        bar.append("░" * empty, style="dim")

        return bar

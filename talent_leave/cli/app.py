"""
Main CLI application using Typer.
"""

from pathlib import Path
from typing import Dict, List, Optional, Annotated

import pendulum
import typer
from pendulum import Date
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..adapters.holiday_client import HolidayClient
from ..adapters.leave_source import JsonLeaveSource
from ..adapters.mock_clients import MockHolidayClient, MockLeaveSource
from ..config import AppConfig, get_default_config_path
from ..domain.calendar_grid import DAY_NAMES
from ..domain.dates import format_date_ddmmyyyy, format_date_range, today
from ..domain.exceptions import LeaveCalendarError
from ..domain.leave_aggregator import calculate_day_count, cell_color_for_member
from ..domain.models import CalendarCell, CellColor, LeaveRowData, LeaveStatus
from ..domain.sprint_calendar import SPRINT_DURATION_DAYS
from ..services.leave_calendar import LeaveCalendarService, LeaveCalendarView

app = typer.Typer(
    name="talent-leave",
    help="Team leave calendar with holidays and biweekly sprints",
    add_completion=False
)

console = Console()

CELL_STYLES: Dict[CellColor, str] = {
    CellColor.NATIONAL_HOLIDAY: "bold white on red3",
    CellColor.WEEKEND: "on grey23",
    CellColor.REGIONAL_HOLIDAY: "black on orange1",
    CellColor.LEAVE_DRAFT: "black on yellow",
    CellColor.LEAVE_SICK: "white on purple",
    CellColor.LEAVE_CONFIRMED: "black on green3",
    CellColor.DEFAULT: "",
}

STATUS_MARKS = {
    LeaveStatus.DRAFT: "D",
    LeaveStatus.CONFIRMED: "C",
    LeaveStatus.SICK: "S",
}


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration.

    An explicit --config must exist; without it the default location is
    used when present, otherwise built-in defaults apply.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)

    return AppConfig()


def _parse_date(value: str, label: str) -> Date:
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        console.print(f"[red]Error parsing {label} '{value}': {e}[/red]")
        raise typer.Exit(1)


def _determine_window(
    *,
    month: Optional[str],
    start_option: Optional[str],
    end_option: Optional[str],
):
    """
    Resolve the requested window.
    Returns (start, end) where end is None for the default two-month span.
    """
    if month and (start_option or end_option):
        console.print("[red]Error: --month cannot be combined with --start/--end.[/red]")
        raise typer.Exit(1)

    if month:
        try:
            first = pendulum.from_format(month, "YYYY-MM").date()
        except ValueError as e:
            console.print(f"[red]Error parsing month '{month}': {e}[/red]")
            raise typer.Exit(1)
        return first, None

    if start_option:
        start = _parse_date(start_option, "start date")
        end = _parse_date(end_option, "end date") if end_option else None
        return start, end

    if end_option:
        console.print("[red]Error: --end requires --start.[/red]")
        raise typer.Exit(1)

    return today(), None


def _cell_mark(cell: CalendarCell, member: LeaveRowData) -> str:
    status = member.status_on(cell.date)
    if cell.is_national_holiday or cell.is_weekend or cell.is_holiday:
        return "·"
    if status is not None:
        return STATUS_MARKS.get(status, "•")
    return " "


def _render_team_tables(view: LeaveCalendarView) -> None:
    for team in view.teams:
        table = Table(
            title=f"{team.team_name} ({team.member_count})",
            show_header=True,
            header_style="bold cyan",
            title_justify="left",
        )
        table.add_column("Name", style="bold yellow")
        table.add_column("Role", style="dim")
        table.add_column("Days", justify="right")
        table.add_column("Leave")
        table.add_column("Status")

        for member in team.members:
            table.add_row(
                member.name,
                member.role,
                str(member.leave_count),
                member.date_range or "-",
                member.status or "-",
            )

        console.print(table)
        console.print()


def _render_sprint_grids(view: LeaveCalendarView) -> None:
    members = [(team.team_name, member) for team in view.teams for member in team.members]

    for group in view.sprint_groups.values():
        sprint_end = group.start_date.add(days=SPRINT_DURATION_DAYS)
        cells = [cell for cell in view.cells if group.start_date <= cell.date < sprint_end]
        if not cells:
            continue

        table = Table(title=group.name, title_justify="left", header_style="bold")
        table.add_column("Talent", no_wrap=True)
        for cell in cells:
            header_style = CELL_STYLES[CellColor.NATIONAL_HOLIDAY] if cell.is_national_holiday else ""
            table.add_column(
                f"{cell.day_number}\n{cell.day_name[:3]}",
                justify="center",
                header_style=header_style or "bold",
            )

        for team_name, member in members:
            row = [f"{member.name} [dim]({team_name})[/dim]"]
            for cell in cells:
                color = cell_color_for_member(cell, member)
                style = CELL_STYLES[color]
                mark = _cell_mark(cell, member)
                row.append(f"[{style}] {mark} [/]" if style else f" {mark} ")
            table.add_row(*row)

        console.print(table)
        console.print()


def _render_holidays(view: LeaveCalendarView) -> None:
    if not view.holidays:
        return

    console.print("[bold]Holidays:[/bold]")
    for holiday in sorted(view.holidays, key=lambda h: h.date):
        kind = "national" if holiday.is_national else "regional"
        console.print(f"  {format_date_ddmmyyyy(holiday.date)}  {holiday.name} [dim]({kind})[/dim]")
    console.print()


@app.command()
def calendar(
    month: Annotated[Optional[str], typer.Option("--month", "-m", help="Start month (YYYY-MM); shows two months")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start date (YYYY-MM-DD)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End date (YYYY-MM-DD)")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    data_file: Annotated[Optional[Path], typer.Option("--data", "-d", help="Leave data JSON file")] = None,
    locale: Annotated[Optional[str], typer.Option("--locale", "-l", help="Day names: 'id' or 'en'")] = None,
    mock: Annotated[bool, typer.Option("--mock", help="Use bundled sample data and holidays (no network).")] = False,
    all_ranges: Annotated[bool, typer.Option("--all-ranges", help="Also list leave ranges that already ended.")] = False,
):
    """
    Show the leave calendar grouped by team.

    Examples:

        # Two months starting with the current month
        talent-leave calendar

        # November and December 2026
        talent-leave calendar --month 2026-11

        # Explicit window with offline sample data
        talent-leave calendar --start 2026-10-19 --end 2026-11-13 --mock
    """
    try:
        config = _load_config(config_file)

        if locale is not None and locale not in DAY_NAMES:
            console.print(f"[red]Error: unsupported locale '{locale}'.[/red]")
            raise typer.Exit(1)

        window_start, window_end = _determine_window(
            month=month,
            start_option=start,
            end_option=end,
        )

        if mock:
            console.print("[yellow]⚠  MOCK MODE: using bundled sample data[/yellow]\n")
            holiday_client = MockHolidayClient()
            leave_source = JsonLeaveSource(data_file) if data_file else MockLeaveSource()
        else:
            holiday_client = HolidayClient(
                api_url=config.holidays.api_url,
                timeout=config.holidays.timeout_seconds,
            )
            leave_source = JsonLeaveSource(data_file or config.leave_data_file)

        service = LeaveCalendarService(
            leave_source=leave_source,
            holiday_client=holiday_client,
            sprint_calendar=config.sprint.build_calendar(),
            regional_holidays=config.holidays.regional_holidays(),
            locale=locale or config.locale,
        )

        view = service.build_calendar(
            window_start,
            window_end,
            display_from=None if all_ranges else today(),
        )

        if not view.cells:
            console.print("[yellow]⚠ The selected window is empty.[/yellow]")
            return

        console.print(Panel.fit(
            f"[bold cyan]🗓️  Talent Leave[/bold cyan]  {view.window}\n"
            + "\n".join(
                f"[bold]{group.name}[/bold] - {group.date_count} day(s) visible"
                for group in view.sprint_groups.values()
            ),
            title="Leave calendar",
        ))
        console.print()

        if not view.teams:
            console.print("[yellow]⚠ No leave records found.[/yellow]\n")
            return

        _render_team_tables(view)
        _render_sprint_grids(view)
        _render_holidays(view)

        for record_id, dates in view.conflicts.items():
            console.print(
                f"[yellow]Warning:[/yellow] record {record_id} has conflicting statuses on {', '.join(dates)}"
            )

    except (FileNotFoundError, ValueError, LeaveCalendarError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def sprint(
    day: Annotated[Optional[str], typer.Argument(help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
):
    """
    Show the sprint a date belongs to.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    value = _parse_date(day, "date") if day else today()
    sprints = config.sprint.build_calendar()

    console.print(f"\n[bold cyan]{sprints.sprint_name_with_date_range(value)}[/bold cyan]")
    console.print(f"   Date: {format_date_ddmmyyyy(value)}")
    console.print(f"   Range: {format_date_range(sprints.sprint_start_date(value), sprints.sprint_end_date(value))}")
    console.print(f"   Relative sprint: {sprints.sprint_number(value):+d}\n")


@app.command()
def count_days(
    date_from: Annotated[str, typer.Argument(help="First day (YYYY-MM-DD)")],
    date_to: Annotated[str, typer.Argument(help="Last day (YYYY-MM-DD)")],
    holiday: Annotated[Optional[List[str]], typer.Option("--holiday", help="Holiday date to exclude (repeatable)")] = None,
):
    """
    Count business days between two dates (inclusive).
    """
    start = _parse_date(date_from, "start date")
    end = _parse_date(date_to, "end date")
    holidays = [_parse_date(value, "holiday").to_date_string() for value in holiday or []]

    count = calculate_day_count(start, end, holidays)
    console.print(f"{count} business day(s) in {format_date_range(start, end)}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]talent-leave[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

"""
Core business logic for the leave calendar body.

Turns leave records into per-team rows: business-day counts clipped to the
visible window, flattened leave dates with their status, display strings,
and the color of each calendar cell. Everything here is a pure function of
its inputs - no I/O and no state between calls.
"""

from typing import Dict, Iterable, List, Optional, Set

from pendulum import Date

from .dates import DateLike, date_key, format_date_range, is_weekend, iter_days, to_local_date
from .models import (
    CalendarCell,
    CellColor,
    DateRangeDisplay,
    DateWindow,
    LeaveRecord,
    LeaveRowData,
    LeaveStatus,
    TeamGroup,
)


def _holiday_set(holiday_dates: Optional[Iterable[DateLike]]) -> Set[str]:
    return {date_key(value) for value in holiday_dates or ()}


def _count_business_days(start: Date, end: Date, holidays: Set[str]) -> int:
    return sum(
        1 for day in iter_days(start, end)
        if not is_weekend(day) and day.to_date_string() not in holidays
    )


def calculate_day_count(
    date_from: DateLike,
    date_to: DateLike,
    holiday_dates: Optional[Iterable[DateLike]] = None,
) -> int:
    """
    Count business days between two dates, both inclusive.

    Saturdays, Sundays and every date in ``holiday_dates`` (YYYY-MM-DD,
    exact match) are skipped. Returns 0 when date_from is after date_to.
    """
    return _count_business_days(
        to_local_date(date_from),
        to_local_date(date_to),
        _holiday_set(holiday_dates),
    )


def _visible_window(
    visible_start: Optional[DateLike],
    visible_end: Optional[DateLike],
) -> Optional[DateWindow]:
    # Clipping needs both bounds
    if visible_start is None or visible_end is None:
        return None
    return DateWindow.of(visible_start, visible_end)


def transform_to_row_data(
    record: LeaveRecord,
    holiday_dates: Optional[Iterable[DateLike]] = None,
    visible_start: Optional[DateLike] = None,
    visible_end: Optional[DateLike] = None,
    display_from: Optional[DateLike] = None,
) -> LeaveRowData:
    """
    Transform a leave record into a calendar row.

    Args:
        record: Leave record with any number of ranges
        holiday_dates: Dates excluded from the leave count (YYYY-MM-DD)
        visible_start: Start of the visible window
        visible_end: End of the visible window
        display_from: When given, ``date_range`` and ``status`` only
            summarize ranges ending on or after this day

    Returns:
        LeaveRowData. ``leave_count`` only counts business days inside the
        visible window when both bounds are given. Overlapping ranges with
        different statuses resolve to the status of the later range.
    """
    holidays = _holiday_set(holiday_dates)
    window = _visible_window(visible_start, visible_end)

    date_ranges: List[DateRangeDisplay] = []
    leave_dates: List[str] = []
    leave_dates_with_status: Dict[str, LeaveStatus] = {}
    leave_count = 0

    for leave_range in record.leave_ranges:
        date_ranges.append(
            DateRangeDisplay(
                date_from=leave_range.date_from,
                date_to=leave_range.date_to,
                status=leave_range.status,
                display=format_date_range(leave_range.date_from, leave_range.date_to),
            )
        )

        if window is None:
            count_bounds = (leave_range.date_from, leave_range.date_to)
        else:
            count_bounds = window.clip(leave_range.date_from, leave_range.date_to)

        if count_bounds is not None:
            leave_count += _count_business_days(count_bounds[0], count_bounds[1], holidays)

        for day in leave_range.dates():
            leave_dates.append(day)
            leave_dates_with_status[day] = leave_range.status

    summary = date_ranges
    if display_from is not None:
        cutoff = to_local_date(display_from)
        summary = [item for item in date_ranges if item.date_to >= cutoff]

    statuses: List[str] = []
    for item in summary:
        if item.status.value not in statuses:
            statuses.append(item.status.value)

    return LeaveRowData(
        id=record.id,
        name=record.name,
        team=record.team,
        role=record.role,
        leave_count=leave_count,
        date_ranges=date_ranges,
        leave_dates=leave_dates,
        leave_dates_with_status=leave_dates_with_status,
        date_range=", ".join(item.display for item in summary),
        status=", ".join(statuses),
    )


def group_by_team(
    records: Iterable[LeaveRecord],
    holiday_dates: Optional[Iterable[DateLike]] = None,
    visible_start: Optional[DateLike] = None,
    visible_end: Optional[DateLike] = None,
    display_from: Optional[DateLike] = None,
) -> List[TeamGroup]:
    """
    Group leave records by team.

    Teams are sorted by name, case-insensitively; members keep their input
    order. An empty input gives an empty list.
    """
    # Materialized once so a generator of holidays serves every record
    holidays = list(holiday_dates or ())
    grouped: Dict[str, List[LeaveRowData]] = {}

    for record in records:
        row = transform_to_row_data(
            record,
            holiday_dates=holidays,
            visible_start=visible_start,
            visible_end=visible_end,
            display_from=display_from,
        )
        grouped.setdefault(record.team, []).append(row)

    return [
        TeamGroup(team_name=team_name, members=members)
        for team_name, members in sorted(
            grouped.items(),
            key=lambda item: (item[0].casefold(), item[0]),
        )
    ]


def find_status_conflicts(record: LeaveRecord) -> List[str]:
    """
    Dates covered by several ranges of a record with different statuses.

    ``transform_to_row_data`` keeps the status of the later range for such
    dates; callers use this to flag the record.
    """
    seen: Dict[str, LeaveStatus] = {}
    conflicts: List[str] = []

    for leave_range in record.leave_ranges:
        for day in leave_range.dates():
            previous = seen.get(day)
            if previous is not None and previous != leave_range.status and day not in conflicts:
                conflicts.append(day)
            seen[day] = leave_range.status

    return conflicts


def get_cell_color_class(
    is_weekend: bool,
    is_holiday: bool,
    is_national_holiday: bool,
    is_leave_date: bool = False,
    leave_status: Optional[str] = None,
) -> CellColor:
    """
    Resolve the background color of a calendar cell.

    Priority, first match wins:
    national holiday > weekend > regional holiday > leave (by status) > default.
    A leave never hides a weekend or a holiday.
    """
    if is_national_holiday:
        return CellColor.NATIONAL_HOLIDAY

    if is_weekend:
        return CellColor.WEEKEND

    if is_holiday:
        return CellColor.REGIONAL_HOLIDAY

    if is_leave_date:
        if leave_status == LeaveStatus.DRAFT:
            return CellColor.LEAVE_DRAFT
        if leave_status == LeaveStatus.SICK:
            return CellColor.LEAVE_SICK
        return CellColor.LEAVE_CONFIRMED

    return CellColor.DEFAULT


def cell_color_for_member(cell: CalendarCell, member: LeaveRowData) -> CellColor:
    """Color of a member's cell on a given day."""
    status = member.status_on(cell.date)
    return get_cell_color_class(
        is_weekend=cell.is_weekend,
        is_holiday=cell.is_holiday,
        is_national_holiday=cell.is_national_holiday,
        is_leave_date=status is not None,
        leave_status=status,
    )

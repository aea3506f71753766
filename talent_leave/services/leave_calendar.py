"""
Application service that assembles a complete leave calendar view.

The service fetches leave records and holidays through small protocols and
delegates all computation to the domain layer: date grid, holiday merge,
team grouping and sprint header spans. Adapters can be swapped for stubs in
tests or for the offline mock clients.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

from ..domain.calendar_grid import DEFAULT_LOCALE, generate_date_range, mark_holidays
from ..domain.dates import DateLike
from ..domain.exceptions import HolidayAPIError
from ..domain.leave_aggregator import find_status_conflicts, group_by_team
from ..domain.models import (
    CalendarCell,
    DateWindow,
    Holiday,
    LeaveRecord,
    SprintGroup,
    TeamGroup,
)
from ..domain.sprint_calendar import SprintCalendar

logger = logging.getLogger(__name__)


class LeaveSourceProtocol(Protocol):
    """Protocol describing the leave repository behaviour needed by the service."""

    def fetch_leave_records(self) -> List[LeaveRecord]:
        """Return the current snapshot of leave records."""


class HolidayClientProtocol(Protocol):
    """Protocol describing the holiday client behaviour needed by the service."""

    def fetch_holidays(self, start_date: DateLike, end_date: DateLike) -> List[Holiday]:
        """Return holidays between two dates (inclusive)."""


@dataclass(frozen=True)
class LeaveCalendarView:
    """Everything the rendering layer needs for one calendar window."""
    window: DateWindow
    cells: List[CalendarCell]
    teams: List[TeamGroup]
    holidays: List[Holiday] = field(default_factory=list)
    sprint_groups: Dict[str, SprintGroup] = field(default_factory=dict)
    conflicts: Dict[str, List[str]] = field(default_factory=dict)


class LeaveCalendarService:
    """
    Orchestrates data retrieval and calendar aggregation.

    Holidays are optional: when the holiday client fails the calendar is
    still built, just without holiday markings.
    """

    def __init__(
        self,
        leave_source: LeaveSourceProtocol,
        holiday_client: HolidayClientProtocol,
        sprint_calendar: Optional[SprintCalendar] = None,
        regional_holidays: Sequence[Holiday] = (),
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self._leave_source = leave_source
        self._holiday_client = holiday_client
        self._sprint_calendar = sprint_calendar or SprintCalendar()
        self._regional_holidays = list(regional_holidays)
        self._locale = locale

    def build_calendar(
        self,
        start: DateLike,
        end: Optional[DateLike] = None,
        display_from: Optional[DateLike] = None,
    ) -> LeaveCalendarView:
        """
        Build the calendar for a window.

        Args:
            start: First day, or any day of the start month when ``end`` is omitted
            end: Last day (inclusive); defaults to the two-month window
            display_from: Only summarize ranges ending on or after this day
        """
        base_cells = generate_date_range(start, end, locale=self._locale)

        if not base_cells:
            # Empty window, nothing to fetch holidays for
            window = DateWindow.of(start, end if end is not None else start)
            return LeaveCalendarView(window=window, cells=[], teams=[])

        window = DateWindow(start=base_cells[0].date, end=base_cells[-1].date)

        holidays = self.fetch_holidays(window)
        records = self._leave_source.fetch_leave_records()

        return self.assemble(
            window=window,
            cells=mark_holidays(base_cells, holidays),
            records=records,
            holidays=holidays,
            display_from=display_from,
        )

    def fetch_holidays(self, window: DateWindow) -> List[Holiday]:
        """
        Configured regional holidays plus the client's holidays inside the window.

        Regional entries come first so a national holiday on the same date
        takes precedence when cells are marked.
        """
        holidays = [
            holiday for holiday in self._regional_holidays
            if window.start <= holiday.date <= window.end
        ]

        try:
            holidays.extend(self._holiday_client.fetch_holidays(window.start, window.end))
        except HolidayAPIError as exc:
            logger.warning("Continuing without public holidays: %s", exc)

        return holidays

    def assemble(
        self,
        *,
        window: DateWindow,
        cells: List[CalendarCell],
        records: Sequence[LeaveRecord],
        holidays: Sequence[Holiday],
        display_from: Optional[DateLike] = None,
    ) -> LeaveCalendarView:
        """Aggregate already fetched data into a view."""
        teams = group_by_team(
            records,
            holiday_dates=[holiday.date_string for holiday in holidays],
            visible_start=window.start,
            visible_end=window.end,
            display_from=display_from,
        )

        return LeaveCalendarView(
            window=window,
            cells=cells,
            teams=teams,
            holidays=list(holidays),
            sprint_groups=self._sprint_calendar.calculate_sprint_groups(cells),
            conflicts=self._collect_conflicts(records),
        )

    @staticmethod
    def _collect_conflicts(records: Sequence[LeaveRecord]) -> Dict[str, List[str]]:
        """
        Map record id to dates with conflicting statuses.

        Such dates are displayed with the status of the later range; they
        are reported so the data can be corrected upstream.
        """
        conflicts: Dict[str, List[str]] = {}

        for record in records:
            dates = find_status_conflicts(record)
            if dates:
                logger.warning(
                    "Leave record %s (%s) has overlapping ranges with different statuses on %s",
                    record.id,
                    record.name,
                    ", ".join(dates),
                )
                conflicts[record.id] = dates

        return conflicts

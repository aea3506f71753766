"""
Domain layer - Pure calendar and leave logic without I/O.
"""

from .calendar_grid import generate_date_range, mark_holidays
from .leave_aggregator import (
    calculate_day_count,
    get_cell_color_class,
    group_by_team,
    transform_to_row_data,
)
from .models import (
    CalendarCell,
    CellColor,
    Holiday,
    LeaveDateRange,
    LeaveRecord,
    LeaveRowData,
    LeaveStatus,
    TeamGroup,
)
from .sprint_calendar import SprintCalendar, SprintReference

__all__ = [
    "CalendarCell",
    "CellColor",
    "Holiday",
    "LeaveDateRange",
    "LeaveRecord",
    "LeaveRowData",
    "LeaveStatus",
    "SprintCalendar",
    "SprintReference",
    "TeamGroup",
    "calculate_day_count",
    "generate_date_range",
    "get_cell_color_class",
    "group_by_team",
    "mark_holidays",
    "transform_to_row_data",
]

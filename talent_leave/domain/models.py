"""
Domain models for the leave calendar.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pendulum import Date

from .dates import DateLike, date_key, format_date_ddmmyyyy, iter_days, to_local_date


class LeaveStatus(str, Enum):
    """Status of a single leave range."""
    DRAFT = "Draft"
    CONFIRMED = "Confirmed"
    SICK = "Sick"


class CellColor(str, Enum):
    """Background color tokens for calendar cells."""
    NATIONAL_HOLIDAY = "bg-red-100"
    WEEKEND = "bg-slate-100"
    REGIONAL_HOLIDAY = "bg-orange-50"
    LEAVE_DRAFT = "bg-gradient-to-br from-amber-100 to-yellow-200"
    LEAVE_SICK = "bg-gradient-to-br from-purple-100 to-violet-200"
    LEAVE_CONFIRMED = "bg-gradient-to-br from-emerald-100 to-green-200"
    DEFAULT = "bg-white"


@dataclass(frozen=True)
class DateWindow:
    """
    An inclusive range of calendar days.

    Unlike a leave range, a window never raises for start > end; such a
    window simply overlaps nothing.
    """
    start: Date
    end: Date

    @classmethod
    def of(cls, start: DateLike, end: DateLike) -> "DateWindow":
        return cls(start=to_local_date(start), end=to_local_date(end))

    def overlaps(self, start: Date, end: Date) -> bool:
        """Check if [start, end] shares at least one day with this window."""
        if self.start > self.end or start > end:
            return False
        return start <= self.end and end >= self.start

    def clip(self, start: Date, end: Date) -> Optional[Tuple[Date, Date]]:
        """
        Clip [start, end] to the window.
        Returns None if there is no overlap.
        """
        if not self.overlaps(start, end):
            return None

        return max(start, self.start), min(end, self.end)

    def __str__(self) -> str:
        return f"{format_date_ddmmyyyy(self.start)} - {format_date_ddmmyyyy(self.end)}"


@dataclass(frozen=True)
class LeaveDateRange:
    """One contiguous leave interval, inclusive on both ends."""
    date_from: Date
    date_to: Date
    status: LeaveStatus

    def dates(self) -> List[str]:
        """All calendar days covered by the range as YYYY-MM-DD strings."""
        return [day.to_date_string() for day in iter_days(self.date_from, self.date_to)]


@dataclass(frozen=True)
class LeaveRecord:
    """A talent's leave entry as delivered by the leave repository."""
    id: str
    name: str
    team: str
    role: str
    leave_ranges: Tuple[LeaveDateRange, ...] = ()


@dataclass(frozen=True)
class Holiday:
    """A public holiday. Non-national holidays are regional."""
    date: Date
    name: str
    is_national: bool = True

    @property
    def date_string(self) -> str:
        return self.date.to_date_string()


@dataclass(frozen=True)
class CalendarCell:
    """One day column of the calendar grid."""
    date: Date
    day_name: str
    day_number: int
    is_weekend: bool
    is_holiday: bool = False
    is_national_holiday: bool = False
    holiday_name: Optional[str] = None

    @property
    def date_string(self) -> str:
        return self.date.to_date_string()


@dataclass(frozen=True)
class DateRangeDisplay:
    """A leave range together with its display string."""
    date_from: Date
    date_to: Date
    status: LeaveStatus
    display: str


@dataclass(frozen=True)
class LeaveRowData:
    """A team member's row in the calendar body."""
    id: str
    name: str
    team: str
    role: str
    leave_count: int
    date_ranges: List[DateRangeDisplay] = field(default_factory=list)
    leave_dates: List[str] = field(default_factory=list)
    leave_dates_with_status: Dict[str, LeaveStatus] = field(default_factory=dict)
    date_range: str = ""
    status: str = ""

    def status_on(self, value: DateLike) -> Optional[LeaveStatus]:
        """Leave status for a given day, or None when not on leave."""
        return self.leave_dates_with_status.get(date_key(value))


@dataclass(frozen=True)
class TeamGroup:
    """Members of one team, in input order."""
    team_name: str
    members: List[LeaveRowData] = field(default_factory=list)

    @property
    def member_count(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class SprintInfo:
    """Identity of a sprint within its year."""
    sprint_number: int  # 1-6
    quarter: int  # 1-4
    year: int

    @property
    def name(self) -> str:
        return f"Sprint {self.sprint_number} Q{self.quarter} {self.year}"


@dataclass(frozen=True)
class SprintGroup:
    """Header span of a sprint over the visible date columns."""
    name: str
    start_date: Date
    end_date: Date
    date_count: int

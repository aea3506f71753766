"""
Sprint calendar: maps calendar days to fixed two-week sprints.

Sprints follow a 14-day cycle anchored to a reference sprint and are named
"Sprint {1-6} Q{1-4} {year}":
- Each sprint starts on a Monday and ends on the second Friday
- Each quarter has 6 sprints, each year 24
- After Sprint 6 Q4 the cycle resets to Sprint 1 Q1 of the next year
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

import pendulum
from pendulum import Date

from .dates import DateLike, date_key, days_between, format_date_ddmmyyyy, to_local_date
from .models import CalendarCell, SprintGroup, SprintInfo

SPRINT_DURATION_DAYS = 14
SPRINT_END_OFFSET_DAYS = 11  # Monday to the Friday of the following week
SPRINTS_PER_QUARTER = 6
QUARTERS_PER_YEAR = 4
SPRINTS_PER_YEAR = SPRINTS_PER_QUARTER * QUARTERS_PER_YEAR


@dataclass(frozen=True)
class SprintReference:
    """
    The anchor of the sprint cycle.

    ``start_date`` is the first day of Sprint ``number`` Q``quarter`` ``year``.
    ``numbering_epoch`` is the sprint start that relative sprint numbers
    count from; it has to sit on a sprint boundary.
    """
    start_date: Date = field(default_factory=lambda: pendulum.date(2025, 10, 27))
    number: int = 2
    quarter: int = 4
    year: int = 2025
    numbering_epoch: Date = field(default_factory=lambda: pendulum.date(2025, 11, 10))

    def __post_init__(self):
        object.__setattr__(self, "start_date", to_local_date(self.start_date))
        object.__setattr__(self, "numbering_epoch", to_local_date(self.numbering_epoch))

        if not 1 <= self.number <= SPRINTS_PER_QUARTER:
            raise ValueError(f"Sprint number must be between 1 and {SPRINTS_PER_QUARTER}, got {self.number}")
        if not 1 <= self.quarter <= QUARTERS_PER_YEAR:
            raise ValueError(f"Quarter must be between 1 and {QUARTERS_PER_YEAR}, got {self.quarter}")
        if days_between(self.start_date, self.numbering_epoch) % SPRINT_DURATION_DAYS != 0:
            raise ValueError(
                f"Numbering epoch {self.numbering_epoch} is not a sprint start "
                f"relative to {self.start_date}"
            )

    @property
    def absolute_index(self) -> int:
        """Zero-based index of the reference sprint within its year."""
        return (self.quarter - 1) * SPRINTS_PER_QUARTER + (self.number - 1)


class SprintCalendar:
    """
    Stateless sprint lookups for any calendar day.

    Dates before the reference resolve to earlier sprints (and years); no
    date is out of range.
    """

    def __init__(self, reference: Optional[SprintReference] = None):
        self.reference = reference or SprintReference()

    def _sprints_passed(self, value: DateLike) -> int:
        return days_between(self.reference.start_date, value) // SPRINT_DURATION_DAYS

    def sprint_index(self, value: DateLike) -> int:
        """
        Absolute sprint index, counted from Sprint 1 Q1 of the reference year.
        Negative for sprints in earlier years.
        """
        return self.reference.absolute_index + self._sprints_passed(value)

    def sprint_number(self, value: DateLike) -> int:
        """Sprint offset of a date relative to the numbering epoch."""
        return days_between(self.reference.numbering_epoch, value) // SPRINT_DURATION_DAYS

    def sprint_info(self, value: DateLike) -> SprintInfo:
        index = self.sprint_index(value)

        # floor division and modulo keep negative indexes in the right year
        year_offset = index // SPRINTS_PER_YEAR
        index_in_year = index % SPRINTS_PER_YEAR

        return SprintInfo(
            sprint_number=index_in_year % SPRINTS_PER_QUARTER + 1,
            quarter=index_in_year // SPRINTS_PER_QUARTER + 1,
            year=self.reference.year + year_offset,
        )

    def sprint_name(self, value: DateLike) -> str:
        """Sprint name, e.g. "Sprint 2 Q4 2025"."""
        return self.sprint_info(value).name

    def sprint_start_date(self, value: DateLike) -> Date:
        """Monday the sprint containing the date starts on."""
        return self.reference.start_date.add(
            days=self._sprints_passed(value) * SPRINT_DURATION_DAYS
        )

    def sprint_end_date(self, value: DateLike) -> Date:
        """Second Friday of the sprint containing the date."""
        return self.sprint_start_date(value).add(days=SPRINT_END_OFFSET_DAYS)

    def sprint_name_with_date_range(self, value: DateLike) -> str:
        """Sprint name with its range, e.g. "Sprint 2 Q4 2025 (27/10/2025 - 07/11/2025)"."""
        start = format_date_ddmmyyyy(self.sprint_start_date(value))
        end = format_date_ddmmyyyy(self.sprint_end_date(value))
        return f"{self.sprint_name(value)} ({start} - {end})"

    def group_dates_by_sprint(self, dates: Iterable[DateLike]) -> Dict[str, List[str]]:
        """
        Partition dates by sprint name.

        Strings are kept as given; date objects become YYYY-MM-DD strings.
        Sprints appear in order of their first date.
        """
        sprints: Dict[str, List[str]] = {}

        for value in dates:
            sprints.setdefault(self.sprint_name(value), []).append(date_key(value))

        return sprints

    def calculate_sprint_groups(self, cells: Sequence[CalendarCell]) -> Dict[str, SprintGroup]:
        """
        Header spans for the visible date columns.

        Maps the sprint name with date range to the sprint boundaries and the
        number of visible cells that fall in it.
        """
        counts: Dict[str, int] = {}
        bounds: Dict[str, tuple] = {}

        for cell in cells:
            name = self.sprint_name_with_date_range(cell.date)
            if name not in counts:
                counts[name] = 0
                bounds[name] = (self.sprint_start_date(cell.date), self.sprint_end_date(cell.date))
            counts[name] += 1

        return {
            name: SprintGroup(
                name=name,
                start_date=bounds[name][0],
                end_date=bounds[name][1],
                date_count=count,
            )
            for name, count in counts.items()
        }

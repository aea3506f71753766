"""
Date grid generation for the calendar header and body columns.
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .dates import DateLike, is_weekend, iter_days, to_local_date
from .models import CalendarCell, DateWindow, Holiday

# Indexed by weekday(), Monday first
DAY_NAMES: Dict[str, Tuple[str, ...]] = {
    "id": ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"),
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
}
DEFAULT_LOCALE = "id"


def day_names(locale: str = DEFAULT_LOCALE) -> Tuple[str, ...]:
    """Day-name table for a supported locale."""
    try:
        return DAY_NAMES[locale]
    except KeyError:
        raise ValueError(
            f"Unsupported locale '{locale}'. Choose one of: {', '.join(DAY_NAMES)}"
        ) from None


def get_day_name(value: DateLike, locale: str = DEFAULT_LOCALE) -> str:
    """Localized day name, e.g. "Senin" for a Monday."""
    return day_names(locale)[to_local_date(value).weekday()]


def default_window(start: DateLike) -> DateWindow:
    """
    Two-month window for a start month.

    Runs from day 1 of the start month through the last day of the month
    after it, e.g. November -> Nov 1 - Dec 31.
    """
    first = to_local_date(start).start_of("month")
    return DateWindow(start=first, end=first.add(months=1).end_of("month"))


def generate_date_range(
    start: DateLike,
    end: Optional[DateLike] = None,
    locale: str = DEFAULT_LOCALE,
) -> List[CalendarCell]:
    """
    Generate one cell per calendar day.

    Args:
        start: First day, or any day of the start month when ``end`` is omitted
        end: Last day (inclusive). Defaults to the end of the two-month window
        locale: Day-name table to use ("id" or "en")

    Returns:
        Cells in ascending date order; empty when start is after end.
        Holiday flags are left unset, see ``mark_holidays``.
    """
    if end is None:
        window = default_window(start)
    else:
        window = DateWindow.of(start, end)

    names = day_names(locale)

    return [
        CalendarCell(
            date=day,
            day_name=names[day.weekday()],
            day_number=day.day,
            is_weekend=is_weekend(day),
        )
        for day in iter_days(window.start, window.end)
    ]


def mark_holidays(
    cells: Sequence[CalendarCell],
    holidays: Iterable[Holiday],
) -> List[CalendarCell]:
    """
    Return copies of the cells with holiday flags set.

    Cells are matched to holidays by their YYYY-MM-DD string. When two
    holidays share a date the later one wins.
    """
    holiday_map = {holiday.date_string: holiday for holiday in holidays}

    if not holiday_map:
        return list(cells)

    marked: List[CalendarCell] = []
    for cell in cells:
        holiday = holiday_map.get(cell.date_string)
        if holiday is not None:
            cell = replace(
                cell,
                is_holiday=True,
                is_national_holiday=holiday.is_national,
                holiday_name=holiday.name,
            )
        marked.append(cell)

    return marked

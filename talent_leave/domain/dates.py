"""
Local calendar date helpers.

Every component works on ``pendulum.Date`` values built from the year, month
and day of the input. Strings are split on ``T`` and ``-`` instead of being
parsed as timestamps, so a value like ``2024-01-15T00:00:00.000Z`` always
stays on the 15th whatever the local timezone is.
"""

from datetime import date, datetime
from typing import Iterator, Union

import pendulum
from pendulum import Date

DateLike = Union[str, date]

WEEKEND_DAYS = (pendulum.SATURDAY, pendulum.SUNDAY)


def to_local_date(value: DateLike) -> Date:
    """
    Normalize a date string, ``date`` or ``datetime`` to a ``pendulum.Date``.

    Only the calendar part is kept; time and offset information is dropped
    without conversion.
    """
    if isinstance(value, str):
        year, month, day = value.split("T")[0].split("-")
        return pendulum.date(int(year), int(month), int(day))

    if isinstance(value, datetime):
        return pendulum.date(value.year, value.month, value.day)

    if isinstance(value, Date):
        return value

    return pendulum.date(value.year, value.month, value.day)


def iter_days(start: DateLike, end: DateLike) -> Iterator[Date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = to_local_date(start)
    last = to_local_date(end)

    while current <= last:
        yield current
        current = current.add(days=1)


def days_between(start: DateLike, end: DateLike) -> int:
    """Signed number of calendar days from start to end."""
    return to_local_date(end).toordinal() - to_local_date(start).toordinal()


def is_weekend(value: DateLike) -> bool:
    """Check if a date falls on Saturday or Sunday."""
    return to_local_date(value).day_of_week in WEEKEND_DAYS


def date_key(value: DateLike) -> str:
    """YYYY-MM-DD key used for exact-match lookups."""
    if isinstance(value, str):
        return value
    return to_local_date(value).to_date_string()


def format_date_ddmmyyyy(value: DateLike) -> str:
    """Format a date as DD/MM/YYYY."""
    return to_local_date(value).format("DD/MM/YYYY")


def format_date_range(date_from: DateLike, date_to: DateLike) -> str:
    """
    Format a leave range for display.

    Example: ``format_date_range("2024-01-15", "2024-01-20")``
    returns ``"15/01/2024 - 20/01/2024"``.
    """
    return f"{format_date_ddmmyyyy(date_from)} - {format_date_ddmmyyyy(date_to)}"


def is_date_in_leave_range(value: DateLike, date_from: DateLike, date_to: DateLike) -> bool:
    """Check if a date falls within a leave range (inclusive)."""
    return to_local_date(date_from) <= to_local_date(value) <= to_local_date(date_to)


def today() -> Date:
    """Today's local date."""
    return pendulum.today().date()

"""
Domain-specific exception hierarchy for the leave calendar application.
"""


class LeaveCalendarError(Exception):
    """Base class for all application-level errors."""


class HolidayAPIError(LeaveCalendarError):
    """Raised when holidays cannot be fetched from the holiday API."""


class LeaveDataError(LeaveCalendarError):
    """Raised when leave records cannot be loaded or parsed."""

"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .leave_calendar import (
    HolidayClientProtocol,
    LeaveCalendarService,
    LeaveCalendarView,
    LeaveSourceProtocol,
)

__all__ = [
    "HolidayClientProtocol",
    "LeaveCalendarService",
    "LeaveCalendarView",
    "LeaveSourceProtocol",
]

"""
Adapters layer - Holiday API and leave repository integrations.
"""

from .holiday_client import HolidayClient
from .leave_source import JsonLeaveSource
from .mock_clients import MockHolidayClient, MockLeaveSource

__all__ = ["HolidayClient", "JsonLeaveSource", "MockHolidayClient", "MockLeaveSource"]

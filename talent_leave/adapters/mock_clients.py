"""
Offline stand-ins for the holiday API and the leave repository.
"""

import json
from pathlib import Path
from typing import List

from ..domain.dates import DateLike, to_local_date
from ..domain.models import Holiday
from .leave_source import JsonLeaveSource
from .payloads import parse_holiday

DATA_DIR = Path(__file__).parent


class MockHolidayClient:
    """
    Serves holidays from mock_holidays.json instead of the holiday API.

    Useful for running the calendar without network access.
    """

    def __init__(self, data_file: Path = DATA_DIR / "mock_holidays.json"):
        self.data_file = data_file
        self._load_holidays()

    def _load_holidays(self):
        """Load mock holidays from the JSON file."""
        if self.data_file.exists():
            with open(self.data_file, "r", encoding="utf-8") as f:
                self.holidays = [parse_holiday(item) for item in json.load(f)]
        else:
            self.holidays = []

    def fetch_holidays(self, start_date: DateLike, end_date: DateLike) -> List[Holiday]:
        start = to_local_date(start_date)
        end = to_local_date(end_date)
        return [holiday for holiday in self.holidays if start <= holiday.date <= end]


class MockLeaveSource(JsonLeaveSource):
    """Leave source preloaded with the bundled sample roster."""

    def __init__(self, path: Path = DATA_DIR / "mock_leave_data.json"):
        super().__init__(path)

"""
Leave records loaded from a JSON export of the leave repository.
"""

import json
from pathlib import Path
from typing import List

from ..domain.exceptions import LeaveDataError
from ..domain.models import LeaveRecord
from .payloads import parse_leave_records


class JsonLeaveSource:
    """Reads talent leave records from a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def fetch_leave_records(self) -> List[LeaveRecord]:
        """
        Load and parse all leave records.

        Raises:
            FileNotFoundError: If the file doesn't exist
            LeaveDataError: If the file is not valid leave data
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Leave data file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise LeaveDataError(f"Invalid JSON in {self.path}: {exc}") from exc

        return parse_leave_records(data)

"""
Public holiday client backed by the libur.deno.dev API.
"""

import logging
from typing import Any, List

import requests

from ..domain.dates import DateLike, to_local_date
from ..domain.exceptions import HolidayAPIError
from ..domain.models import Holiday
from .payloads import parse_holiday

logger = logging.getLogger(__name__)


class HolidayClient:
    """
    Client for Indonesian public holidays.

    The API serves one calendar year per request:

        GET {api_url}?year=2026
        [{"date": "2026-01-01", "name": "Tahun Baru 2026 Masehi"}, ...]

    Every returned holiday is national.
    """

    DEFAULT_API_URL = "https://libur.deno.dev/api"

    def __init__(self, api_url: str = DEFAULT_API_URL, timeout: float = 30):
        self.api_url = api_url
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}

    def fetch_holidays(self, start_date: DateLike, end_date: DateLike) -> List[Holiday]:
        """
        Fetch holidays between two dates (inclusive).

        Raises:
            HolidayAPIError: If a request fails or returns a non-list body
        """
        start = to_local_date(start_date)
        end = to_local_date(end_date)

        holidays: List[Holiday] = []
        for year in range(start.year, end.year + 1):
            for holiday in self._fetch_year(year):
                if start <= holiday.date <= end:
                    holidays.append(holiday)

        return holidays

    def _fetch_year(self, year: int) -> List[Holiday]:
        try:
            response = requests.get(
                self.api_url,
                params={"year": year},
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise HolidayAPIError(f"Failed to fetch holidays for {year}: {e}") from e
        except ValueError as e:
            raise HolidayAPIError(f"Holiday API returned invalid JSON for {year}: {e}") from e

        if not isinstance(data, list):
            raise HolidayAPIError(f"Unexpected holiday API response for {year}: {data!r}")

        return self._parse_holidays(data)

    def _parse_holidays(self, items: List[Any]) -> List[Holiday]:
        holidays: List[Holiday] = []

        for item in items:
            try:
                holidays.append(parse_holiday(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Could not parse holiday item %r: %s", item, e)
                continue

        return holidays

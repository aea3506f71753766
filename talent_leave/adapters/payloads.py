"""
Parsing of repository payloads into domain models.

Leave payloads use the repository's camelCase shape:

    {
        "id": "t-1",
        "name": "Budi",
        "team": "Mobile",
        "role": "Engineer",
        "leaveDate": [
            {"dateFrom": "2024-01-15T00:00:00.000Z", "dateTo": "2024-01-17", "status": "Draft"}
        ]
    }
"""

from typing import Any, Dict, List

from ..domain.dates import to_local_date
from ..domain.exceptions import LeaveDataError
from ..domain.models import Holiday, LeaveDateRange, LeaveRecord, LeaveStatus


def parse_leave_range(payload: Dict[str, Any]) -> LeaveDateRange:
    """Parse one ``leaveDate`` entry."""
    try:
        return LeaveDateRange(
            date_from=to_local_date(payload["dateFrom"]),
            date_to=to_local_date(payload["dateTo"]),
            status=LeaveStatus(payload["status"]),
        )
    except KeyError as exc:
        raise LeaveDataError(f"Leave range is missing field {exc}") from exc
    except (AttributeError, TypeError, ValueError) as exc:
        raise LeaveDataError(f"Invalid leave range {payload!r}: {exc}") from exc


def _text_field(payload: Dict[str, Any], key: str) -> str:
    value = payload[key]
    if not isinstance(value, str):
        raise LeaveDataError(f"Leave record field '{key}' must be a string, got {value!r}")
    return value


def parse_leave_record(payload: Dict[str, Any]) -> LeaveRecord:
    """Parse one talent leave record."""
    if not isinstance(payload, dict):
        raise LeaveDataError(f"Leave record must be an object, got {type(payload).__name__}")

    try:
        name = _text_field(payload, "name")
        team = _text_field(payload, "team")
        role = _text_field(payload, "role") if payload.get("role") is not None else ""
        ranges = payload.get("leaveDate") or []
        if not isinstance(ranges, list):
            raise LeaveDataError(f"Leave record field 'leaveDate' must be a list, got {ranges!r}")

        return LeaveRecord(
            id=str(payload["id"]),
            name=name,
            team=team,
            role=role,
            leave_ranges=tuple(parse_leave_range(item) for item in ranges),
        )
    except KeyError as exc:
        raise LeaveDataError(f"Leave record is missing field {exc}") from exc


def parse_leave_records(payload: Any) -> List[LeaveRecord]:
    """Parse a list of talent leave records."""
    if not isinstance(payload, list):
        raise LeaveDataError("Leave data must contain a list of records at the root level.")
    return [parse_leave_record(item) for item in payload]


def parse_holiday(payload: Dict[str, Any], is_national: bool = True) -> Holiday:
    """
    Parse a holiday entry ``{"date": "YYYY-MM-DD", "name": ...}``.

    An explicit ``isNational`` field in the payload takes precedence over
    ``is_national`` and must be a JSON boolean.

    Raises:
        ValueError: If ``isNational`` is present but not a boolean
    """
    national = payload.get("isNational", is_national)
    if not isinstance(national, bool):
        raise ValueError(f"isNational must be a boolean, got {national!r}")

    return Holiday(
        date=to_local_date(payload["date"]),
        name=payload.get("name", ""),
        is_national=national,
    )

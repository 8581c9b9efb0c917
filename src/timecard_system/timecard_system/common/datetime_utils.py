from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Callable

Clock = Callable[[], datetime]

_DATE_INPUT_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")
_TIME_INPUT_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p", "%I:%M:%S %p")


def utc_now() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can inject a fake clock.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    return value.isoformat()


def parse_iso_datetime(value: Any) -> datetime:
    """Parse a stored timestamp cell; naive values are taken as UTC."""
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_date_cell(value: Any) -> str:
    """Render a date cell as YYYY-MM-DD whatever type the backend returned."""
    if value is None or value == "":
        return ""
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    text = str(value).strip()
    for fmt in _DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return text


def format_time_cell(value: Any) -> str:
    """Render a time cell as HH:MM whatever type the backend returned."""
    if value is None or value == "":
        return ""
    if isinstance(value, (datetime, time)):
        return value.strftime("%H:%M")
    text = str(value).strip()
    for fmt in _TIME_INPUT_FORMATS:
        try:
            return datetime.strptime(text.upper(), fmt).strftime("%H:%M")
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).strftime("%H:%M")
    except ValueError:
        return text


def format_timestamp_cell(value: Any) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)

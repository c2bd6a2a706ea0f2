from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..core.constants import SERVER_DATE_FORMAT, SERVER_DATETIME_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, SERVER_DATE_FORMAT).date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_server_datetime(value: datetime) -> str:
    """Encode as the server's naive timestamp (second precision, no offset)."""
    return value.strftime(SERVER_DATETIME_FORMAT)


def from_server_datetime(value) -> Optional[datetime]:
    """Decode a server timestamp; the server sends ``False`` for empty values."""
    if not value:
        return None
    return datetime.strptime(str(value)[:19], SERVER_DATETIME_FORMAT)


def start_of_day(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def end_of_day(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time(23, 59, 59))


def week_start(now: datetime) -> datetime:
    """Most recent Monday at local midnight (Sunday belongs to the week that began 6 days earlier)."""
    monday = now.date() - timedelta(days=now.weekday())
    return start_of_day(monday)


def format_duration(hours: Optional[float]) -> str:
    """Format decimal hours as ``"8h 30m"``."""
    if not hours:
        return "0h 0m"

    total_minutes = int(round(hours * 60))
    return f"{total_minutes // 60}h {total_minutes % 60}m"


def calculate_duration(start: Optional[datetime], end: Optional[datetime] = None, *, now: Optional[datetime] = None) -> str:
    """Elapsed time between two instants; an open interval runs until ``now``."""
    if not start:
        return "-"

    end = end or now or now_local()
    hours = (end - start).total_seconds() / 3600
    return format_duration(hours)

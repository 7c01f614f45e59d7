from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional, Union

from ..core.constants import DEFAULT_UTC_OFFSET_HOURS

TimeLike = Union[str, time, timedelta, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> datetime:
    """Current school-local time as a naive datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return (datetime.now(timezone.utc) + timedelta(hours=utc_offset_hours)).replace(tzinfo=None)


def minutes_since_midnight(value: TimeLike) -> Optional[int]:
    """Minutes since midnight for "HH:MM[:SS]", time or timedelta values.

    Malformed or missing values give None instead of raising.
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value.hour * 60 + value.minute

    if isinstance(value, timedelta):
        return (int(value.total_seconds()) % 86400) // 60

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            return None
        try:
            hours = int(parts[0])
            minutes = int(parts[1])
        except ValueError:
            return None
        if not (0 <= hours < 24 and 0 <= minutes < 60):
            return None
        return hours * 60 + minutes

    return None


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import is_weekend, iter_dates
from ..core.enums import LeaveType
from ..leaves.model import LeaveRecord
from .model import SchoolCalendar


def active_school_dates(
    start: date,
    end: date,
    *,
    today: date,
    events: Iterable[AttendanceEvent],
    leaves: Iterable[LeaveRecord],
    calendar: Optional[SchoolCalendar] = None,
) -> frozenset[date]:
    """Dates in [start, end] that count as school days for the whole institution.

    Weekends and dates after ``today`` never count. A configured calendar is
    authoritative; without one, a date counts when anybody has an attendance
    event on it or an off-site duty leave covering it.
    """

    candidates = [d for d in iter_dates(start, end) if not is_weekend(d) and d <= today]

    if calendar is not None:
        return frozenset(d for d in candidates if calendar.is_school_day(d))

    recorded: set[date] = {e.day for e in events}
    for leave in leaves:
        if leave.leave_type == LeaveType.OFF_SITE_DUTY:
            recorded.update(iter_dates(max(leave.start_date, start), min(leave.end_date, end)))

    return frozenset(d for d in candidates if d in recorded)

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import SchoolCalendar


class SchoolCalendarRepository(Protocol):
    def get_calendar(self, start_date: date, end_date: date) -> Optional[SchoolCalendar]:
        """Calendar for the range, or None when no calendar is configured at all."""

        raise NotImplementedError

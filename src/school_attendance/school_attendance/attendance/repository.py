from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Direction
from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def query_events(self, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        """All events of every person dated within the inclusive range."""

        raise NotImplementedError

    def add_event(self, event: AttendanceEvent) -> int:
        raise NotImplementedError

    def delete_events(
        self,
        *,
        identifier: str,
        day: date,
        direction: Optional[Direction] = None,
        keep_event_id: Optional[int] = None,
    ) -> int:
        """Delete a person's events on a date (one direction, or all when None), except ``keep_event_id``."""

        raise NotImplementedError

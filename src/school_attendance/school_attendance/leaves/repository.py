from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LeaveRecord


class LeaveRepository(Protocol):
    def query_leaves(self, start_date: date, end_date: date) -> Sequence[LeaveRecord]:
        """All leaves overlapping the inclusive range."""

        raise NotImplementedError

    def add_leave(self, record: LeaveRecord) -> int:
        raise NotImplementedError

    def delete_leave(self, leave_id: int) -> bool:
        raise NotImplementedError

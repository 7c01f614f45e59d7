from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveType


@dataclass(frozen=True)
class LeaveRecord:
    """Domain entity: a leave (perizinan) covering one day or an inclusive date range."""

    person_key: str
    start_date: date
    end_date: date
    leave_type: LeaveType
    note: Optional[str] = None
    leave_id: Optional[int] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

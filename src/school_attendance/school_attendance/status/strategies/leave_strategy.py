from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceEvent
from ...core.enums import DailyStatus, Direction
from ...leaves.model import LeaveRecord
from ...persons.model import Person
from .base import StatusDecision, StatusStrategy


class LeaveStrategy(StatusStrategy):
    """No usable scan; a leave record explains the day."""

    def decide(
        self,
        *,
        person: Person,
        event: Optional[AttendanceEvent],
        leave: Optional[LeaveRecord],
        direction: Direction,
    ) -> StatusDecision:
        if leave is None:
            return StatusDecision(status=DailyStatus.UNEXPLAINED)
        return StatusDecision(status=leave.leave_type.daily_status, note=leave.note)

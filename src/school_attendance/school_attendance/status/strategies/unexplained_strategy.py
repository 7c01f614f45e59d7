from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceEvent
from ...core.enums import DailyStatus, Direction
from ...leaves.model import LeaveRecord
from ...persons.model import Person
from .base import StatusDecision, StatusStrategy


class UnexplainedStrategy(StatusStrategy):
    """School day with neither a scan nor a leave (tanpa keterangan)."""

    def decide(
        self,
        *,
        person: Person,
        event: Optional[AttendanceEvent],
        leave: Optional[LeaveRecord],
        direction: Direction,
    ) -> StatusDecision:
        return StatusDecision(status=DailyStatus.UNEXPLAINED)

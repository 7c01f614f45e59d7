from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceEvent
from ...core.enums import DailyStatus, Direction
from ...leaves.model import LeaveRecord
from ...persons.model import Person
from .base import StatusDecision, StatusStrategy


class NotApplicableStrategy(StatusStrategy):
    """Weekend, future date or a day without school."""

    def __init__(self, reason: str):
        self._reason = reason

    def decide(
        self,
        *,
        person: Person,
        event: Optional[AttendanceEvent],
        leave: Optional[LeaveRecord],
        direction: Direction,
    ) -> StatusDecision:
        return StatusDecision(status=DailyStatus.NOT_APPLICABLE, note=self._reason)

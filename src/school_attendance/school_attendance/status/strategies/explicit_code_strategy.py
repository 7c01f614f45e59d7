from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceEvent
from ...core.enums import DailyStatus, Direction
from ...leaves.model import LeaveRecord
from ...persons.model import Person
from .base import StatusDecision, StatusStrategy

EXPLICIT_CODES = {
    "TW": DailyStatus.ON_TIME,
    "T1": DailyStatus.STAGE1_LATE,
    "T2": DailyStatus.STAGE2_LATE,
    "H": DailyStatus.PRESENT,
}

# Older imports stored excused absences directly on attendance rows.
LEGACY_ABSENCE_CODES = {
    "I": DailyStatus.OFFICIAL_LEAVE,
    "IZIN": DailyStatus.OFFICIAL_LEAVE,
    "S": DailyStatus.SICK,
    "SAKIT": DailyStatus.SICK,
}


def explicit_status(code: str) -> Optional[DailyStatus]:
    key = (code or "").strip().upper()
    return EXPLICIT_CODES.get(key) or LEGACY_ABSENCE_CODES.get(key)


class ExplicitCodeStrategy(StatusStrategy):
    """Event already carries a recap code (import or manual edit)."""

    def decide(
        self,
        *,
        person: Person,
        event: Optional[AttendanceEvent],
        leave: Optional[LeaveRecord],
        direction: Direction,
    ) -> StatusDecision:
        status = explicit_status(event.normalized_code) if event else None
        if status is None:
            return StatusDecision(status=DailyStatus.UNEXPLAINED)
        if direction == Direction.CHECK_OUT and status.counts_as_present:
            return StatusDecision(status=DailyStatus.PRESENT)
        return StatusDecision(status=status)

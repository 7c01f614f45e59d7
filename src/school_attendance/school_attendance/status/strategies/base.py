from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...attendance.model import AttendanceEvent
from ...core.enums import DailyStatus, Direction
from ...leaves.model import LeaveRecord
from ...persons.model import Person


@dataclass(frozen=True)
class StatusDecision:
    status: DailyStatus
    note: Optional[str] = None


class StatusStrategy(ABC):
    """Strategy Pattern: encapsulate how one step of the precedence decides a status."""

    @abstractmethod
    def decide(
        self,
        *,
        person: Person,
        event: Optional[AttendanceEvent],
        leave: Optional[LeaveRecord],
        direction: Direction,
    ) -> StatusDecision:
        raise NotImplementedError

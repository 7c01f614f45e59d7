from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceEvent
from ...core.enums import DailyStatus, Direction
from ...leaves.model import LeaveRecord
from ...persons.model import Person
from ...windows.classifier import WindowClassifier
from .base import StatusDecision, StatusStrategy


class TimeWindowStrategy(StatusStrategy):
    """Scanner event with a plain "present" code, classified by its time."""

    def __init__(self, classifier: WindowClassifier):
        self._classifier = classifier

    def decide(
        self,
        *,
        person: Person,
        event: Optional[AttendanceEvent],
        leave: Optional[LeaveRecord],
        direction: Direction,
    ) -> StatusDecision:
        if direction == Direction.CHECK_OUT or event is None:
            return StatusDecision(status=DailyStatus.PRESENT)

        label = self._classifier.classify(person, event.minutes)
        if label is None:
            return StatusDecision(status=DailyStatus.PRESENT, note="outside all windows")
        return StatusDecision(status=label)

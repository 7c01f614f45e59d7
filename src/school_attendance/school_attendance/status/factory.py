from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import AbstractSet, Optional

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import is_weekend
from ..core.constants import CHECK_OUT_RAW_CODES, PRESENT_RAW_CODES
from ..core.enums import Direction
from ..leaves.model import LeaveRecord
from ..windows.classifier import WindowClassifier
from .strategies.base import StatusStrategy
from .strategies.explicit_code_strategy import ExplicitCodeStrategy, explicit_status
from .strategies.leave_strategy import LeaveStrategy
from .strategies.not_applicable_strategy import NotApplicableStrategy
from .strategies.time_window_strategy import TimeWindowStrategy
from .strategies.unexplained_strategy import UnexplainedStrategy


def is_present_code(code: str, direction: Direction) -> bool:
    allowed = CHECK_OUT_RAW_CODES if direction == Direction.CHECK_OUT else PRESENT_RAW_CODES
    return (code or "").strip().lower() in allowed


def is_usable_event(event: AttendanceEvent, direction: Direction) -> bool:
    code = event.normalized_code
    return explicit_status(code) is not None or is_present_code(code, direction)


@dataclass
class StatusStrategyFactory:
    """Factory Pattern: choose the precedence step that decides a day."""

    classifier: WindowClassifier = field(default_factory=WindowClassifier)

    def for_day(
        self,
        *,
        day: date,
        today: date,
        active_dates: AbstractSet[date],
        event: Optional[AttendanceEvent],
        leave: Optional[LeaveRecord],
        direction: Direction,
    ) -> StatusStrategy:
        if day > today:
            return NotApplicableStrategy("future date")
        if is_weekend(day):
            return NotApplicableStrategy("weekend")
        if day not in active_dates:
            return NotApplicableStrategy("no school activity")

        if event is not None:
            if explicit_status(event.normalized_code) is not None:
                return ExplicitCodeStrategy()
            if is_present_code(event.normalized_code, direction):
                return TimeWindowStrategy(self.classifier)

        if leave is not None:
            return LeaveStrategy()
        return UnexplainedStrategy()

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import AbstractSet, Iterable, Optional

from ..attendance.model import AttendanceEvent
from ..core.enums import DailyStatus, Direction
from ..leaves.matching import LeaveMatcher
from ..leaves.model import LeaveRecord
from ..persons.model import Person
from .factory import StatusStrategyFactory, is_usable_event
from .strategies.base import StatusDecision


def pick_event(
    events: Iterable[AttendanceEvent], person: Person, day: date, direction: Direction
) -> Optional[AttendanceEvent]:
    """Earliest usable scan of ``person`` on ``day``; untimed scans sort last."""

    mine = [
        e
        for e in events
        if e.identifier == person.identifier and e.day == day and e.direction == direction and is_usable_event(e, direction)
    ]
    if not mine:
        return None
    return min(mine, key=lambda e: (e.minutes is None, e.minutes or 0))


@dataclass
class DailyStatusResolver:
    """Classifies one person on one date into exactly one ``DailyStatus``.

    Precedence: not-applicable day, explicit code on a scan, time-window
    classification of a plain scan, leave record, unexplained.
    """

    factory: StatusStrategyFactory = field(default_factory=StatusStrategyFactory)
    matcher: LeaveMatcher = field(default_factory=LeaveMatcher)

    def decide(
        self,
        person: Person,
        day: date,
        events_on_date: Iterable[AttendanceEvent],
        leave_on_date: Iterable[LeaveRecord],
        active_dates: AbstractSet[date],
        *,
        today: date,
        direction: Direction = Direction.CHECK_IN,
    ) -> StatusDecision:
        event = pick_event(events_on_date, person, day, direction)
        leave = self.matcher.pick(leave_on_date, person, day)
        strategy = self.factory.for_day(
            day=day,
            today=today,
            active_dates=active_dates,
            event=event,
            leave=leave,
            direction=direction,
        )
        return strategy.decide(person=person, event=event, leave=leave, direction=direction)

    def resolve(
        self,
        person: Person,
        day: date,
        events_on_date: Iterable[AttendanceEvent],
        leave_on_date: Iterable[LeaveRecord],
        active_dates: AbstractSet[date],
        *,
        today: date,
        direction: Direction = Direction.CHECK_IN,
    ) -> DailyStatus:
        return self.decide(
            person,
            day,
            events_on_date,
            leave_on_date,
            active_dates,
            today=today,
            direction=direction,
        ).status

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import AbstractSet, Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import iter_dates
from ..common.validators import require_date_range
from ..core.enums import DailyStatus, Direction, ReportMode
from ..leaves.matching import leaves_by_date
from ..leaves.model import LeaveRecord
from ..persons.model import Person
from ..school_calendar.active_days import active_school_dates
from ..status.resolver import DailyStatusResolver
from .model import AggregationResult, AttendanceSnapshot, PersonPeriodSummary

logger = logging.getLogger(__name__)

_COUNTER_FIELDS = {
    DailyStatus.ON_TIME: "on_time",
    DailyStatus.STAGE1_LATE: "stage1_late",
    DailyStatus.STAGE2_LATE: "stage2_late",
    DailyStatus.PRESENT: "present",
    DailyStatus.OFF_SITE_DUTY: "off_site_duty",
    DailyStatus.OFFICIAL_LEAVE: "official_leave",
    DailyStatus.SICK: "sick",
    DailyStatus.PAID_ABSENCE: "paid_absence",
    DailyStatus.UNEXPLAINED: "unexplained",
}


def attendance_percentage(present_days: int, active_days: int) -> float:
    if active_days <= 0:
        return 0.0
    return min(100.0, present_days / active_days * 100)


def average_check_in_minutes(events: Iterable[AttendanceEvent], identifier: str) -> Optional[float]:
    minutes = [
        e.minutes
        for e in events
        if e.identifier == identifier and e.direction == Direction.CHECK_IN and e.minutes is not None
    ]
    if not minutes:
        return None
    return sum(minutes) / len(minutes)


@dataclass
class PeriodAggregator:
    """Walks a date range and folds daily statuses into per-person summaries."""

    resolver: DailyStatusResolver = field(default_factory=DailyStatusResolver)

    def aggregate(
        self,
        persons: Sequence[Person],
        start: date,
        end: date,
        snapshot: AttendanceSnapshot,
        *,
        today: date,
        mode: ReportMode = ReportMode.ARRIVAL,
    ) -> AggregationResult:
        require_date_range(start, end)

        events = [e for e in snapshot.events if start <= e.day <= end]
        active = active_school_dates(
            start,
            end,
            today=today,
            events=events,
            leaves=snapshot.leaves,
            calendar=snapshot.calendar,
        )

        events_on: dict[date, list[AttendanceEvent]] = defaultdict(list)
        for e in events:
            events_on[e.day].append(e)
        leaves_on = leaves_by_date(snapshot.leaves, start, end)

        summaries = tuple(
            self._summarize(person, start, end, events, events_on, leaves_on, active, today=today, mode=mode)
            for person in persons
        )
        logger.debug(
            "Aggregated %d person(s) over %s..%s (%d active school day(s), mode=%s)",
            len(summaries),
            start,
            end,
            len(active),
            mode.value,
        )
        return AggregationResult(summaries=summaries, active_school_days=len(active), active_dates=active)

    def day_status(
        self,
        person: Person,
        day: date,
        events_on_date: Sequence[AttendanceEvent],
        leave_on_date: Sequence[LeaveRecord],
        active_dates: AbstractSet[date],
        *,
        today: date,
        mode: ReportMode = ReportMode.ARRIVAL,
    ) -> DailyStatus:
        """One status per person per day for the given report mode."""

        def resolve(direction: Direction) -> DailyStatus:
            return self.resolver.resolve(
                person, day, events_on_date, leave_on_date, active_dates, today=today, direction=direction
            )

        if mode == ReportMode.DEPARTURE:
            return resolve(Direction.CHECK_OUT)

        arrival = resolve(Direction.CHECK_IN)
        if mode == ReportMode.ARRIVAL or arrival.counts_as_present or arrival is DailyStatus.NOT_APPLICABLE:
            return arrival

        # Lengkap: a check-out alone still proves attendance.
        if resolve(Direction.CHECK_OUT) is DailyStatus.PRESENT:
            return DailyStatus.PRESENT
        return arrival

    def _summarize(
        self,
        person: Person,
        start: date,
        end: date,
        events: Sequence[AttendanceEvent],
        events_on: Mapping[date, Sequence[AttendanceEvent]],
        leaves_on: Mapping[date, Sequence[LeaveRecord]],
        active: AbstractSet[date],
        *,
        today: date,
        mode: ReportMode,
    ) -> PersonPeriodSummary:
        counters = {name: 0 for name in _COUNTER_FIELDS.values()}
        daily: dict[date, DailyStatus] = {}
        present_days: set[date] = set()

        for day in iter_dates(start, end):
            status = self.day_status(
                person,
                day,
                events_on.get(day, ()),
                leaves_on.get(day, ()),
                active,
                today=today,
                mode=mode,
            )
            daily[day] = status
            if status is DailyStatus.NOT_APPLICABLE:
                continue
            counters[_COUNTER_FIELDS[status]] += 1
            if status.counts_as_present:
                present_days.add(day)

        return PersonPeriodSummary(
            person=person,
            total_present_days=len(present_days),
            attendance_percentage=attendance_percentage(len(present_days), len(active)),
            average_check_in_minutes=average_check_in_minutes(events, person.identifier),
            daily_statuses=daily,
            **counters,
        )

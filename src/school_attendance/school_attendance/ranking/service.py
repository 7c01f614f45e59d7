from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, ContextManager, Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import is_weekend, now_local
from ..common.observers import ChangeNotifier, StatusChanged
from ..common.validators import require_date_range, require_non_empty
from ..core.enums import (
    DailyStatus,
    Direction,
    LeaveType,
    PersonCategory,
    ReportMode,
    ScoringMode,
)
from ..core.exceptions import PersonNotFoundError, UnknownStatusCodeError, ValidationError
from ..leaves.matching import LeaveMatcher
from ..leaves.model import LeaveRecord
from ..leaves.repository import LeaveRepository
from ..persons.model import Person
from ..persons.repository import PersonDirectory
from ..school_calendar.active_days import active_school_dates
from ..school_calendar.repository import SchoolCalendarRepository
from ..status.factory import StatusStrategyFactory
from ..status.resolver import DailyStatusResolver
from ..windows.classifier import WindowClassifier
from ..windows.repository import TimeWindowRepository
from .aggregator import PeriodAggregator
from .model import AttendanceSnapshot, RankingResult, RecapReport
from .ranker import Ranker

logger = logging.getLogger(__name__)

MANUAL_CODES = {
    DailyStatus.ON_TIME,
    DailyStatus.STAGE1_LATE,
    DailyStatus.STAGE2_LATE,
    DailyStatus.PRESENT,
    DailyStatus.OFF_SITE_DUTY,
    DailyStatus.OFFICIAL_LEAVE,
    DailyStatus.SICK,
    DailyStatus.PAID_ABSENCE,
}


def parse_manual_code(code: Optional[str]) -> Optional[DailyStatus]:
    """Recap code typed into a grid cell; None means "clear the cell"."""

    key = (code or "").strip().upper()
    if key in {"", DailyStatus.UNEXPLAINED.value}:
        return None
    try:
        status = DailyStatus(key)
    except ValueError:
        raise UnknownStatusCodeError(f"Unknown status code: {code!r}")
    if status not in MANUAL_CODES:
        raise UnknownStatusCodeError(f"Unknown status code: {code!r}")
    return status


class RankingService:
    """Single entry point for daily status lookups, recaps, rankings and manual edits.

    Every call queries the stores afresh and hands plain records to the
    resolver/aggregator, so concurrent calls never share intermediate state.
    """

    def __init__(
        self,
        persons: PersonDirectory,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        windows: TimeWindowRepository,
        calendar: SchoolCalendarRepository | None = None,
        *,
        notifier: ChangeNotifier | None = None,
        legacy_name_matching: bool = False,
        clock: Callable[[], datetime] | None = None,
        unit_of_work: Callable[[], ContextManager] | None = None,
    ):
        self._persons = persons
        self._attendance = attendance
        self._leaves = leaves
        self._windows = windows
        self._calendar = calendar
        self._notifier = notifier or ChangeNotifier()
        self._matcher = LeaveMatcher(legacy_name_matching=bool(legacy_name_matching))
        self._clock = clock or now_local
        self._unit_of_work = unit_of_work or nullcontext

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def today(self) -> date:
        return self._clock().date()

    def _snapshot(self, start: date, end: date) -> AttendanceSnapshot:
        return AttendanceSnapshot(
            events=tuple(self._attendance.query_events(start, end)),
            leaves=tuple(self._leaves.query_leaves(start, end)),
            calendar=self._calendar.get_calendar(start, end) if self._calendar else None,
        )

    def _classifier(self) -> WindowClassifier:
        return WindowClassifier(tuple(self._windows.query_rules()))

    def _aggregator(self) -> PeriodAggregator:
        resolver = DailyStatusResolver(
            factory=StatusStrategyFactory(classifier=self._classifier()),
            matcher=self._matcher,
        )
        return PeriodAggregator(resolver=resolver)

    def get_person(self, identifier: str) -> Person:
        person = self._persons.get_by_identifier(require_non_empty(identifier, "identifier"))
        if not person or not person.active:
            raise PersonNotFoundError(f"No active person with identifier {identifier!r}")
        return person

    def get_daily_status(
        self,
        person: Person,
        day: date,
        *,
        direction: Direction = Direction.CHECK_IN,
    ) -> DailyStatus:
        snapshot = self._snapshot(day, day)
        today = self.today()
        active = active_school_dates(
            day,
            day,
            today=today,
            events=snapshot.events,
            leaves=snapshot.leaves,
            calendar=snapshot.calendar,
        )
        resolver = self._aggregator().resolver
        return resolver.resolve(
            person,
            day,
            [e for e in snapshot.events if e.day == day],
            snapshot.leaves,
            active,
            today=today,
            direction=direction,
        )

    def compute_ranking(
        self,
        persons: Sequence[Person],
        start: date,
        end: date,
        scoring: ScoringMode = ScoringMode.MERIT,
        *,
        mode: ReportMode = ReportMode.ARRIVAL,
    ) -> RankingResult:
        require_date_range(start, end)
        aggregation = self._aggregator().aggregate(
            persons, start, end, self._snapshot(start, end), today=self.today(), mode=mode
        )
        entries = Ranker().rank(aggregation.summaries, scoring)
        logger.info(
            "Ranked %d person(s) for %s..%s scoring=%s mode=%s active_days=%d",
            len(entries),
            start,
            end,
            scoring.value,
            mode.value,
            aggregation.active_school_days,
        )
        return RankingResult(
            entries=tuple(entries),
            active_school_days=aggregation.active_school_days,
            start=start,
            end=end,
            scoring=scoring,
            mode=mode,
        )

    def compute_ranking_for(
        self,
        category: PersonCategory,
        start: date,
        end: date,
        scoring: ScoringMode = ScoringMode.MERIT,
        *,
        position: Optional[str] = None,
        mode: ReportMode = ReportMode.ARRIVAL,
    ) -> RankingResult:
        persons = self._persons.query_active_persons(category, position or None)
        return self.compute_ranking(persons, start, end, scoring, mode=mode)

    def build_recap(
        self,
        category: PersonCategory,
        start: date,
        end: date,
        *,
        position: Optional[str] = None,
        mode: ReportMode = ReportMode.ARRIVAL,
    ) -> RecapReport:
        require_date_range(start, end)
        persons = self._persons.query_active_persons(category, position or None)
        aggregation = self._aggregator().aggregate(
            persons, start, end, self._snapshot(start, end), today=self.today(), mode=mode
        )

        groups: dict[str, list] = {}
        for summary in aggregation.summaries:
            groups.setdefault(summary.person.position or "-", []).append(summary)

        return RecapReport(
            start=start,
            end=end,
            mode=mode,
            active_school_days=aggregation.active_school_days,
            groups={
                key: tuple(sorted(items, key=lambda s: (s.person.name.casefold(), s.person.identifier)))
                for key, items in sorted(groups.items())
            },
        )

    def set_manual_status(
        self,
        person: Person,
        day: date,
        code: Optional[str],
        *,
        direction: Direction = Direction.CHECK_IN,
    ) -> None:
        """Overwrite one recap cell.

        Leave codes (DL, I, S, C) replace the day's scans with a one-day leave;
        scan codes (TW, T1, T2, H) replace any leave covering the day with a scan;
        an empty code or TK clears both. Punctuality codes are always written as
        check-ins with a time just inside their window.

        The new record is written before the old ones are removed, and all
        writes share one unit of work, so a failed write never empties the cell.
        """

        status = parse_manual_code(code)
        today = self.today()
        if day > today:
            raise ValidationError("Cannot set a status for a future date")
        if is_weekend(day):
            raise ValidationError("Cannot set a status on a weekend")

        leave_type = LeaveType.for_status(status) if status is not None else None
        if status is not None:
            self._require_calendar_school_day(day)
            if leave_type is not None and leave_type != LeaveType.OFF_SITE_DUTY:
                self._require_school_day_without(person, day)

        with self._unit_of_work():
            if status is None:
                self._attendance.delete_events(identifier=person.identifier, day=day)
                self._remove_leave_day(person, day)
            elif leave_type is not None:
                leave_id = self._leaves.add_leave(
                    LeaveRecord(
                        person_key=person.identifier,
                        start_date=day,
                        end_date=day,
                        leave_type=leave_type,
                        note=f"Updated via recap - {leave_type.value}",
                    )
                )
                self._remove_leave_day(person, day, keep_leave_id=leave_id)
                self._attendance.delete_events(identifier=person.identifier, day=day)
            else:
                self._write_scan(person, day, status, direction)

        logger.info(
            "Manual status %s set for %s on %s",
            status.value if status else "(cleared)",
            person.identifier,
            day.isoformat(),
        )
        self._notifier.publish(
            StatusChanged(
                identifier=person.identifier,
                day=day,
                status=status or DailyStatus.UNEXPLAINED,
            )
        )

    def _write_scan(self, person: Person, day: date, status: DailyStatus, direction: Direction) -> None:
        if status.is_timed:
            direction = Direction.CHECK_IN
            latest = self._classifier().latest_time_for(person, status)
            time_of_day = latest.strftime("%H:%M") if latest else None
        else:
            time_of_day = None

        event_id = self._attendance.add_event(
            AttendanceEvent(
                identifier=person.identifier,
                day=day,
                time_of_day=time_of_day,
                direction=direction,
                raw_status_code=status.value,
                name=person.name,
            )
        )
        self._remove_leave_day(person, day)
        self._attendance.delete_events(
            identifier=person.identifier, day=day, direction=direction, keep_event_id=event_id
        )
        logger.debug("Wrote %s scan %s at %s for %s", direction.value, status.value, time_of_day, person.identifier)

    def _remove_leave_day(self, person: Person, day: date, *, keep_leave_id: Optional[int] = None) -> None:
        """Drop ``day`` from the person's leaves, splitting multi-day ranges."""

        for record in self._leaves.query_leaves(day, day):
            if record.leave_id is not None and record.leave_id == keep_leave_id:
                continue
            if not record.covers(day) or not self._matcher.matches(record, person):
                continue
            if record.start_date < day:
                self._leaves.add_leave(replace(record, end_date=day - timedelta(days=1), leave_id=None))
            if record.end_date > day:
                self._leaves.add_leave(replace(record, start_date=day + timedelta(days=1), leave_id=None))
            if record.leave_id is not None:
                self._leaves.delete_leave(record.leave_id)

    def _require_calendar_school_day(self, day: date) -> None:
        """A configured calendar closes its holidays to every code but a clear."""

        calendar = self._calendar.get_calendar(day, day) if self._calendar else None
        if calendar is not None and not calendar.is_school_day(day):
            raise ValidationError(f"{day.isoformat()} is not a school day (holiday)")

    def _require_school_day_without(self, person: Person, day: date) -> None:
        """An excused absence only reads back on a day that stays a school day."""

        snapshot = self._snapshot(day, day)
        others = AttendanceSnapshot(
            events=[e for e in snapshot.events if e.identifier != person.identifier],
            leaves=[r for r in snapshot.leaves if not self._matcher.matches(r, person)],
            calendar=snapshot.calendar,
        )
        active = active_school_dates(
            day,
            day,
            today=self.today(),
            events=others.events,
            leaves=others.leaves,
            calendar=others.calendar,
        )
        if day not in active:
            raise ValidationError(f"{day.isoformat()} is not a school day (no activity recorded)")

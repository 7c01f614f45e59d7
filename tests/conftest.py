from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceEvent
from src.school_attendance.school_attendance.common.observers import ChangeNotifier
from src.school_attendance.school_attendance.core.enums import (
    DailyStatus,
    Direction,
    PersonCategory,
    WindowScope,
)
from src.school_attendance.school_attendance.leaves.model import LeaveRecord
from src.school_attendance.school_attendance.persons.model import Person
from src.school_attendance.school_attendance.ranking.service import RankingService
from src.school_attendance.school_attendance.school_calendar.model import SchoolCalendar
from src.school_attendance.school_attendance.windows.model import TimeWindowRule


@dataclass
class InMemoryPersons:
    persons: list[Person] = field(default_factory=list)

    def query_active_persons(self, category: PersonCategory, position: Optional[str] = None):
        return [
            p
            for p in self.persons
            if p.active and p.category == category and (not position or p.position == position)
        ]

    def get_by_identifier(self, identifier: str) -> Optional[Person]:
        for p in self.persons:
            if p.identifier == identifier:
                return p
        return None


class InMemoryAttendance:
    def __init__(self):
        self.events: list[AttendanceEvent] = []
        self._id = 0

    def query_events(self, start_date: date, end_date: date):
        return [e for e in self.events if start_date <= e.day <= end_date]

    def add_event(self, event: AttendanceEvent) -> int:
        self._id += 1
        self.events.append(replace(event, event_id=self._id))
        return self._id

    def delete_events(
        self,
        *,
        identifier: str,
        day: date,
        direction: Optional[Direction] = None,
        keep_event_id: Optional[int] = None,
    ) -> int:
        keep = [
            e
            for e in self.events
            if e.event_id == keep_event_id
            or not (e.identifier == identifier and e.day == day and (direction is None or e.direction == direction))
        ]
        removed = len(self.events) - len(keep)
        self.events = keep
        return removed


class InMemoryLeaves:
    def __init__(self):
        self.records: list[LeaveRecord] = []
        self._id = 0

    def query_leaves(self, start_date: date, end_date: date):
        return [r for r in self.records if r.start_date <= end_date and r.end_date >= start_date]

    def add_leave(self, record: LeaveRecord) -> int:
        self._id += 1
        self.records.append(replace(record, leave_id=self._id))
        return self._id

    def delete_leave(self, leave_id: int) -> bool:
        before = len(self.records)
        self.records = [r for r in self.records if r.leave_id != leave_id]
        return len(self.records) < before


@dataclass
class InMemoryWindows:
    rules: list[TimeWindowRule] = field(default_factory=list)

    def query_rules(self):
        return list(self.rules)


@dataclass
class InMemoryCalendar:
    calendar: Optional[SchoolCalendar] = None

    def get_calendar(self, start_date: date, end_date: date) -> Optional[SchoolCalendar]:
        return self.calendar


@dataclass
class Stores:
    persons: InMemoryPersons
    attendance: InMemoryAttendance
    leaves: InMemoryLeaves
    windows: InMemoryWindows
    calendar: InMemoryCalendar

    def scan(self, person: Person, day: date, time_of_day, code="hadir", direction=Direction.CHECK_IN) -> None:
        self.attendance.add_event(
            AttendanceEvent(
                identifier=person.identifier,
                day=day,
                time_of_day=time_of_day,
                direction=direction,
                raw_status_code=code,
                name=person.name,
            )
        )

    def leave(self, person: Person, start: date, end: date, leave_type) -> None:
        self.leaves.add_leave(LeaveRecord(person.identifier, start, end, leave_type))


def window(label: DailyStatus, start: tuple[int, int], end: tuple[int, int], **kwargs) -> TimeWindowRule:
    scope = WindowScope.POSITION if "position_key" in kwargs else WindowScope.ROLE
    return TimeWindowRule(
        scope=scope,
        start_minutes=start[0] * 60 + start[1],
        end_minutes=end[0] * 60 + end[1],
        label=label,
        **kwargs,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Friday
    return datetime(2025, 3, 14, 10, 0, 0)


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def make_window():
    return window


@pytest.fixture
def teacher_windows() -> list[TimeWindowRule]:
    return [
        window(DailyStatus.ON_TIME, (6, 0), (7, 30), category=PersonCategory.TEACHER),
        window(DailyStatus.STAGE1_LATE, (7, 30), (8, 0), category=PersonCategory.TEACHER),
        window(DailyStatus.STAGE2_LATE, (8, 0), (12, 0), category=PersonCategory.TEACHER),
    ]


@pytest.fixture
def budi() -> Person:
    return Person(identifier="1001", name="Budi Santoso", category=PersonCategory.TEACHER, position="Matematika")


@pytest.fixture
def siti() -> Person:
    return Person(identifier="1002", name="Siti Aminah", category=PersonCategory.TEACHER, position="Olahraga")


@pytest.fixture
def agus() -> Person:
    return Person(identifier="1003", name="Agus Wibowo", category=PersonCategory.TEACHER, position="Matematika")


@pytest.fixture
def stores(budi, siti, agus, teacher_windows) -> Stores:
    return Stores(
        persons=InMemoryPersons([budi, siti, agus]),
        attendance=InMemoryAttendance(),
        leaves=InMemoryLeaves(),
        windows=InMemoryWindows(list(teacher_windows)),
        calendar=InMemoryCalendar(),
    )


@pytest.fixture
def service(stores, fixed_now) -> RankingService:
    return RankingService(
        stores.persons,
        stores.attendance,
        stores.leaves,
        stores.windows,
        stores.calendar,
        notifier=ChangeNotifier(),
        clock=lambda: fixed_now,
    )

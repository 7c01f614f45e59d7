from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..core.constants import NO_DATA_MINUTES
from ..core.enums import DailyStatus, PerformanceBand, ReportMode, ScoringMode
from ..leaves.model import LeaveRecord
from ..persons.model import Person
from ..school_calendar.model import SchoolCalendar


@dataclass(frozen=True)
class AttendanceSnapshot:
    """Records already fetched for one computation; the engine does no I/O itself."""

    events: Sequence[AttendanceEvent] = ()
    leaves: Sequence[LeaveRecord] = ()
    calendar: Optional[SchoolCalendar] = None


@dataclass(frozen=True)
class PersonPeriodSummary:
    """Per-person counters over a period. Not-applicable days are never counted."""

    person: Person
    on_time: int = 0
    stage1_late: int = 0
    stage2_late: int = 0
    present: int = 0
    off_site_duty: int = 0
    official_leave: int = 0
    sick: int = 0
    paid_absence: int = 0
    unexplained: int = 0
    total_present_days: int = 0
    attendance_percentage: float = 0.0
    average_check_in_minutes: Optional[float] = None
    daily_statuses: Mapping[date, DailyStatus] = field(default_factory=dict, compare=False, hash=False)

    @property
    def total_absences(self) -> int:
        return self.official_leave + self.sick + self.paid_absence + self.unexplained

    @property
    def counted_days(self) -> int:
        return (
            self.on_time
            + self.stage1_late
            + self.stage2_late
            + self.present
            + self.off_site_duty
            + self.total_absences
        )

    @property
    def effective_average_minutes(self) -> float:
        if self.average_check_in_minutes is None:
            return float(NO_DATA_MINUTES)
        return self.average_check_in_minutes


@dataclass(frozen=True)
class AggregationResult:
    summaries: tuple[PersonPeriodSummary, ...]
    active_school_days: int
    active_dates: frozenset[date] = frozenset()


@dataclass(frozen=True)
class RankingEntry:
    person: Person
    summary: PersonPeriodSummary
    composite_score: float
    rank: int
    tier: int
    band: PerformanceBand


@dataclass(frozen=True)
class RankingResult:
    entries: tuple[RankingEntry, ...]
    active_school_days: int
    start: date
    end: date
    scoring: ScoringMode
    mode: ReportMode = ReportMode.ARRIVAL

    def top(self, n: int = 5) -> tuple[RankingEntry, ...]:
        return self.entries[:n]


@dataclass(frozen=True)
class RecapReport:
    """Monthly recap grid grouped by position (class or subject)."""

    start: date
    end: date
    mode: ReportMode
    active_school_days: int
    groups: Mapping[str, tuple[PersonPeriodSummary, ...]]

from datetime import date

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceEvent
from src.school_attendance.school_attendance.core.enums import DailyStatus, Direction, LeaveType, ReportMode
from src.school_attendance.school_attendance.core.exceptions import InvalidDateRangeError
from src.school_attendance.school_attendance.leaves.model import LeaveRecord
from src.school_attendance.school_attendance.ranking.aggregator import (
    PeriodAggregator,
    attendance_percentage,
    average_check_in_minutes,
)
from src.school_attendance.school_attendance.ranking.model import AttendanceSnapshot
from src.school_attendance.school_attendance.school_calendar.model import SchoolCalendar
from src.school_attendance.school_attendance.status.factory import StatusStrategyFactory
from src.school_attendance.school_attendance.status.resolver import DailyStatusResolver
from src.school_attendance.school_attendance.windows.classifier import WindowClassifier

MON = date(2025, 3, 10)
WED = date(2025, 3, 12)
FRI = date(2025, 3, 14)


@pytest.fixture
def aggregator(teacher_windows) -> PeriodAggregator:
    classifier = WindowClassifier(tuple(teacher_windows))
    return PeriodAggregator(resolver=DailyStatusResolver(factory=StatusStrategyFactory(classifier=classifier)))


def _scan(person, day, time_of_day, code="hadir", direction=Direction.CHECK_IN):
    return AttendanceEvent(person.identifier, day, time_of_day, direction, raw_status_code=code)


def _by_id(result):
    return {s.person.identifier: s for s in result.summaries}


def test_single_active_day_with_one_absent_person(aggregator, budi, siti, agus, today):
    snapshot = AttendanceSnapshot(events=[_scan(budi, WED, "07:10"), _scan(siti, WED, "07:40")])

    result = aggregator.aggregate([budi, siti, agus], MON, FRI, snapshot, today=today)
    summaries = _by_id(result)

    assert result.active_school_days == 1
    assert result.active_dates == frozenset({WED})
    assert summaries[agus.identifier].unexplained == 1
    assert summaries[budi.identifier].on_time == 1
    assert summaries[budi.identifier].total_present_days == 1
    assert summaries[budi.identifier].attendance_percentage == 100.0
    assert summaries[siti.identifier].stage1_late == 1
    assert summaries[agus.identifier].daily_statuses[MON] == DailyStatus.NOT_APPLICABLE


def test_every_active_day_is_counted_exactly_once(aggregator, budi, siti, agus, today):
    snapshot = AttendanceSnapshot(
        events=[
            _scan(budi, MON, "07:10"),
            _scan(budi, WED, "07:50"),
            _scan(siti, WED, "09:00"),
            _scan(agus, FRI, "06:30"),
        ],
        leaves=[
            LeaveRecord(siti.identifier, MON, FRI, LeaveType.SICK),
            LeaveRecord(agus.identifier, date(2025, 3, 11), date(2025, 3, 11), LeaveType.OFF_SITE_DUTY),
        ],
    )

    result = aggregator.aggregate([budi, siti, agus], MON, FRI, snapshot, today=today)

    assert result.active_school_days == 4
    for summary in result.summaries:
        assert summary.counted_days == result.active_school_days
        assert summary.total_present_days <= result.active_school_days
        assert 0 <= summary.attendance_percentage <= 100

    siti_summary = _by_id(result)[siti.identifier]
    assert (siti_summary.sick, siti_summary.stage2_late) == (3, 1)
    assert _by_id(result)[agus.identifier].off_site_duty == 1


def test_percentage_and_average(aggregator, budi, siti, today):
    snapshot = AttendanceSnapshot(
        events=[_scan(budi, MON, "07:10"), _scan(budi, WED, "07:20"), _scan(siti, date(2025, 3, 11), "07:00")]
    )

    summary = _by_id(aggregator.aggregate([budi], MON, FRI, snapshot, today=today))[budi.identifier]

    assert summary.attendance_percentage == pytest.approx(200 / 3)
    assert summary.average_check_in_minutes == pytest.approx(435)


def test_configured_calendar_is_authoritative(aggregator, budi, today):
    calendar = SchoolCalendar(non_school_days=frozenset({date(2025, 3, 11)}))
    snapshot = AttendanceSnapshot(events=[_scan(budi, WED, "07:00")], calendar=calendar)

    result = aggregator.aggregate([budi], MON, FRI, snapshot, today=today)
    summary = result.summaries[0]

    assert result.active_school_days == 4
    assert summary.unexplained == 3
    assert summary.daily_statuses[date(2025, 3, 11)] == DailyStatus.NOT_APPLICABLE


def test_report_modes(aggregator, budi, siti, today):
    snapshot = AttendanceSnapshot(
        events=[
            _scan(budi, WED, "07:00"),
            _scan(siti, WED, "15:00", code="pulang", direction=Direction.CHECK_OUT),
        ]
    )

    def statuses(mode):
        result = aggregator.aggregate([budi, siti], WED, WED, snapshot, today=today, mode=mode)
        return [s.daily_statuses[WED] for s in result.summaries]

    assert statuses(ReportMode.ARRIVAL) == [DailyStatus.ON_TIME, DailyStatus.UNEXPLAINED]
    assert statuses(ReportMode.DEPARTURE) == [DailyStatus.UNEXPLAINED, DailyStatus.PRESENT]
    assert statuses(ReportMode.COMPLETE) == [DailyStatus.ON_TIME, DailyStatus.PRESENT]


def test_inverted_range_is_rejected(aggregator, budi, today):
    with pytest.raises(InvalidDateRangeError):
        aggregator.aggregate([budi], FRI, MON, AttendanceSnapshot(), today=today)


def test_future_days_are_never_active(aggregator, budi, today):
    snapshot = AttendanceSnapshot(events=[_scan(budi, date(2025, 3, 17), "07:00")])

    result = aggregator.aggregate([budi], MON, date(2025, 3, 21), snapshot, today=today)

    assert result.active_school_days == 0
    assert result.summaries[0].attendance_percentage == 0.0


def test_helpers():
    assert attendance_percentage(3, 0) == 0.0
    assert attendance_percentage(5, 4) == 100.0
    assert average_check_in_minutes([], "x") is None

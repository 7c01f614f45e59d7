from contextlib import contextmanager
from datetime import date, time

import pytest

from src.school_attendance.school_attendance.core.enums import (
    DailyStatus,
    Direction,
    LeaveType,
    PersonCategory,
    ReportMode,
    ScoringMode,
)
from src.school_attendance.school_attendance.core.exceptions import (
    InvalidDateRangeError,
    PersonNotFoundError,
    UnknownStatusCodeError,
    ValidationError,
)
from src.school_attendance.school_attendance.ranking.service import RankingService, parse_manual_code
from src.school_attendance.school_attendance.school_calendar.model import SchoolCalendar

MON = date(2025, 3, 10)
WED = date(2025, 3, 12)
FRI = date(2025, 3, 14)


def _weekdays(start_day: int, end_day: int):
    return [date(2025, 3, d) for d in range(start_day, end_day + 1) if date(2025, 3, d).weekday() < 5]


def test_checkin_in_on_time_window_counts_as_present(service, stores, budi, make_window):
    stores.windows.rules = [make_window(DailyStatus.ON_TIME, (7, 0), (7, 30), category=PersonCategory.TEACHER)]
    stores.scan(budi, WED, "07:25")

    result = service.compute_ranking([budi], WED, WED)

    assert service.get_daily_status(budi, WED) == DailyStatus.ON_TIME
    assert result.entries[0].summary.total_present_days == 1
    assert result.active_school_days == 1


def test_merit_and_inverted_rankings_are_mirrored(service, stores, budi, agus):
    days = _weekdays(3, 14)
    assert len(days) == 10
    for day in days:
        stores.scan(budi, day, "07:00")

    merit = service.compute_ranking([budi, agus], days[0], days[-1], ScoringMode.MERIT)
    inverted = service.compute_ranking([budi, agus], days[0], days[-1], ScoringMode.INVERTED_MERIT)

    assert merit.active_school_days == 10
    assert [e.person for e in merit.entries] == [budi, agus]
    assert [e.person for e in inverted.entries] == [agus, budi]
    assert inverted.entries[0].summary.unexplained == 10
    assert merit.entries[0].tier == 5


def test_compute_ranking_rejects_inverted_range(service, budi):
    with pytest.raises(InvalidDateRangeError):
        service.compute_ranking([budi], FRI, MON)


def test_compute_ranking_for_uses_roster_filter(service, stores, budi, siti, agus):
    stores.scan(siti, WED, "07:00")

    result = service.compute_ranking_for(PersonCategory.TEACHER, MON, FRI, position="Matematika")

    assert {e.person.identifier for e in result.entries} == {budi.identifier, agus.identifier}
    assert result.active_school_days == 1


def test_build_recap_groups_by_position(service, stores, budi, siti, agus):
    stores.scan(budi, WED, "07:00")

    report = service.build_recap(PersonCategory.TEACHER, MON, FRI, mode=ReportMode.COMPLETE)

    assert list(report.groups) == ["Matematika", "Olahraga"]
    assert [s.person.name for s in report.groups["Matematika"]] == ["Agus Wibowo", "Budi Santoso"]
    assert report.active_school_days == 1


def test_manual_leave_then_scan_code_round_trip(service, stores, budi, siti):
    stores.scan(siti, WED, "07:05")

    service.set_manual_status(budi, WED, "S")
    assert service.get_daily_status(budi, WED) == DailyStatus.SICK

    service.set_manual_status(budi, WED, "TW")
    assert service.get_daily_status(budi, WED) == DailyStatus.ON_TIME
    assert not [r for r in stores.leaves.records if r.person_key == budi.identifier]

    written = [e for e in stores.attendance.events if e.identifier == budi.identifier]
    assert len(written) == 1
    assert written[0].direction == Direction.CHECK_IN
    assert written[0].time_of_day == "07:29"


@pytest.mark.parametrize("code", ["TW", "T1", "T2", "H", "DL", "I", "S", "C"])
def test_every_manual_code_reads_back(service, stores, budi, siti, code):
    stores.scan(siti, WED, "07:05")

    service.set_manual_status(budi, WED, code)

    assert service.get_daily_status(budi, WED).value == code


def test_manual_code_on_configured_position_window(service, stores, siti, make_window):
    stores.windows.rules.insert(0, make_window(DailyStatus.ON_TIME, (6, 0), (6, 45), position_key="Olahraga"))

    service.set_manual_status(siti, WED, "TW")

    assert stores.attendance.events[-1].time_of_day == "06:44"
    assert service.get_daily_status(siti, WED) == DailyStatus.ON_TIME


def test_clearing_a_cell_removes_scans_and_leave(service, stores, budi, siti):
    stores.scan(siti, WED, "07:05")
    stores.scan(budi, WED, "07:05")
    stores.scan(budi, WED, "15:00", code="pulang", direction=Direction.CHECK_OUT)

    service.set_manual_status(budi, WED, "")

    assert service.get_daily_status(budi, WED) == DailyStatus.UNEXPLAINED
    assert not [e for e in stores.attendance.events if e.identifier == budi.identifier]


def test_manual_scan_splits_longer_leave(service, stores, budi):
    stores.calendar.calendar = SchoolCalendar()
    stores.leave(budi, MON, FRI, LeaveType.SICK)

    service.set_manual_status(budi, WED, "TW")

    ranges = sorted((r.start_date, r.end_date) for r in stores.leaves.records)
    assert ranges == [(MON, date(2025, 3, 11)), (date(2025, 3, 13), FRI)]
    assert service.get_daily_status(budi, date(2025, 3, 11)) == DailyStatus.SICK
    assert service.get_daily_status(budi, WED) == DailyStatus.ON_TIME


def test_excused_absence_needs_a_school_day(service, stores, budi):
    with pytest.raises(ValidationError):
        service.set_manual_status(budi, WED, "I")

    stores.calendar.calendar = SchoolCalendar()
    service.set_manual_status(budi, WED, "I")

    assert service.get_daily_status(budi, WED) == DailyStatus.OFFICIAL_LEAVE


@pytest.mark.parametrize("code", ["TW", "H", "DL", "S"])
def test_calendar_holiday_rejects_every_code(service, stores, budi, siti, code):
    stores.calendar.calendar = SchoolCalendar(non_school_days=frozenset({WED}))
    stores.scan(siti, WED, "07:05")

    with pytest.raises(ValidationError):
        service.set_manual_status(budi, WED, code)

    assert not [e for e in stores.attendance.events if e.identifier == budi.identifier]
    assert not stores.leaves.records


def test_calendar_holiday_can_still_be_cleared(service, stores, budi):
    stores.calendar.calendar = SchoolCalendar(non_school_days=frozenset({WED}))
    stores.scan(budi, WED, "07:05")

    service.set_manual_status(budi, WED, "")

    assert not stores.attendance.events
    assert service.get_daily_status(budi, WED) == DailyStatus.NOT_APPLICABLE


def test_off_site_duty_marks_the_day_active(service, budi):
    service.set_manual_status(budi, WED, "DL")

    assert service.get_daily_status(budi, WED) == DailyStatus.OFF_SITE_DUTY


@pytest.mark.parametrize("day", [date(2025, 3, 15), date(2025, 3, 17)])
def test_weekend_and_future_edits_are_rejected(service, budi, day):
    with pytest.raises(ValidationError):
        service.set_manual_status(budi, day, "H")


def test_manual_edit_publishes_change(service, stores, budi, siti):
    stores.scan(siti, WED, "07:05")
    received = []
    service.notifier.subscribe(received.append)

    service.set_manual_status(budi, WED, "C")

    assert [(c.identifier, c.day, c.status) for c in received] == [(budi.identifier, WED, DailyStatus.PAID_ABSENCE)]


def test_check_out_presence_written_manually(service, stores, budi, siti):
    stores.scan(siti, WED, "07:05")

    service.set_manual_status(budi, WED, "H", direction=Direction.CHECK_OUT)

    assert service.get_daily_status(budi, WED, direction=Direction.CHECK_OUT) == DailyStatus.PRESENT
    assert service.get_daily_status(budi, WED) == DailyStatus.UNEXPLAINED


def test_parse_manual_code():
    assert parse_manual_code(" tw ") == DailyStatus.ON_TIME
    assert parse_manual_code("TK") is None
    assert parse_manual_code(None) is None
    with pytest.raises(UnknownStatusCodeError):
        parse_manual_code("X")


def test_get_person(service, budi):
    assert service.get_person(budi.identifier) == budi
    with pytest.raises(PersonNotFoundError):
        service.get_person("nope")


def test_latest_time_default_without_rules(service, stores, budi, siti):
    stores.windows.rules = []
    stores.scan(siti, WED, "07:05")

    service.set_manual_status(budi, WED, "T1")

    assert stores.attendance.events[-1].time_of_day == time(7, 59).strftime("%H:%M")
    assert service.get_daily_status(budi, WED) == DailyStatus.STAGE1_LATE


def _broken(*args, **kwargs):
    raise RuntimeError("insert failed")


def test_failed_leave_write_keeps_previous_scan(service, stores, budi, siti, monkeypatch):
    stores.scan(siti, WED, "07:05")
    service.set_manual_status(budi, WED, "TW")
    monkeypatch.setattr(stores.leaves, "add_leave", _broken)

    with pytest.raises(RuntimeError):
        service.set_manual_status(budi, WED, "S")

    assert service.get_daily_status(budi, WED) == DailyStatus.ON_TIME


def test_failed_scan_write_keeps_previous_leave(service, stores, budi, siti, monkeypatch):
    stores.scan(siti, WED, "07:05")
    service.set_manual_status(budi, WED, "S")
    monkeypatch.setattr(stores.attendance, "add_event", _broken)

    with pytest.raises(RuntimeError):
        service.set_manual_status(budi, WED, "T1")

    assert service.get_daily_status(budi, WED) == DailyStatus.SICK


def test_manual_edit_runs_in_one_unit_of_work(stores, fixed_now, budi, siti):
    steps = []

    @contextmanager
    def unit_of_work():
        steps.append("begin")
        yield
        steps.append("commit")

    service = RankingService(
        stores.persons,
        stores.attendance,
        stores.leaves,
        stores.windows,
        stores.calendar,
        clock=lambda: fixed_now,
        unit_of_work=unit_of_work,
    )
    stores.scan(siti, WED, "07:05")
    stores.leave(budi, MON, FRI, LeaveType.SICK)

    service.set_manual_status(budi, WED, "C")

    assert steps == ["begin", "commit"]
    assert service.get_daily_status(budi, WED) == DailyStatus.PAID_ABSENCE
    assert sorted((r.start_date, r.end_date, r.leave_type) for r in stores.leaves.records) == [
        (MON, date(2025, 3, 11), LeaveType.SICK),
        (WED, WED, LeaveType.PAID_ABSENCE),
        (date(2025, 3, 13), FRI, LeaveType.SICK),
    ]

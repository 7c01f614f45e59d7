from __future__ import annotations

from enum import Enum
from typing import Optional


class PersonCategory(str, Enum):
    """Roster a person belongs to."""

    TEACHER = "guru"
    STUDENT = "siswa"

    @classmethod
    def parse(cls, value: str) -> "PersonCategory":
        v = (value or "").strip().lower()
        if v in {"guru", "teacher"}:
            return cls.TEACHER
        if v in {"siswa", "student"}:
            return cls.STUDENT
        raise ValueError(f"Unknown person category: {value!r}")


class Direction(str, Enum):
    """Which scan an attendance event records."""

    CHECK_IN = "Datang"
    CHECK_OUT = "Pulang"

    @classmethod
    def parse(cls, value: str) -> "Direction":
        v = (value or "").strip().lower()
        if v in {"datang", "check_in", "checkin", "in"}:
            return cls.CHECK_IN
        if v in {"pulang", "check_out", "checkout", "out"}:
            return cls.CHECK_OUT
        raise ValueError(f"Unknown direction: {value!r}")


class DailyStatus(str, Enum):
    """Classification of one person on one date.

    Values are the short codes shown in the monthly recap grid.
    """

    ON_TIME = "TW"
    STAGE1_LATE = "T1"
    STAGE2_LATE = "T2"
    PRESENT = "H"
    OFF_SITE_DUTY = "DL"
    OFFICIAL_LEAVE = "I"
    SICK = "S"
    PAID_ABSENCE = "C"
    UNEXPLAINED = "TK"
    NOT_APPLICABLE = ""

    @property
    def counts_as_present(self) -> bool:
        return self in _PRESENCE

    @property
    def is_timed(self) -> bool:
        return self in _TIMED


_TIMED = frozenset({DailyStatus.ON_TIME, DailyStatus.STAGE1_LATE, DailyStatus.STAGE2_LATE})
_PRESENCE = _TIMED | {DailyStatus.PRESENT, DailyStatus.OFF_SITE_DUTY}


class LeaveType(str, Enum):
    """Kinds of leave (perizinan) a record can carry."""

    OFF_SITE_DUTY = "dinas luar"
    SICK = "sakit"
    OFFICIAL_LEAVE = "izin"
    PAID_ABSENCE = "cuti"
    OTHER = "lainnya"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LeaveType":
        v = " ".join((value or "").strip().lower().split())
        for member in cls:
            if member.value == v:
                return member
        return cls.OTHER

    @property
    def daily_status(self) -> DailyStatus:
        return {
            LeaveType.OFF_SITE_DUTY: DailyStatus.OFF_SITE_DUTY,
            LeaveType.SICK: DailyStatus.SICK,
            LeaveType.OFFICIAL_LEAVE: DailyStatus.OFFICIAL_LEAVE,
            LeaveType.PAID_ABSENCE: DailyStatus.PAID_ABSENCE,
        }.get(self, DailyStatus.UNEXPLAINED)

    @classmethod
    def for_status(cls, status: DailyStatus) -> Optional["LeaveType"]:
        for member in cls:
            if member is not cls.OTHER and member.daily_status is status:
                return member
        return None


class WindowScope(str, Enum):
    ROLE = "role"
    POSITION = "jabatan"


class ScoringMode(str, Enum):
    """Polarity of the composite score."""

    MERIT = "merit"
    INVERTED_MERIT = "inverted_merit"

    @classmethod
    def parse(cls, value: str) -> "ScoringMode":
        v = (value or "").strip().lower()
        if v in {"merit", "gesit"}:
            return cls.MERIT
        if v in {"inverted", "inverted_merit", "santuy"}:
            return cls.INVERTED_MERIT
        raise ValueError(f"Unknown scoring mode: {value!r}")


class ReportMode(str, Enum):
    """Which scans drive the daily status of a report."""

    ARRIVAL = "datang"
    DEPARTURE = "pulang"
    COMPLETE = "lengkap"

    @classmethod
    def parse(cls, value: str) -> "ReportMode":
        v = (value or "").strip().lower()
        for member in cls:
            if member.value == v or member.name.lower() == v:
                return member
        raise ValueError(f"Unknown report mode: {value!r}")


class PerformanceBand(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    GREY = "grey"
    ERROR = "error"

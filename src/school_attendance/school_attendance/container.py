from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .common.datetime_utils import now_local
from .common.observers import ChangeNotifier
from .core.constants import DEFAULT_UTC_OFFSET_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .persons.mysql_person_repository import MySQLPersonDirectory
from .persons.repository import PersonDirectory
from .ranking.service import RankingService
from .school_calendar.mysql_calendar_repository import MySQLSchoolCalendarRepository
from .school_calendar.repository import SchoolCalendarRepository
from .windows.mysql_window_repository import MySQLTimeWindowRepository
from .windows.repository import TimeWindowRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    persons_repo: PersonDirectory
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    windows_repo: TimeWindowRepository
    calendar_repo: Optional[SchoolCalendarRepository]

    notifier: ChangeNotifier
    ranking_service: RankingService


def build_container(
    *,
    db_config: dict,
    utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS,
    legacy_name_matching: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    persons_repo = MySQLPersonDirectory(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    windows_repo = MySQLTimeWindowRepository(conn)
    calendar_repo = MySQLSchoolCalendarRepository(conn)

    notifier = ChangeNotifier()
    ranking_service = RankingService(
        persons_repo,
        attendance_repo,
        leaves_repo,
        windows_repo,
        calendar_repo,
        notifier=notifier,
        legacy_name_matching=legacy_name_matching,
        clock=partial(now_local, utc_offset_hours),
        unit_of_work=conn.transaction,
    )

    return Container(
        conn=conn,
        persons_repo=persons_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        windows_repo=windows_repo,
        calendar_repo=calendar_repo,
        notifier=notifier,
        ranking_service=ranking_service,
    )

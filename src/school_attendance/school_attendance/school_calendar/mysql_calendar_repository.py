from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from .model import SchoolCalendar
from .repository import SchoolCalendarRepository


class MySQLSchoolCalendarRepository(SchoolCalendarRepository):
    """Holiday list; an empty table means no calendar is configured."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_calendar(self, start_date: date, end_date: date) -> Optional[SchoolCalendar]:
        with self._conn_factory.cursor() as cur:
            cur.execute("SELECT COUNT(*) AS n FROM school_holidays")
            if not int(cur.fetchone()["n"]):
                return None
            cur.execute(
                "SELECT tanggal FROM school_holidays WHERE tanggal BETWEEN %s AND %s",
                (start_date, end_date),
            )
            return SchoolCalendar(non_school_days=frozenset(r["tanggal"] for r in cur.fetchall()))

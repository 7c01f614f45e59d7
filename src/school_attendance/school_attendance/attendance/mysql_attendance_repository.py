from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Direction
from ..database.connection import DatabaseConnection
from .model import AttendanceEvent
from .repository import AttendanceRepository


def _direction(value: Optional[str]) -> Direction:
    try:
        return Direction.parse(value or "")
    except ValueError:
        return Direction.CHECK_IN


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def query_events(self, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        with self._conn_factory.cursor() as cur:
            cur.execute(
                """
                SELECT id, identifier, nama, tanggal, jam, att, status
                FROM attendance
                WHERE tanggal BETWEEN %s AND %s
                ORDER BY tanggal, id
                """,
                (start_date, end_date),
            )
            return [
                AttendanceEvent(
                    identifier=str(r["identifier"]),
                    day=r["tanggal"],
                    time_of_day=r.get("jam"),
                    direction=_direction(r.get("att")),
                    raw_status_code=r.get("status"),
                    name=r.get("nama") or "",
                    event_id=int(r["id"]),
                )
                for r in cur.fetchall()
            ]

    def add_event(self, event: AttendanceEvent) -> int:
        jam = event.time_of_day
        if jam is not None and not isinstance(jam, str):
            jam = jam.strftime("%H:%M")
        with self._conn_factory.cursor() as cur:
            cur.execute(
                """
                INSERT INTO attendance(identifier, nama, tanggal, jam, att, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (event.identifier, event.name, event.day, jam, event.direction.value, event.raw_status_code),
            )
            return int(cur.lastrowid)

    def delete_events(
        self,
        *,
        identifier: str,
        day: date,
        direction: Optional[Direction] = None,
        keep_event_id: Optional[int] = None,
    ) -> int:
        sql = "DELETE FROM attendance WHERE identifier=%s AND tanggal=%s"
        params: list[object] = [identifier, day]
        if direction is not None:
            sql += " AND att=%s"
            params.append(direction.value)
        if keep_event_id is not None:
            sql += " AND id<>%s"
            params.append(int(keep_event_id))
        with self._conn_factory.cursor() as cur:
            cur.execute(sql, tuple(params))
            return int(cur.rowcount)

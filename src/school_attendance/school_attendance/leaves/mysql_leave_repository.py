from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import LeaveType
from ..database.connection import DatabaseConnection
from .model import LeaveRecord
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def query_leaves(self, start_date: date, end_date: date) -> Sequence[LeaveRecord]:
        with self._conn_factory.cursor() as cur:
            cur.execute(
                """
                SELECT id, identifier, tanggal_mulai, tanggal_selesai, jenis_izin, keterangan
                FROM perizinan
                WHERE tanggal_mulai <= %s AND tanggal_selesai >= %s
                ORDER BY tanggal_mulai, id
                """,
                (end_date, start_date),
            )
            return [
                LeaveRecord(
                    person_key=str(r["identifier"]),
                    start_date=r["tanggal_mulai"],
                    end_date=r["tanggal_selesai"],
                    leave_type=LeaveType.parse(r.get("jenis_izin")),
                    note=r.get("keterangan"),
                    leave_id=int(r["id"]),
                )
                for r in cur.fetchall()
            ]

    def add_leave(self, record: LeaveRecord) -> int:
        with self._conn_factory.cursor() as cur:
            cur.execute(
                """
                INSERT INTO perizinan(identifier, tanggal_mulai, tanggal_selesai, jenis_izin, keterangan)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (record.person_key, record.start_date, record.end_date, record.leave_type.value, record.note),
            )
            return int(cur.lastrowid)

    def delete_leave(self, leave_id: int) -> bool:
        with self._conn_factory.cursor() as cur:
            cur.execute("DELETE FROM perizinan WHERE id=%s", (int(leave_id),))
            return cur.rowcount > 0

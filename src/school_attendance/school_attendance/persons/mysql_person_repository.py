from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PersonCategory
from ..database.connection import DatabaseConnection
from .model import Person
from .repository import PersonDirectory

# (table, identifier column) per roster.
_TABLES = {
    PersonCategory.TEACHER: ("guru", "niy"),
    PersonCategory.STUDENT: ("siswa", "nisn"),
}


def _to_person(row: dict, category: PersonCategory, id_col: str) -> Person:
    return Person(
        identifier=str(row[id_col]).strip(),
        name=row["nama"],
        category=category,
        position=row.get("jabatan") or "",
        active=(row.get("status") or "active") == "active",
    )


class MySQLPersonDirectory(PersonDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def query_active_persons(self, category: PersonCategory, position: Optional[str] = None) -> Sequence[Person]:
        table, id_col = _TABLES[category]
        clauses = ["status='active'", f"{id_col} IS NOT NULL", f"TRIM({id_col})<>''"]
        params: list[object] = []
        if position:
            clauses.append("jabatan=%s")
            params.append(position)

        with self._conn_factory.cursor() as cur:
            cur.execute(
                f"""
                SELECT {id_col}, nama, jabatan, status
                FROM {table}
                WHERE {" AND ".join(clauses)}
                ORDER BY nama
                """,
                tuple(params),
            )
            return [_to_person(r, category, id_col) for r in cur.fetchall()]

    def get_by_identifier(self, identifier: str) -> Optional[Person]:
        with self._conn_factory.cursor() as cur:
            for category, (table, id_col) in _TABLES.items():
                cur.execute(
                    f"SELECT {id_col}, nama, jabatan, status FROM {table} WHERE {id_col}=%s",
                    (identifier,),
                )
                row = cur.fetchone()
                if row:
                    return _to_person(row, category, id_col)
        return None

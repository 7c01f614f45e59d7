from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"^\s*--.*$", re.MULTILINE)


def iter_statements(sql: str) -> Iterator[str]:
    """Split a schema file on ';' (schema files carry no ';' inside literals)."""

    for stmt in _COMMENT_RE.sub("", sql).split(";"):
        stmt = stmt.strip()
        if stmt:
            yield stmt


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> int:
    sql = Path(schema_path).read_text(encoding="utf-8")
    count = 0
    with conn_factory.cursor(dictionary=False) as cur:
        for stmt in iter_statements(sql):
            cur.execute(stmt)
            count += 1
    logger.info("Applied %d schema statement(s) from %s", count, schema_path)
    return count


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with conn_factory.cursor(dictionary=False) as cur:
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]

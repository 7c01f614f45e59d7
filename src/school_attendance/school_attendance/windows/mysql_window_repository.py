from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_since_midnight
from ..core.enums import PersonCategory, WindowScope
from ..database.connection import DatabaseConnection
from .model import TimeWindowRule, parse_window_label
from .repository import TimeWindowRepository

logger = logging.getLogger(__name__)


def row_to_rule(row: dict) -> Optional[TimeWindowRule]:
    """Map one attendance_settings row; unusable rows give None."""

    label = parse_window_label(row.get("label") or "")
    start = minutes_since_midnight(row.get("start_time"))
    end = minutes_since_midnight(row.get("end_time"))
    if label is None or start is None or end is None:
        return None

    kind = (row.get("type") or "").strip().lower()
    if kind == WindowScope.POSITION.value:
        if not row.get("jabatan"):
            return None
        return TimeWindowRule(
            scope=WindowScope.POSITION,
            start_minutes=start,
            end_minutes=end,
            label=label,
            position_key=row["jabatan"],
        )

    try:
        category = PersonCategory.parse(kind)
    except ValueError:
        return None
    return TimeWindowRule(
        scope=WindowScope.ROLE,
        start_minutes=start,
        end_minutes=end,
        label=label,
        category=category,
    )


class MySQLTimeWindowRepository(TimeWindowRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def query_rules(self) -> Sequence[TimeWindowRule]:
        with self._conn_factory.cursor() as cur:
            cur.execute(
                """
                SELECT id, type, jabatan, start_time, end_time, label
                FROM attendance_settings
                ORDER BY id
                """
            )
            rows = cur.fetchall()

        rules: list[TimeWindowRule] = []
        for r in rows:
            rule = row_to_rule(r)
            if rule is None:
                logger.warning("Skipping unusable attendance setting id=%s label=%r", r.get("id"), r.get("label"))
                continue
            rules.append(rule)
        return rules

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import iter_dates
from ..core.enums import LeaveType
from ..persons.model import Person
from .model import LeaveRecord

# Academic and honorific titles that legacy leave rows carry inconsistently.
_TITLE_RE = re.compile(r",?\s*\b(s\.?\s*pd\.?\s*i?|dr\.?|prof\.?|hj\.?|ny\.?)(?=\s|,|$)", re.IGNORECASE)

# When several leaves cover one day, the first listed type wins.
LEAVE_PRIORITY = (
    LeaveType.OFF_SITE_DUTY,
    LeaveType.SICK,
    LeaveType.OFFICIAL_LEAVE,
    LeaveType.PAID_ABSENCE,
    LeaveType.OTHER,
)


def normalize_name(name: str) -> str:
    value = " ".join((name or "").strip().lower().split())
    value = _TITLE_RE.sub("", value)
    return " ".join(value.replace(",", " ").split())


@dataclass(frozen=True)
class LeaveMatcher:
    """Decides whether a leave record belongs to a person.

    Records are keyed by the person's identifier. Matching by normalized display
    name is a migration shim for legacy rows and stays off unless enabled.
    """

    legacy_name_matching: bool = False

    def matches(self, record: LeaveRecord, person: Person) -> bool:
        if record.person_key == person.identifier:
            return True
        if self.legacy_name_matching:
            return normalize_name(record.person_key) == normalize_name(person.name)
        return False

    def pick(self, records: Iterable[LeaveRecord], person: Person, day: date) -> LeaveRecord | None:
        candidates = [r for r in records if r.covers(day) and self.matches(r, person)]
        if not candidates:
            return None
        return min(candidates, key=lambda r: LEAVE_PRIORITY.index(r.leave_type))


def leaves_by_date(records: Sequence[LeaveRecord], start: date, end: date) -> dict[date, list[LeaveRecord]]:
    """Expand leave ranges into a per-date index clipped to [start, end]."""

    index: dict[date, list[LeaveRecord]] = {}
    for record in records:
        first = max(record.start_date, start)
        last = min(record.end_date, end)
        for day in iter_dates(first, last):
            index.setdefault(day, []).append(record)
    return index

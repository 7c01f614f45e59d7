from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet


@dataclass(frozen=True)
class SchoolCalendar:
    """Explicit list of weekdays on which school is closed (holidays, exam breaks)."""

    non_school_days: FrozenSet[date] = field(default_factory=frozenset)

    def is_school_day(self, day: date) -> bool:
        return day not in self.non_school_days

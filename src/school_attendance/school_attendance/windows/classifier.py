from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Sequence

from ..core.constants import DEFAULT_WINDOW_UPPER_BOUNDS
from ..core.enums import DailyStatus, WindowScope
from ..persons.model import Person
from .model import TimeWindowRule


@dataclass(frozen=True)
class WindowClassifier:
    """Classifies a check-in minute against the configured windows of a person."""

    rules: Sequence[TimeWindowRule] = ()

    def rules_for(self, person: Person) -> list[TimeWindowRule]:
        """Position-specific rules first, then role-wide ones, each in listed order."""

        positional = [
            r
            for r in self.rules
            if r.scope == WindowScope.POSITION and person.position and r.position_key == person.position
        ]
        role_wide = [r for r in self.rules if r.scope == WindowScope.ROLE and r.category == person.category]
        return positional + role_wide

    def classify(self, person: Person, minutes: Optional[int]) -> Optional[DailyStatus]:
        if minutes is None:
            return None
        for rule in self.rules_for(person):
            if rule.contains(minutes):
                return rule.label
        return None

    def latest_time_for(self, person: Person, status: DailyStatus) -> Optional[time]:
        """Last minute still inside the window of ``status`` (manual edits use it)."""

        for rule in self.rules_for(person):
            if rule.label is status and rule.end_minutes > rule.start_minutes:
                last = rule.end_minutes - 1
                return time(hour=last // 60, minute=last % 60)

        default = DEFAULT_WINDOW_UPPER_BOUNDS.get(status.value)
        if default is None:
            return None
        last = default.hour * 60 + default.minute - 1
        return time(hour=last // 60, minute=last % 60)

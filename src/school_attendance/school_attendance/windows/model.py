from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import DailyStatus, PersonCategory, WindowScope

_LABELS = {
    "tepatwaktu": DailyStatus.ON_TIME,
    "tahap1": DailyStatus.STAGE1_LATE,
    "tahap2": DailyStatus.STAGE2_LATE,
    "pulang": DailyStatus.PRESENT,
}


def parse_window_label(text: str) -> Optional[DailyStatus]:
    """Map a stored label such as "Tepat Waktu" or "Tahap 1" to a daily status."""

    key = "".join((text or "").lower().split())
    if key in _LABELS:
        return _LABELS[key]
    try:
        status = DailyStatus(key.upper())
    except ValueError:
        return None
    return status if status.is_timed or status is DailyStatus.PRESENT else None


@dataclass(frozen=True)
class TimeWindowRule:
    """Half-open punctuality window ``[start_minutes, end_minutes)``.

    Role-wide rules apply to a whole category; position-specific rules apply to
    one position (subject or class) and are consulted first.
    """

    scope: WindowScope
    start_minutes: int
    end_minutes: int
    label: DailyStatus
    category: Optional[PersonCategory] = None
    position_key: Optional[str] = None

    def contains(self, minutes: int) -> bool:
        return self.start_minutes <= minutes < self.end_minutes

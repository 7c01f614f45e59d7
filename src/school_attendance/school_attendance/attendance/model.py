from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Union

from ..common.datetime_utils import minutes_since_midnight
from ..core.enums import Direction


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one scan (check-in or check-out) of one person.

    ``raw_status_code`` is either a recap code written by an import or a manual
    edit (``TW``, ``T1``, ...), or free text from a scanner such as ``hadir``.
    """

    identifier: str
    day: date
    time_of_day: Union[str, time, None]
    direction: Direction
    raw_status_code: Optional[str] = None
    name: str = ""
    event_id: Optional[int] = None

    @property
    def minutes(self) -> Optional[int]:
        return minutes_since_midnight(self.time_of_day)

    @property
    def normalized_code(self) -> str:
        return (self.raw_status_code or "").strip()

from __future__ import annotations

from ...core.constants import NO_DATA_MINUTES
from ...core.enums import PerformanceBand, ScoringMode
from ..model import PersonPeriodSummary
from .base import CompositeScorer


class MeritScorer(CompositeScorer):
    """Si Gesit: attendance first, then punctuality, then earliest arrival.

    score = pct*100000 + TW*10000 - T1*1000 - T2*10000 + (9999 - avg)/100
    """

    mode = ScoringMode.MERIT

    def score(self, summary: PersonPeriodSummary) -> float:
        return (
            summary.attendance_percentage * 100000
            + summary.on_time * 10000
            - summary.stage1_late * 1000
            - summary.stage2_late * 10000
            + (NO_DATA_MINUTES - summary.effective_average_minutes) / 100
        )

    def tie_break_key(self, summary: PersonPeriodSummary) -> tuple:
        return (
            -summary.attendance_percentage,
            -summary.on_time,
            summary.stage1_late,
            summary.stage2_late,
            summary.effective_average_minutes,
        )

    def band(self, summary: PersonPeriodSummary) -> PerformanceBand:
        if summary.stage2_late > 0:
            return PerformanceBand.GREY
        if summary.stage1_late > 0:
            return PerformanceBand.WARNING
        if summary.unexplained > 2 or summary.official_leave > 3 or summary.sick > 3 or summary.paid_absence > 3:
            return PerformanceBand.ERROR
        return PerformanceBand.SUCCESS

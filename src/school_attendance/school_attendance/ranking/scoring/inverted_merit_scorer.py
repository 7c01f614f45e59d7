from __future__ import annotations

from ...core.enums import PerformanceBand, ScoringMode
from ..model import PersonPeriodSummary
from .base import CompositeScorer


class InvertedMeritScorer(CompositeScorer):
    """Si Santuy: the mirror of merit, most absences and latest arrivals first.

    score = absences*100000 - TW*10000 + T1*1000 + T2*10000 + avg/10
    """

    mode = ScoringMode.INVERTED_MERIT

    def score(self, summary: PersonPeriodSummary) -> float:
        return (
            summary.total_absences * 100000
            - summary.on_time * 10000
            + summary.stage1_late * 1000
            + summary.stage2_late * 10000
            + summary.effective_average_minutes / 10
        )

    def tie_break_key(self, summary: PersonPeriodSummary) -> tuple:
        return (
            -summary.total_absences,
            summary.on_time,
            -summary.stage1_late,
            -summary.stage2_late,
            -summary.effective_average_minutes,
        )

    def band(self, summary: PersonPeriodSummary) -> PerformanceBand:
        if summary.total_absences >= 10 or summary.unexplained >= 5:
            return PerformanceBand.ERROR
        if summary.stage2_late >= 3 or summary.stage1_late >= 5:
            return PerformanceBand.WARNING
        if summary.attendance_percentage >= 80:
            return PerformanceBand.GREY
        return PerformanceBand.SUCCESS

from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import PerformanceBand, ScoringMode
from ..model import PersonPeriodSummary


class CompositeScorer(ABC):
    """Scorer interface (Strategy Pattern for ranking polarity)."""

    mode: ScoringMode

    @abstractmethod
    def score(self, summary: PersonPeriodSummary) -> float:
        raise NotImplementedError

    @abstractmethod
    def tie_break_key(self, summary: PersonPeriodSummary) -> tuple:
        """Ascending sort key consulted when scores are equal."""

        raise NotImplementedError

    @abstractmethod
    def band(self, summary: PersonPeriodSummary) -> PerformanceBand:
        raise NotImplementedError

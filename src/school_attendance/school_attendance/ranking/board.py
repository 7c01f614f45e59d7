from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..common.generation import RecomputeGuard
from ..common.observers import StatusChanged
from ..core.enums import PersonCategory, ReportMode, ScoringMode
from .model import RankingResult
from .service import RankingService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingSelection:
    category: PersonCategory
    start: date
    end: date
    scoring: ScoringMode = ScoringMode.MERIT
    mode: ReportMode = ReportMode.ARRIVAL
    position: Optional[str] = None


class LiveRanking:
    """Keeps the ranking of the current selection fresh.

    Selection changes and manual edits inside the selected period trigger a
    recomputation. Hosts that compute in the background use ``begin()`` and
    ``complete()``; a result finishing after a newer request started is dropped.
    """

    def __init__(self, service: RankingService, selection: RankingSelection):
        self._service = service
        self._selection = selection
        self._guard = RecomputeGuard()
        self._latest: Optional[RankingResult] = None
        self._unsubscribe = service.notifier.subscribe(self._on_change)

    @property
    def selection(self) -> RankingSelection:
        return self._selection

    @property
    def latest(self) -> Optional[RankingResult]:
        return self._latest

    def select(self, **changes) -> Optional[RankingResult]:
        self._selection = replace(self._selection, **changes)
        return self.refresh()

    def begin(self) -> tuple[int, RankingSelection]:
        return self._guard.begin(), self._selection

    def compute(self, selection: RankingSelection) -> RankingResult:
        return self._service.compute_ranking_for(
            selection.category,
            selection.start,
            selection.end,
            selection.scoring,
            position=selection.position,
            mode=selection.mode,
        )

    def complete(self, token: int, result: RankingResult) -> bool:
        if not self._guard.is_current(token):
            logger.debug("Dropping superseded ranking (token %d)", token)
            return False
        self._latest = result
        return True

    def refresh(self) -> Optional[RankingResult]:
        token, selection = self.begin()
        self.complete(token, self.compute(selection))
        return self._latest

    def close(self) -> None:
        self._unsubscribe()

    def _on_change(self, change: StatusChanged) -> None:
        if self._selection.start <= change.day <= self._selection.end:
            self.refresh()

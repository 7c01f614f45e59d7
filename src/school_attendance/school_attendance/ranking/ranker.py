from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import TIER_COUNT
from ..core.enums import ScoringMode
from .model import PersonPeriodSummary, RankingEntry
from .scoring.base import CompositeScorer
from .scoring.factory import scorer_for


def tier_for(rank: int) -> int:
    """Stars for the top places: 5 for first down to 1 for fifth, none after."""

    if rank > TIER_COUNT:
        return 0
    return max(1, TIER_COUNT + 1 - rank)


@dataclass
class Ranker:
    scorer: Optional[CompositeScorer] = None

    def rank(self, summaries: Iterable[PersonPeriodSummary], mode: ScoringMode) -> list[RankingEntry]:
        scorer = self.scorer if self.scorer and self.scorer.mode == mode else scorer_for(mode)
        scored = [(scorer.score(s), s) for s in summaries]

        # Name, then identifier, make the order independent of input order.
        scored.sort(
            key=lambda pair: (
                -pair[0],
                *scorer.tie_break_key(pair[1]),
                pair[1].person.name.casefold(),
                pair[1].person.name,
                pair[1].person.identifier,
            )
        )

        return [
            RankingEntry(
                person=summary.person,
                summary=summary,
                composite_score=score,
                rank=index,
                tier=tier_for(index),
                band=scorer.band(summary),
            )
            for index, (score, summary) in enumerate(scored, start=1)
        ]

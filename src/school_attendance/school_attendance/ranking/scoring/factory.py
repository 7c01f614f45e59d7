from __future__ import annotations

from ...core.enums import ScoringMode
from .base import CompositeScorer
from .inverted_merit_scorer import InvertedMeritScorer
from .merit_scorer import MeritScorer


def scorer_for(mode: ScoringMode) -> CompositeScorer:
    if mode == ScoringMode.INVERTED_MERIT:
        return InvertedMeritScorer()
    return MeritScorer()

from __future__ import annotations

import itertools


class RecomputeGuard:
    """Generation counter for overlapping recomputations.

    Every recomputation takes a token from ``begin()``; its result is only
    accepted while ``is_current(token)`` holds. Superseded results are ignored.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0

    def begin(self) -> int:
        self._latest = next(self._counter)
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

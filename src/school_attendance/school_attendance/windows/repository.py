from __future__ import annotations

from typing import Protocol, Sequence

from .model import TimeWindowRule


class TimeWindowRepository(Protocol):
    def query_rules(self) -> Sequence[TimeWindowRule]:
        raise NotImplementedError

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from ..core.enums import DailyStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusChanged:
    identifier: str
    day: date
    status: DailyStatus


Listener = Callable[[StatusChanged], None]


class ChangeNotifier:
    """Observer: views subscribe to data changes instead of global refresh hooks."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, change: StatusChanged) -> None:
        logger.debug("Publishing %s to %d listener(s)", change, len(self._listeners))
        for listener in list(self._listeners):
            listener(change)

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PersonCategory
from .model import Person


class PersonDirectory(Protocol):
    """Repository interface for the active roster.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def query_active_persons(self, category: PersonCategory, position: Optional[str] = None) -> Sequence[Person]:
        raise NotImplementedError

    def get_by_identifier(self, identifier: str) -> Optional[Person]:
        raise NotImplementedError

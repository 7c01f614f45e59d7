from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PersonCategory


@dataclass(frozen=True)
class Person:
    """Domain entity: a teacher (keyed by NIY) or a student (keyed by NISN).

    Note: The directory rejects rows without an identifier before they reach the engine.
    """

    identifier: str
    name: str
    category: PersonCategory
    position: str = ""
    active: bool = True

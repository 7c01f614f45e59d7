from __future__ import annotations

from datetime import date

from ..core.exceptions import InvalidDateRangeError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise InvalidDateRangeError(f"End date {end.isoformat()} is before start date {start.isoformat()}")

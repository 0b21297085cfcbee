from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ..core.constants import MAX_YEAR, MIN_YEAR
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_month(month: int, year: int) -> tuple[int, int]:
    try:
        month = int(month)
        year = int(year)
    except (TypeError, ValueError):
        raise ValidationError("month and year must be integers")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    return month, year


def require_enum(enum_cls: type[E], value, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")

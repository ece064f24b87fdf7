from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_non_negative(value: int | float, field_name: str) -> int | float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be zero or positive")
    return value

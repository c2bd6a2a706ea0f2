from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_id(value, message: str) -> int:
    """Accept a positive integer identifier, otherwise fail with ``message``."""
    if value is None or value is False or isinstance(value, bool):
        raise ValidationError(message)
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if ident <= 0:
        raise ValidationError(message)
    return ident

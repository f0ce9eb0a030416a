from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def looks_like_email(value: str) -> bool:
    """Only rule applied to uploaded addresses: an '@' must be present."""
    return "@" in value


def is_lower_hex(value: str) -> bool:
    return all(ch in "0123456789abcdef" for ch in value)

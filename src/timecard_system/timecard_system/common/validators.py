from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def as_text(value: object) -> str:
    """Cell/request value as a string; None becomes ""."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def normalize_yes_no(value: object, default: str = "no") -> str:
    text = as_text(value).strip().lower()
    if not text:
        return default
    if text in {"yes", "y", "true", "1", "on"}:
        return "yes"
    return "no"

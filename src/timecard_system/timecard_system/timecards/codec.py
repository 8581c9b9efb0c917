"""JSON encoding of the sequence columns (defect sets and the work log)."""

from __future__ import annotations

import json
from typing import Any, Iterable

from ..core.constants import WORK_LOG_KEYS
from ..core.exceptions import SerializationError, ValidationError


def encode_sequence(items: Iterable[Any]) -> str:
    return json.dumps(list(items), ensure_ascii=False)


def _load_list(raw: Any, what: str) -> list:
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return raw
    try:
        value = json.loads(str(raw))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Malformed {what}: {e}") from e
    if not isinstance(value, list):
        raise SerializationError(f"Malformed {what}: expected a JSON array")
    return value


def decode_string_list(raw: Any) -> list[str]:
    return [str(v) for v in _load_list(raw, "defect list") if v is not None and str(v) != ""]


def decode_work_log(raw: Any) -> list[dict]:
    rows = _load_list(raw, "work log")
    out: list[dict] = []
    for item in rows:
        if not isinstance(item, dict):
            raise SerializationError("Malformed work log: entries must be objects")
        out.append({k: "" if item.get(k) is None else str(item.get(k)) for k in WORK_LOG_KEYS})
    return out


def parse_string_set(value: Any, field_name: str) -> tuple[str, ...]:
    """Request value for a defect set: list, JSON array text or comma-separated text."""

    if value is None or value == "":
        return ()
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                items = decode_string_list(text)
            except SerializationError as e:
                raise ValidationError(f"{field_name} is not a valid list") from e
        else:
            items = [part.strip() for part in text.split(",")]
    elif isinstance(value, (list, tuple)):
        items = ["" if v is None else str(v).strip() for v in value]
    else:
        raise ValidationError(f"{field_name} must be a list")

    seen: dict[str, None] = {}
    for item in items:
        if item and item not in seen:
            seen[item] = None
    return tuple(seen)

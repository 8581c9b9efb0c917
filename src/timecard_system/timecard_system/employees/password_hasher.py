"""SHA-256 password hashing for the Employees sheet.

Clients hash passwords before they are sent, so the stored value and the value
received at login are both 64-char lowercase hex digests.

Known limitation: `looks_hashed` cannot tell a digest from a plaintext password
that happens to be 64 hex characters. Such a password is stored as typed.
"""

from __future__ import annotations

import hashlib
import re

_HEX64 = re.compile(r"[0-9a-fA-F]{64}")


def hash_password(plaintext: str) -> str:
    return hashlib.sha256(str(plaintext).encode("utf-8")).hexdigest()


def looks_hashed(value: object) -> bool:
    if not isinstance(value, str):
        return False
    return _HEX64.fullmatch(value) is not None


def canonical_hash(value: str) -> str:
    return value.lower()


def rehash_if_plaintext(value: object) -> str | None:
    """New cell value for a password cell, or None when it must stay as is."""

    if value is None or value == "":
        return None
    text = str(value)
    if looks_hashed(text):
        return canonical_hash(text) if text != text.lower() else None
    return hash_password(text)

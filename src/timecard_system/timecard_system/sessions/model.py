from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Session:
    token: str
    username: str
    role: str
    created_at: datetime
    expires_at: datetime
    row_number: int = 0

    def is_active(self, now: datetime) -> bool:
        return self.expires_at > now


@dataclass(frozen=True)
class SessionIdentity:
    """What the router needs to know about the caller."""

    username: str
    role: str

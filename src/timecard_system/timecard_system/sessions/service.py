from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from typing import Optional

from itsdangerous import BadData, URLSafeSerializer

from ..common.datetime_utils import Clock, utc_now
from ..core.constants import DEFAULT_SESSION_HOURS
from .model import Session, SessionIdentity
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionManager:
    """Issues and checks bearer tokens backed by rows of the Sessions sheet.

    Tokens are signed, URL-safe payloads (username, role, issue time, random
    nonce). A valid signature alone is never enough: the matching row must exist
    and its expiry must lie in the future.

    Expired rows are only removed by `sweep`, which runs after each new session
    is stored, so they linger until the next login. Rows whose timestamps cannot
    be read count as expired. Sweeps delete by token, so overlapping sweeps
    from concurrent logins never remove a live row.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        secret_key: str,
        ttl_hours: float = DEFAULT_SESSION_HOURS,
        clock: Clock = utc_now,
    ):
        self._sessions = sessions
        self._serializer = URLSafeSerializer(secret_key, salt="timecard-session")
        self._ttl = timedelta(hours=ttl_hours)
        self._clock = clock

    def create(self, username: str, role: str) -> str:
        now = self._clock()
        token = self._serializer.dumps(
            {
                "u": username,
                "r": role,
                "t": int(now.timestamp() * 1000),
                "n": secrets.token_urlsafe(16),
            }
        )
        self._sessions.add(
            Session(
                token=token,
                username=username,
                role=role,
                created_at=now,
                expires_at=now + self._ttl,
            )
        )
        self.sweep()
        return token

    def _lookup(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        try:
            self._serializer.loads(token)
        except BadData:
            return None
        session = self._sessions.find_by_token(token)
        if session is None or not session.is_active(self._clock()):
            return None
        return session

    def validate(self, token: Optional[str]) -> bool:
        return self._lookup(token) is not None

    def resolve(self, token: Optional[str]) -> Optional[SessionIdentity]:
        session = self._lookup(token)
        if session is None:
            return None
        return SessionIdentity(username=session.username, role=session.role)

    def sweep(self) -> int:
        now = self._clock()
        expired = [s.token for s in self._sessions.list_all() if s.expires_at < now]
        if not expired:
            return 0
        deleted = self._sessions.delete_by_tokens(expired)
        logger.info("Swept %s expired session(s)", deleted)
        return deleted

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime, to_iso
from ..common.validators import as_text
from ..core.constants import FIRST_DATA_ROW, SESSION_HEADERS, SESSIONS_SHEET
from ..core.exceptions import NotFoundError
from ..sheets.repository import SheetStore
from .model import Session
from .repository import SessionRepository

logger = logging.getLogger(__name__)

# Stand-in for timestamps that cannot be parsed; such rows count as expired.
LONG_AGO = datetime.min.replace(tzinfo=timezone.utc)


class SheetSessionRepository(SessionRepository):
    def __init__(self, store: SheetStore, sheet: str = SESSIONS_SHEET):
        self._store = store
        self._sheet = sheet

    def _rows(self) -> list[list[Any]]:
        return self._store.get_rows(self._sheet) or []

    @staticmethod
    def _to_session(row: list[Any], row_number: int) -> Optional[Session]:
        cells = list(row) + [""] * (len(SESSION_HEADERS) - len(row))
        token = as_text(cells[0])
        if not token:
            return None
        try:
            created_at = parse_iso_datetime(cells[3])
            expires_at = parse_iso_datetime(cells[4])
        except (TypeError, ValueError):
            logger.warning("Unreadable session row %s in %s; treating it as expired", row_number, SESSIONS_SHEET)
            created_at = expires_at = LONG_AGO
        return Session(
            token=token,
            username=as_text(cells[1]),
            role=as_text(cells[2]),
            created_at=created_at,
            expires_at=expires_at,
            row_number=row_number,
        )

    def add(self, session: Session) -> None:
        self._store.insert_sheet(self._sheet, SESSION_HEADERS)
        self._store.append_row(
            self._sheet,
            [
                session.token,
                session.username,
                session.role,
                to_iso(session.created_at),
                to_iso(session.expires_at),
            ],
        )

    def _row_of(self, token: str) -> Optional[int]:
        rows = self._rows()
        for idx in range(FIRST_DATA_ROW - 1, len(rows)):
            row = rows[idx]
            if row and as_text(row[0]) == token:
                return idx + 1
        return None

    def find_by_token(self, token: str) -> Optional[Session]:
        rows = self._rows()
        for idx in range(FIRST_DATA_ROW - 1, len(rows)):
            row = rows[idx]
            if row and as_text(row[0]) == token:
                return self._to_session(row, idx + 1)
        return None

    def list_all(self) -> Sequence[Session]:
        rows = self._rows()
        out: list[Session] = []
        for idx in range(FIRST_DATA_ROW - 1, len(rows)):
            s = self._to_session(rows[idx], idx + 1)
            if s:
                out.append(s)
        return out

    def delete_by_tokens(self, tokens: Sequence[str]) -> int:
        # Rows shift under concurrent deletes, so each token is located again right before its delete.
        deleted = 0
        for token in dict.fromkeys(t for t in tokens if t):
            row_number = self._row_of(token)
            if row_number is None:
                continue
            try:
                self._store.delete_row(self._sheet, row_number)
            except NotFoundError:
                continue
            deleted += 1
        return deleted

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def add(self, session: Session) -> None:
        raise NotImplementedError

    def find_by_token(self, token: str) -> Optional[Session]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Session]:
        raise NotImplementedError

    def delete_by_tokens(self, tokens: Sequence[str]) -> int:
        raise NotImplementedError

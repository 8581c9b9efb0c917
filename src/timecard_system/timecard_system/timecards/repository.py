from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import TimeCardStatus
from .model import TimeCard, TimeCardFields


class TimeCardRepository(Protocol):
    """Ledger port: one row per time card, addressed by submission id."""

    def append(self, fields: TimeCardFields) -> str:
        """Store a new Pending card and return its submission id."""

        raise NotImplementedError

    def find_by_submission_id(self, submission_id: str) -> Optional[int]:
        """Row number of the first matching card, or None."""

        raise NotImplementedError

    def get(self, submission_id: str) -> Optional[TimeCard]:
        raise NotImplementedError

    def list_all(self) -> Sequence[TimeCard]:
        raise NotImplementedError

    def overwrite(
        self,
        row_number: int,
        cells: Mapping[str, Any],
        *,
        status: Optional[TimeCardStatus] = None,
    ) -> None:
        raise NotImplementedError

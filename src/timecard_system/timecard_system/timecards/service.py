from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import TimeCardStatus
from ..core.exceptions import NotFoundError
from .archive import EmployeeSheetArchive
from .model import TimeCard, TimeCardFields
from .repository import TimeCardRepository

logger = logging.getLogger(__name__)


class TimeCardService:
    """Use cases on the ledger: submit, list, approve, update.

    approve and update share the same field overwrite; approve additionally
    sets the status to Approved. There is no way back to Pending.
    """

    def __init__(self, ledger: TimeCardRepository, archive: Optional[EmployeeSheetArchive] = None):
        self._ledger = ledger
        self._archive = archive

    def submit(self, fields: TimeCardFields) -> str:
        submission_id = self._ledger.append(fields)
        logger.info(
            "Time card %s submitted for %r (%s work log rows)",
            submission_id,
            fields.employee_name,
            len(fields.work_log_rows),
        )
        return submission_id

    def list_all(self) -> list[TimeCard]:
        return list(self._ledger.list_all())

    def _locate(self, submission_id: str) -> int:
        submission_id = require_non_empty(submission_id, "submission_id")
        row_number = self._ledger.find_by_submission_id(submission_id)
        if row_number is None:
            raise NotFoundError(f"Time card not found with submission ID: {submission_id}")
        return row_number

    def update(self, submission_id: str, fields: TimeCardFields) -> None:
        row_number = self._locate(submission_id)
        self._ledger.overwrite(row_number, fields.provided_cells())
        logger.info("Time card %s updated (%s)", submission_id, ", ".join(sorted(fields.provided)) or "no fields")

    def approve(self, submission_id: str, fields: TimeCardFields) -> None:
        row_number = self._locate(submission_id)
        self._ledger.overwrite(row_number, fields.provided_cells(), status=TimeCardStatus.APPROVED)
        logger.info("Time card %s approved", submission_id)

        if self._archive is None:
            return
        card = self._ledger.get(submission_id.strip())
        if card is None:
            return
        try:
            sheet = self._archive.write(card)
            logger.info("Time card %s archived to sheet %r", submission_id, sheet)
        except Exception:
            # The approval itself is already persisted.
            logger.exception("Archiving time card %s failed", submission_id)

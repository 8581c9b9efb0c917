from __future__ import annotations

import logging
import secrets
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import (
    Clock,
    format_date_cell,
    format_time_cell,
    format_timestamp_cell,
    to_iso,
    utc_now,
)
from ..common.validators import as_text
from ..core.constants import FIRST_DATA_ROW, HEADER_ROW, LEDGER_COLUMNS, LEDGER_HEADERS, LEDGER_KEYS, LEDGER_SHEET
from ..core.enums import TimeCardStatus
from ..core.exceptions import NotFoundError, SerializationError
from ..sheets.repository import SheetStore
from .codec import decode_string_list, decode_work_log
from .model import TimeCard, TimeCardFields
from .repository import TimeCardRepository

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = {key: idx + 1 for idx, key in enumerate(LEDGER_KEYS)}
KEY_BY_HEADER = {header.lower(): key for key, header in LEDGER_COLUMNS}
IMMUTABLE_KEYS = {"submission_id", "timestamp", "status"}


def header_columns(header: Sequence[Any]) -> dict[str, int]:
    """Ledger key -> 1-based column, by header name. The first occurrence wins."""
    columns: dict[str, int] = {}
    for idx, cell in enumerate(header):
        key = KEY_BY_HEADER.get(as_text(cell).strip().lower())
        if key and key not in columns:
            columns[key] = idx + 1
    return columns


class SheetTimeCardRepository(TimeCardRepository):
    """The Master sheet as an append + overwrite ledger.

    Columns are located by their header name, so sheets written with an older
    layout keep working; fields without a header read back empty. A sheet with
    no recognisable header is read in the default column order.

    Lookups are linear scans from the first data row. Rows whose submission id
    cell is blank are skipped.
    """

    def __init__(self, store: SheetStore, sheet: str = LEDGER_SHEET, *, clock: Clock = utc_now):
        self._store = store
        self._sheet = sheet
        self._clock = clock

    def _rows(self) -> list[list[Any]]:
        return self._store.get_rows(self._sheet) or []

    @staticmethod
    def _columns(rows: list[list[Any]]) -> dict[str, int]:
        return header_columns(rows[0] if rows else []) or dict(DEFAULT_COLUMNS)

    def ensure_sheet(self) -> dict[str, int]:
        """Create the ledger, or append the headers an older sheet lacks.

        Returns the column of every ledger key.
        """
        rows = self._store.get_rows(self._sheet)
        if rows is None:
            self._store.insert_sheet(self._sheet, LEDGER_HEADERS)
            logger.info("Created ledger sheet %s", self._sheet)
            return dict(DEFAULT_COLUMNS)

        header = list(rows[0]) if rows else []
        columns = header_columns(header)
        next_col = len(header) + 1
        added = []
        for key, title in LEDGER_COLUMNS:
            if key in columns:
                continue
            self._store.write_cell(self._sheet, HEADER_ROW, next_col, title)
            columns[key] = next_col
            next_col += 1
            added.append(title)
        if added:
            logger.info("Added ledger columns to %s: %s", self._sheet, ", ".join(added))
        return columns

    def _new_submission_id(self, rows: list[list[Any]], id_col: int) -> str:
        taken = {as_text(r[id_col - 1]).strip() for r in rows[FIRST_DATA_ROW - 1:] if len(r) >= id_col}
        while True:
            millis = int(self._clock().timestamp() * 1000)
            candidate = f"TC-{millis}{secrets.randbelow(10**6):06d}"
            if candidate not in taken:
                return candidate

    def append(self, fields: TimeCardFields) -> str:
        columns = self.ensure_sheet()
        submission_id = self._new_submission_id(self._rows(), columns["submission_id"])

        cells = fields.to_cells()
        cells["submission_id"] = submission_id
        cells["timestamp"] = to_iso(self._clock())
        cells["status"] = TimeCardStatus.PENDING.value

        values: list[Any] = [""] * max(columns.values())
        for key, value in cells.items():
            values[columns[key] - 1] = value
        self._store.append_row(self._sheet, values)
        return submission_id

    def _scan(self, submission_id: str):
        rows = self._rows()
        columns = self._columns(rows)
        id_col = columns.get("submission_id")
        if id_col is None:
            return
        for idx in range(FIRST_DATA_ROW - 1, len(rows)):
            row = rows[idx]
            if len(row) >= id_col and as_text(row[id_col - 1]).strip() == submission_id:
                yield idx + 1, row, columns

    def find_by_submission_id(self, submission_id: str) -> Optional[int]:
        for row_number, _, _ in self._scan(submission_id):
            return row_number
        return None

    def get(self, submission_id: str) -> Optional[TimeCard]:
        for row_number, row, columns in self._scan(submission_id):
            return self._to_timecard(row, row_number, columns)
        return None

    def list_all(self) -> Sequence[TimeCard]:
        rows = self._rows()
        columns = self._columns(rows)
        out: list[TimeCard] = []
        for idx in range(FIRST_DATA_ROW - 1, len(rows)):
            card = self._to_timecard(rows[idx], idx + 1, columns)
            if card.submission_id:
                out.append(card)
        return out

    def overwrite(
        self,
        row_number: int,
        cells: Mapping[str, Any],
        *,
        status: Optional[TimeCardStatus] = None,
    ) -> None:
        if row_number < FIRST_DATA_ROW:
            raise NotFoundError(f"Ledger row {row_number} not found")
        columns = self.ensure_sheet()
        for key, value in cells.items():
            if key in IMMUTABLE_KEYS or key not in columns:
                continue
            self._store.write_cell(self._sheet, row_number, columns[key], value)
        if status is not None:
            self._store.write_cell(self._sheet, row_number, columns["status"], status.value)

    def _decode(self, decoder, raw: Any, *, key: str, row_number: int) -> list:
        try:
            return decoder(raw)
        except SerializationError as e:
            logger.warning("Ledger row %s: %s; using empty %s", row_number, e, key)
            return []

    def _to_timecard(self, row: list[Any], row_number: int, columns: Mapping[str, int]) -> TimeCard:
        def v(key: str) -> Any:
            col = columns.get(key)
            if col is None or col > len(row):
                return ""
            return row[col - 1]

        return TimeCard(
            row_number=row_number,
            submission_id=as_text(v("submission_id")).strip(),
            timestamp=format_timestamp_cell(v("timestamp")),
            employee_name=as_text(v("employee_name")),
            date=format_date_cell(v("date")),
            day_of_week=as_text(v("day_of_week")),
            time_in=format_time_cell(v("time_in")),
            time_out=format_time_cell(v("time_out")),
            equipment_num=as_text(v("equipment_num")),
            beg_miles=as_text(v("beg_miles")),
            end_miles=as_text(v("end_miles")),
            regional_beg_miles=as_text(v("regional_beg_miles")),
            regional_end_miles=as_text(v("regional_end_miles")),
            total_miles=as_text(v("total_miles")),
            fuel_gallons=as_text(v("fuel_gallons")),
            truck_defects=tuple(
                self._decode(decode_string_list, v("truck_defects"), key="truck_defects", row_number=row_number)
            ),
            trailer_defects=tuple(
                self._decode(decode_string_list, v("trailer_defects"), key="trailer_defects", row_number=row_number)
            ),
            defect_remarks=as_text(v("defect_remarks")),
            injured=as_text(v("injured")) or "no",
            injury_details=as_text(v("injury_details")),
            signature=as_text(v("signature")),
            work_log_rows=tuple(
                self._decode(decode_work_log, v("work_log_json"), key="work_log_rows", row_number=row_number)
            ),
            status=as_text(v("status")) or TimeCardStatus.PENDING.value,
            manager_notes=as_text(v("manager_notes")),
            invoice_num=as_text(v("invoice_num")),
        )

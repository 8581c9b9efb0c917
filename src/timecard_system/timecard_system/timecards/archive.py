from __future__ import annotations

from typing import Any

from ..common.datetime_utils import Clock, to_iso, utc_now
from ..core.constants import ARCHIVE_TITLE, EMPLOYEES_SHEET, LEDGER_SHEET, SESSIONS_SHEET, WORK_LOG_KEYS
from ..sheets.repository import SheetStore
from .model import TimeCard

RESERVED_SHEETS = {EMPLOYEES_SHEET, SESSIONS_SHEET, LEDGER_SHEET}

WORK_LOG_HEADER = [
    "",
    "FROM/LOAD TIME",
    "TO/DEL. TIME",
    "TRUCK/EQUIP. #",
    "# OF LOADS",
    "UNIT OF MEAS.",
    "MATERIAL TYPE",
    "SOURCE/SUPPLIER",
    "JOB NAME/DESCRIPTION",
    "JOB #/PHASE #",
    "JOB HOURS",
]


class EmployeeSheetArchive:
    """Copies approved cards, in a printable label/value layout, to a sheet per employee."""

    def __init__(self, store: SheetStore, *, clock: Clock = utc_now):
        self._store = store
        self._clock = clock

    def build_rows(self, card: TimeCard) -> list[list[Any]]:
        rows: list[list[Any]] = [
            [""],
            [ARCHIVE_TITLE],
            ["SUBMISSION ID:", card.submission_id],
            ["SUBMISSION TIMESTAMP:", card.timestamp],
            ["APPROVED BY MANAGER:", to_iso(self._clock())],
        ]
        if card.manager_notes:
            rows.append(["MANAGER NOTES:", card.manager_notes])
        if card.invoice_num:
            rows.append(["INVOICE #:", card.invoice_num])
        rows += [
            ["EMPLOYEE NAME:", card.employee_name],
            ["DATE:", card.date],
            ["DAY OF WEEK:", card.day_of_week],
            ["TIME IN:", card.time_in],
            ["TIME OUT:", card.time_out],
            [""],
            list(WORK_LOG_HEADER),
        ]
        for i, entry in enumerate(card.work_log_rows, start=1):
            rows.append([i] + [entry.get(key, "") for key in WORK_LOG_KEYS])
        rows += [
            [""],
            ["TRUCK/TRACTOR INFO:"],
            ["EQUIPMENT #:", card.equipment_num],
            ["BEG-MILES/HRS:", card.beg_miles],
            ["END-MILES/HRS:", card.end_miles],
            ["REGIONAL BEG-MILES:", card.regional_beg_miles],
            ["REGIONAL END-MILES:", card.regional_end_miles],
            ["TOTAL MILES:", card.total_miles],
            ["FUEL GALLONS:", card.fuel_gallons],
            ["TRUCK DEFECTS:", ", ".join(card.truck_defects)],
            ["TRAILER DEFECTS:", ", ".join(card.trailer_defects)],
        ]
        if card.defect_remarks:
            rows.append(["DEFECT REMARKS:", card.defect_remarks])
        rows += [
            [""],
            ["WERE YOU INJURED ON THE JOB TODAY?", card.injured],
        ]
        if card.injury_details:
            rows.append(["INJURY DETAILS:", card.injury_details])
        rows += [
            [""],
            ["EMPLOYEE SIGNATURE:", card.signature],
            ["END OF TIME CARD"],
        ]
        return rows

    def write(self, card: TimeCard) -> str:
        sheet = card.employee_name.strip() or "Unknown Employee"
        if sheet in RESERVED_SHEETS:
            sheet = f"{sheet} (Archive)"
        self._store.insert_sheet(sheet)
        for row in self.build_rows(card):
            self._store.append_row(sheet, row)
        return sheet

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import as_text
from ..core.constants import EMPLOYEE_HEADERS, EMPLOYEES_SHEET, FIRST_DATA_ROW
from ..core.exceptions import NotFoundError
from ..sheets.repository import SheetStore
from .model import Employee
from .repository import EmployeeRepository

NAME_COL = 1
PASSWORD_COL = 2
ROLE_COL = 3


class SheetEmployeeRepository(EmployeeRepository):
    def __init__(self, store: SheetStore, sheet: str = EMPLOYEES_SHEET):
        self._store = store
        self._sheet = sheet

    @property
    def sheet_name(self) -> str:
        return self._sheet

    def ensure_sheet(self) -> None:
        self._store.insert_sheet(self._sheet, EMPLOYEE_HEADERS)

    def _rows(self) -> list[list[Any]]:
        rows = self._store.get_rows(self._sheet)
        if rows is None:
            raise NotFoundError(
                f'{self._sheet} sheet not found. Please create a sheet named "{self._sheet}" '
                "with columns: Name, Password, Role"
            )
        return rows

    @staticmethod
    def _to_employee(row: list[Any], row_number: int) -> Optional[Employee]:
        cells = list(row) + [""] * (ROLE_COL - len(row))
        name = as_text(cells[NAME_COL - 1]).strip()
        if not name:
            return None
        return Employee(
            name=name,
            password_hash=as_text(cells[PASSWORD_COL - 1]).strip(),
            role=as_text(cells[ROLE_COL - 1]).strip(),
            row_number=row_number,
        )

    def get_by_name(self, name: str) -> Optional[Employee]:
        rows = self._rows()
        for idx in range(FIRST_DATA_ROW - 1, len(rows)):
            emp = self._to_employee(rows[idx], idx + 1)
            if emp and emp.name == name:
                return emp
        return None

    def list_all(self) -> Sequence[Employee]:
        rows = self._rows()
        out: list[Employee] = []
        for idx in range(FIRST_DATA_ROW - 1, len(rows)):
            emp = self._to_employee(rows[idx], idx + 1)
            if emp:
                out.append(emp)
        return out

    def add(self, *, name: str, password_hash: str, role: str) -> None:
        self._store.append_row(self._sheet, [name, password_hash, role])

    def get_password_cell(self, row_number: int) -> Any:
        rows = self._rows()
        if row_number < FIRST_DATA_ROW or row_number > len(rows):
            raise NotFoundError(f"Employee row {row_number} not found")
        row = rows[row_number - 1]
        return row[PASSWORD_COL - 1] if len(row) >= PASSWORD_COL else ""

    def set_password_cell(self, row_number: int, value: str) -> None:
        self._store.write_cell(self._sheet, row_number, PASSWORD_COL, value)

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.exceptions import NotFoundError
from .repository import SheetStore


class InMemorySheetStore(SheetStore):
    """Process-local grid. Used by tests and by STORAGE_BACKEND=memory."""

    def __init__(self, sheets: Optional[dict[str, list[list[Any]]]] = None):
        self._sheets: dict[str, list[list[Any]]] = {}
        for name, rows in (sheets or {}).items():
            self._sheets[name] = [list(r) for r in rows]

    def _sheet(self, sheet: str) -> list[list[Any]]:
        rows = self._sheets.get(sheet)
        if rows is None:
            raise NotFoundError(f"Sheet not found: {sheet}")
        return rows

    def get_rows(self, sheet: str) -> Optional[list[list[Any]]]:
        rows = self._sheets.get(sheet)
        if rows is None:
            return None
        return [list(r) for r in rows]

    def append_row(self, sheet: str, values: Sequence[Any]) -> None:
        self._sheet(sheet).append(list(values))

    def write_cell(self, sheet: str, row: int, col: int, value: Any) -> None:
        rows = self._sheet(sheet)
        if row < 1 or col < 1:
            raise ValueError("row and col are 1-based")
        while len(rows) < row:
            rows.append([])
        cells = rows[row - 1]
        while len(cells) < col:
            cells.append("")
        cells[col - 1] = value

    def insert_sheet(self, sheet: str, headers: Optional[Sequence[str]] = None) -> None:
        if sheet in self._sheets:
            return
        self._sheets[sheet] = [list(headers)] if headers else []

    def delete_row(self, sheet: str, row: int) -> None:
        rows = self._sheet(sheet)
        if row < 1 or row > len(rows):
            raise NotFoundError(f"Row {row} not found in sheet {sheet}")
        del rows[row - 1]

    def sheet_names(self) -> list[str]:
        return list(self._sheets)

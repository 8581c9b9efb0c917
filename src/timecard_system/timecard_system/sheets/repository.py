from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence


class SheetStore(Protocol):
    """Spreadsheet-like storage port.

    Rows and columns are 1-based and row 1 of a sheet is its header. The ledger,
    credential and session repositories are built only on these five primitives.
    """

    def get_rows(self, sheet: str) -> Optional[list[list[Any]]]:
        """All rows of the sheet, or None if the sheet does not exist."""

        raise NotImplementedError

    def append_row(self, sheet: str, values: Sequence[Any]) -> None:
        raise NotImplementedError

    def write_cell(self, sheet: str, row: int, col: int, value: Any) -> None:
        raise NotImplementedError

    def insert_sheet(self, sheet: str, headers: Optional[Sequence[str]] = None) -> None:
        raise NotImplementedError

    def delete_row(self, sheet: str, row: int) -> None:
        raise NotImplementedError

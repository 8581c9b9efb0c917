from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_cells, fetchall, fetchone, load_cells
from .repository import SheetStore


class MySQLSheetStore(SheetStore):
    """Spreadsheet grid persisted in MySQL, one JSON array of cells per row."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _require_sheet(cur, sheet: str) -> None:
        cur.execute("SELECT sheet_name FROM sheets WHERE sheet_name=%s", (sheet,))
        if not fetchone(cur):
            raise NotFoundError(f"Sheet not found: {sheet}")

    def get_rows(self, sheet: str) -> Optional[list[list[Any]]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT sheet_name FROM sheets WHERE sheet_name=%s", (sheet,))
            if not fetchone(cur):
                return None
            cur.execute(
                """
                SELECT row_num, cells
                FROM sheet_rows
                WHERE sheet_name=%s
                ORDER BY row_num
                """,
                (sheet,),
            )
            return [load_cells(r["cells"]) for r in fetchall(cur)]

    def append_row(self, sheet: str, values: Sequence[Any]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._require_sheet(cur, sheet)
            cur.execute(
                "SELECT COALESCE(MAX(row_num), 0) AS last_row FROM sheet_rows WHERE sheet_name=%s FOR UPDATE",
                (sheet,),
            )
            last_row = int(fetchone(cur)["last_row"])
            cur.execute(
                "INSERT INTO sheet_rows(sheet_name, row_num, cells) VALUES(%s,%s,%s)",
                (sheet, last_row + 1, dump_cells(list(values))),
            )

    def write_cell(self, sheet: str, row: int, col: int, value: Any) -> None:
        if row < 1 or col < 1:
            raise ValueError("row and col are 1-based")
        with db_cursor(self._conn_factory) as (_, cur):
            self._require_sheet(cur, sheet)
            cur.execute(
                "SELECT cells FROM sheet_rows WHERE sheet_name=%s AND row_num=%s FOR UPDATE",
                (sheet, int(row)),
            )
            existing = fetchone(cur)
            cells = load_cells(existing["cells"]) if existing else []
            while len(cells) < col:
                cells.append("")
            cells[col - 1] = value

            if existing:
                cur.execute(
                    "UPDATE sheet_rows SET cells=%s WHERE sheet_name=%s AND row_num=%s",
                    (dump_cells(cells), sheet, int(row)),
                )
                return

            # Writing past the last row: fill the gap with empty rows first.
            cur.execute(
                "SELECT COALESCE(MAX(row_num), 0) AS last_row FROM sheet_rows WHERE sheet_name=%s",
                (sheet,),
            )
            last_row = int(fetchone(cur)["last_row"])
            for gap in range(last_row + 1, int(row)):
                cur.execute(
                    "INSERT INTO sheet_rows(sheet_name, row_num, cells) VALUES(%s,%s,%s)",
                    (sheet, gap, dump_cells([])),
                )
            cur.execute(
                "INSERT INTO sheet_rows(sheet_name, row_num, cells) VALUES(%s,%s,%s)",
                (sheet, int(row), dump_cells(cells)),
            )

    def insert_sheet(self, sheet: str, headers: Optional[Sequence[str]] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT IGNORE INTO sheets(sheet_name) VALUES(%s)", (sheet,))
            if cur.rowcount > 0 and headers:
                cur.execute(
                    "INSERT INTO sheet_rows(sheet_name, row_num, cells) VALUES(%s,1,%s)",
                    (sheet, dump_cells(list(headers))),
                )

    def delete_row(self, sheet: str, row: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._require_sheet(cur, sheet)
            cur.execute(
                "DELETE FROM sheet_rows WHERE sheet_name=%s AND row_num=%s",
                (sheet, int(row)),
            )
            if cur.rowcount == 0:
                raise NotFoundError(f"Row {row} not found in sheet {sheet}")
            cur.execute(
                """
                UPDATE sheet_rows
                SET row_num = row_num - 1
                WHERE sheet_name=%s AND row_num>%s
                ORDER BY row_num
                """,
                (sheet, int(row)),
            )

from __future__ import annotations

import pytest

from src.timecard_system.timecard_system.core.exceptions import NotFoundError
from src.timecard_system.timecard_system.sheets.memory_sheet_store import InMemorySheetStore


def test_missing_sheet_reads_as_none():
    assert InMemorySheetStore().get_rows("Master") is None


def test_insert_sheet_with_header_is_idempotent():
    store = InMemorySheetStore()
    store.insert_sheet("Master", ["A", "B"])
    store.append_row("Master", [1, 2])
    store.insert_sheet("Master", ["X"])
    assert store.get_rows("Master") == [["A", "B"], [1, 2]]


def test_append_to_missing_sheet_fails():
    with pytest.raises(NotFoundError):
        InMemorySheetStore().append_row("Master", ["x"])


def test_write_cell_grows_row_and_sheet():
    store = InMemorySheetStore({"S": [["h"]]})
    store.write_cell("S", 3, 3, "v")
    assert store.get_rows("S") == [["h"], [], ["", "", "v"]]


def test_delete_row_shifts_following_rows_up():
    store = InMemorySheetStore({"S": [["h"], ["a"], ["b"], ["c"]]})
    store.delete_row("S", 2)
    assert store.get_rows("S") == [["h"], ["b"], ["c"]]


def test_delete_missing_row_fails():
    with pytest.raises(NotFoundError):
        InMemorySheetStore({"S": [["h"]]}).delete_row("S", 5)


def test_get_rows_returns_a_copy():
    store = InMemorySheetStore({"S": [["h"]]})
    store.get_rows("S")[0].append("mutated")
    assert store.get_rows("S") == [["h"]]


def test_sheet_names_in_creation_order():
    store = InMemorySheetStore({"Employees": [["Name"]]})
    store.insert_sheet("Master")
    store.insert_sheet("Jane Doe")
    assert store.sheet_names() == ["Employees", "Master", "Jane Doe"]

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.timecard_system.timecard_system.core.exceptions import AuthenticationError, NotFoundError
from src.timecard_system.timecard_system.employees.password_hasher import hash_password
from src.timecard_system.timecard_system.employees.service import (
    AuthService,
    CredentialMaintenance,
    EmployeeService,
    on_employee_edit,
)
from src.timecard_system.timecard_system.employees.sheet_employee_repository import SheetEmployeeRepository
from src.timecard_system.timecard_system.sessions.service import SessionManager
from src.timecard_system.timecard_system.sessions.sheet_session_repository import SheetSessionRepository
from src.timecard_system.timecard_system.sheets.memory_sheet_store import InMemorySheetStore


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def make_store(*rows):
    return InMemorySheetStore({"Employees": [["Name", "Password", "Role"], *rows]})


def make_auth(store, clock=None):
    sessions = SessionManager(
        SheetSessionRepository(store),
        secret_key="test-secret",
        clock=clock or FakeClock(datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc)),
    )
    return AuthService(SheetEmployeeRepository(store), sessions), sessions


def test_login_with_correct_hash_returns_token_and_role():
    store = make_store(["John Doe", hash_password("1234"), "Driver"])
    auth, sessions = make_auth(store)

    result = auth.login("John Doe", hash_password("1234"))

    assert result.name == "John Doe"
    assert result.role == "Driver"
    assert sessions.validate(result.token)


def test_login_unknown_employee():
    auth, _ = make_auth(make_store(["John Doe", hash_password("1234"), "Driver"]))
    with pytest.raises(AuthenticationError, match="not found"):
        auth.login("Nobody", hash_password("1234"))


def test_login_wrong_hash():
    auth, _ = make_auth(make_store(["John Doe", hash_password("1234"), "Driver"]))
    with pytest.raises(AuthenticationError, match="Invalid password"):
        auth.login("John Doe", hash_password("0000"))


def test_login_name_match_is_case_sensitive():
    auth, _ = make_auth(make_store(["John Doe", hash_password("1234"), "Driver"]))
    with pytest.raises(AuthenticationError):
        auth.login("john doe", hash_password("1234"))


def test_login_does_not_hash_the_received_value_again():
    auth, _ = make_auth(make_store(["John Doe", hash_password("1234"), "Driver"]))
    with pytest.raises(AuthenticationError):
        auth.login("John Doe", "1234")


def test_login_missing_credentials():
    auth, _ = make_auth(make_store())
    with pytest.raises(AuthenticationError):
        auth.login("", "")


def test_login_stores_a_session_row():
    store = make_store(["Jane Smith", hash_password("5678"), "Manager"])
    auth, _ = make_auth(store)

    result = auth.login("Jane Smith", hash_password("5678"))

    rows = store.get_rows("Sessions")
    assert rows[0] == ["Token", "Username", "Role", "Created At", "Expires At"]
    assert rows[1][:3] == [result.token, "Jane Smith", "Manager"]


def test_list_names_never_exposes_passwords():
    store = make_store(
        ["John Doe", hash_password("1234"), "Driver"],
        ["", "", ""],
        ["Jane Smith", hash_password("5678"), "Manager"],
    )
    names = EmployeeService(SheetEmployeeRepository(store)).list_names()
    assert names == [{"Name": "John Doe"}, {"Name": "Jane Smith"}]


def test_list_names_requires_employees_sheet():
    with pytest.raises(NotFoundError):
        EmployeeService(SheetEmployeeRepository(InMemorySheetStore())).list_names()


def test_list_names_with_only_header_is_an_error():
    with pytest.raises(NotFoundError, match="No employee data"):
        EmployeeService(SheetEmployeeRepository(make_store())).list_names()


def test_edit_hook_hashes_plaintext_password_cell():
    store = make_store(["John Doe", "1234", "Driver"])

    assert on_employee_edit(store, "Employees", 2, 2) is True
    assert store.get_rows("Employees")[1][1] == hash_password("1234")


def test_edit_hook_is_idempotent():
    store = make_store(["John Doe", "1234", "Driver"])
    on_employee_edit(store, "Employees", 2, 2)

    assert on_employee_edit(store, "Employees", 2, 2) is False
    assert store.get_rows("Employees")[1][1] == hash_password("1234")


@pytest.mark.parametrize(
    "sheet,row,col",
    [("Master", 2, 2), ("Employees", 1, 2), ("Employees", 2, 1), ("Employees", 2, 3)],
)
def test_edit_hook_ignores_other_cells(sheet, row, col):
    store = make_store(["John Doe", "1234", "Driver"])
    assert on_employee_edit(store, sheet, row, col) is False
    assert store.get_rows("Employees")[1][1] == "1234"


def test_rehash_all_plaintext_migrates_legacy_rows():
    store = make_store(
        ["John Doe", "1234", "Driver"],
        ["Jane Smith", hash_password("5678"), "Manager"],
        ["Bob", 42, "Driver"],
    )
    maintenance = CredentialMaintenance(SheetEmployeeRepository(store))

    assert maintenance.rehash_all_plaintext() == 2
    rows = store.get_rows("Employees")
    assert rows[1][1] == hash_password("1234")
    assert rows[2][1] == hash_password("5678")
    assert rows[3][1] == hash_password("42")

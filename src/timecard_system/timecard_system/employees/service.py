from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.constants import FIRST_DATA_ROW
from ..core.exceptions import AuthenticationError, NotFoundError
from ..sessions.service import SessionManager
from ..sheets.repository import SheetStore
from .password_hasher import rehash_if_plaintext
from .repository import EmployeeRepository
from .sheet_employee_repository import PASSWORD_COL, SheetEmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    name: str
    role: str


class AuthService:
    """Use case: authenticate an employee (login) and open a session.

    The client sends the SHA-256 digest of the password, which is compared with
    the stored digest as-is.
    """

    def __init__(self, employees: EmployeeRepository, sessions: SessionManager):
        self._employees = employees
        self._sessions = sessions

    def login(self, username: str, password_hash: str) -> LoginResult:
        username = (username or "").strip()
        if not username or not password_hash:
            raise AuthenticationError("Username and password are required")

        employee = self._employees.get_by_name(username)
        if not employee:
            logger.info("Login failed: unknown employee %r", username)
            raise AuthenticationError("Employee not found")

        if str(password_hash) != employee.password_hash:
            logger.info("Login failed: wrong password for %r", username)
            raise AuthenticationError("Invalid password")

        token = self._sessions.create(employee.name, employee.role)
        logger.info("Login succeeded for %r (%s)", employee.name, employee.role)
        return LoginResult(token=token, name=employee.name, role=employee.role)


class EmployeeService:
    """Use cases on the credential store that never expose password hashes."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_names(self) -> list[dict]:
        employees = self._employees.list_all()
        if not employees:
            raise NotFoundError("No employee data found. Please add employees to the Employees sheet.")
        return [{"Name": e.name} for e in employees]


class CredentialMaintenance:
    """Out-of-band hashing of the Employees sheet password column."""

    def __init__(self, employees: SheetEmployeeRepository):
        self._employees = employees

    def on_edit(self, *, sheet: str, row: int, col: int) -> bool:
        """Edit hook: rehash the password cell that was just written.

        Returns True when the cell was rewritten.
        """
        if sheet != self._employees.sheet_name or col != PASSWORD_COL or row < FIRST_DATA_ROW:
            return False
        return self._rehash_row(row)

    def _rehash_row(self, row: int) -> bool:
        new_value = rehash_if_plaintext(self._employees.get_password_cell(row))
        if new_value is None:
            return False
        self._employees.set_password_cell(row, new_value)
        logger.info("Rehashed password cell in %s row %s", self._employees.sheet_name, row)
        return True

    def rehash_all_plaintext(self) -> int:
        """One-shot migration off the legacy plaintext Login column."""
        count = 0
        for emp in self._employees.list_all():
            if self._rehash_row(emp.row_number):
                count += 1
        return count


def on_employee_edit(store: SheetStore, sheet: str, row: int, col: int) -> bool:
    """Entry point for the storage edit-notification hook."""
    return CredentialMaintenance(SheetEmployeeRepository(store)).on_edit(sheet=sheet, row=row, col=col)

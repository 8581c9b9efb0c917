from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Credential store port (the Employees sheet)."""

    def get_by_name(self, name: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def add(self, *, name: str, password_hash: str, role: str) -> None:
        raise NotImplementedError

    def set_password_cell(self, row_number: int, value: str) -> None:
        raise NotImplementedError

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Known employee roles. The Employees sheet may hold other values too."""

    DRIVER = "Driver"
    MANAGER = "Manager"


class TimeCardStatus(str, Enum):
    """Ledger lifecycle: a card only ever moves PENDING -> APPROVED."""

    PENDING = "Pending"
    APPROVED = "Approved"


class ReadAction(str, Enum):
    GET_EMPLOYEE_NAMES = "getEmployeeNames"
    GET_ALL = "getAll"

    @classmethod
    def parse(cls, value: str | None) -> "ReadAction":
        try:
            return cls(value or "")
        except ValueError:
            return cls.GET_EMPLOYEE_NAMES


class WriteAction(str, Enum):
    LOGIN = "login"
    SUBMIT = "submit"
    APPROVE = "approve"
    UPDATE = "update"

    @classmethod
    def parse(cls, value: str | None) -> "WriteAction":
        try:
            return cls(value or "")
        except ValueError:
            return cls.SUBMIT

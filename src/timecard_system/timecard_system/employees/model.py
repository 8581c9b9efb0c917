from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Domain entity: one row of the Employees sheet.

    `name` is the primary key (case-sensitive). `role` is kept as the raw sheet
    text so roles beyond the known Role values still round-trip.
    """

    name: str
    password_hash: str
    role: str
    row_number: int = 0

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from ..core.enums import Role
from ..employees.password_hasher import hash_password
from ..employees.sheet_employee_repository import SheetEmployeeRepository
from ..sheets.mysql_sheet_store import MySQLSheetStore
from .connection import DBConfig, DatabaseConnection

DEMO_EMPLOYEES = [
    ("John Doe", "1234", Role.DRIVER.value),
    ("Jane Smith", "5678", Role.MANAGER.value),
]


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a database; the configured one is used instead.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Splits on ';' outside quotes and drops -- comment lines.
    buf: list[str] = []
    in_single = False
    in_double = False

    for line in sql.splitlines():
        if not in_single and not in_double and line.strip().startswith("--"):
            continue
        for ch in line + "\n":
            if ch == "'" and not in_double:
                in_single = not in_single
            elif ch == '"' and not in_single:
                in_double = not in_double
            elif ch == ";" and not in_single and not in_double:
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_mapping(db_config))


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the database and the sheet tables. Safe to run repeatedly."""
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_employees(db_config: dict) -> int:
    """Seed the Employees sheet with the demo accounts that are missing.

    Returns how many were added.
    """
    employees = SheetEmployeeRepository(MySQLSheetStore(_factory(db_config)))
    employees.ensure_sheet()

    existing = {e.name for e in employees.list_all()}
    added = 0
    for name, password, role in DEMO_EMPLOYEES:
        if name not in existing:
            employees.add(name=name, password_hash=hash_password(password), role=role)
            added += 1
    return added


def list_tables(db_config: dict) -> list[str]:
    conn = _factory(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import UpstreamError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise UpstreamError(f"Storage unavailable: {e}") from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise UpstreamError(f"Storage error: {e}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def dump_cells(cells: list[Any]) -> str:
    return json.dumps(list(cells), default=_json_default)


def load_cells(raw: Any) -> list[Any]:
    """Decode a JSON column; mysql-connector may hand back str, bytes or a list."""

    if raw is None:
        return []
    if isinstance(raw, list):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    value = json.loads(raw)
    return value if isinstance(value, list) else []

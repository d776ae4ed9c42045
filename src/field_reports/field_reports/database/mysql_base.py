from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cur)`` on a fresh connection, committing on success.

    Driver errors are logged and re-raised as :class:`PersistenceError` so
    callers above the repository never see connector exception types.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Database connection failed: %s", exc)
        raise PersistenceError(f"database connection failed: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("Database operation failed: %s", exc)
        raise PersistenceError(str(exc)) from exc
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


def dump_json_list(values: list) -> str:
    return json.dumps(list(values or []))


def load_json_list(value: Any) -> list:
    """Decode a JSON array column.

    mysql-connector can return JSON/TEXT columns as:
    - str
    - bytes / bytearray
    - None (NULL column)
    """

    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return []
        decoded = json.loads(value)
        if not isinstance(decoded, list):
            raise ValueError(f"Expected JSON array, got: {value!r}")
        return decoded
    if isinstance(value, list):
        return value

    raise TypeError(f"Unsupported JSON column value type: {type(value)!r}")

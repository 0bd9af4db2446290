from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on error.

    Duplicate-key violations surface as ``ConflictError`` so uniqueness rules
    enforced by the schema reach the service layer as domain errors.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            logger.info("Rejected duplicate row: %s", e.msg)
            raise ConflictError("Record already exists") from e
        raise
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


def mysql_interval(value: Any) -> Optional[timedelta]:
    """TIME column as a signed interval.

    mysql-connector returns TIME as ``timedelta``; the pure-Python protocol
    may hand back ``'HH:MM:SS'`` strings, including negative ones.
    """

    if value is None or isinstance(value, timedelta):
        return value
    if isinstance(value, time):
        return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second)
    if isinstance(value, str):
        text = value.strip()
        sign = -1 if text.startswith("-") else 1
        parts = [int(p) for p in text.lstrip("-").split(":")]
        if len(parts) not in (2, 3):
            raise ValueError(f"Invalid TIME value: {value!r}")
        hours, minutes, seconds = (parts + [0])[:3]
        return sign * timedelta(hours=hours, minutes=minutes, seconds=seconds)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def mysql_clock(value: Any) -> Optional[time]:
    """TIME column holding a wall-clock reading (check-in/check-out)."""

    if value is None or isinstance(value, time):
        return value
    seconds = int(mysql_interval(value).total_seconds()) % 86400
    return time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)

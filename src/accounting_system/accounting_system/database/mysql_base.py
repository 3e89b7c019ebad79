from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector

from .connection import StoreHandle

# MySQL error raised when a DELETE hits a FOREIGN KEY ... ON DELETE RESTRICT.
ER_ROW_IS_REFERENCED_2 = 1451
# INSERT/UPDATE pointing at a parent row that does not exist.
ER_NO_REFERENCED_ROW_2 = 1452
# INSERT/UPDATE colliding with a UNIQUE key.
ER_DUP_ENTRY = 1062


@contextmanager
def db_cursor(conn_factory: StoreHandle, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
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


def as_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def as_date(value: Any) -> date:
    """Normalize DATE columns; some connector setups hand back strings."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value), "%Y-%m-%d").date()


def build_set_clause(columns: Dict[str, Any]) -> tuple[str, list[Any]]:
    """`col=%s, ...` for a partial UPDATE; column names come from code, never input."""
    assignments = [f"{col}=%s" for col in columns]
    return ", ".join(assignments), list(columns.values())


@contextmanager
def missing_parent_as(error_cls, message: str) -> Iterator[None]:
    """Re-raise a foreign-key miss (errno 1452) as a domain error."""
    try:
        yield
    except mysql.connector.IntegrityError as e:
        if e.errno == ER_NO_REFERENCED_ROW_2:
            raise error_cls(message) from e
        raise


@contextmanager
def duplicate_key_as(error_cls, message: str) -> Iterator[None]:
    try:
        yield
    except mysql.connector.IntegrityError as e:
        if e.errno == ER_DUP_ENTRY:
            raise error_cls(message) from e
        raise

from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import StoreHandle
from ..database.mysql_base import db_cursor, duplicate_key_as, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "id, username, password_hash, name, role, created_at, last_signed_in"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        name=row.get("name"),
        role=Role(row["role"]),
        created_at=row.get("created_at"),
        last_signed_in=row.get("last_signed_in"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: StoreHandle):
        self._conn_factory = conn_factory

    @property
    def available(self) -> bool:
        return self._conn_factory.available

    def get_by_id(self, user_id: int) -> Optional[User]:
        if not self._conn_factory.available:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        if not self._conn_factory.available:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, username: str, password_hash: str, name: Optional[str], role: Role) -> int:
        with duplicate_key_as(ValidationError, "Username already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users(username, password_hash, name, role) VALUES(%s,%s,%s,%s)",
                    (username, password_hash, name, role.value),
                )
                return int(cur.lastrowid)

    def touch_signed_in(self, user_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_signed_in=CURRENT_TIMESTAMP WHERE id=%s", (int(user_id),))

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a person allowed to sign in.

    Plain data object; no DB access here.
    """

    user_id: int
    username: str
    password_hash: str
    name: Optional[str]
    role: Role
    created_at: Optional[datetime] = None
    last_signed_in: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    name: Optional[str]
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.user_id, "username": self.username, "name": self.name, "role": self.role.value}

from __future__ import annotations

import logging
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, parse_choice, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..database.connection import ensure_writable
from .model import SessionUser
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_BAD_CREDENTIALS = "Invalid username or password"


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = (username or "").strip()
        if not username or not password:
            raise AuthenticationError(_BAD_CREDENTIALS)

        user = self._users.get_by_username(username)
        if not user:
            raise AuthenticationError(_BAD_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("Failed sign-in for %s", username)
            raise AuthenticationError(_BAD_CREDENTIALS)

        self._users.touch_signed_in(user.user_id)
        logger.info("User %s signed in", username)
        return SessionUser(user_id=user.user_id, username=user.username, name=user.name, role=user.role)


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, current_role: Optional[str], data: dict[str, Any]) -> int:
        if current_role != Role.ADMIN.value:
            raise AuthorizationError("Only administrators can create accounts")

        username = require_non_empty(data.get("username"), "username")
        password = data.get("password") or ""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        role = parse_choice(data.get("role") or Role.USER.value, Role, "role")
        ensure_writable(self._users)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            name=optional_text(data.get("name")),
            role=role,
        )
        logger.info("Created %s account %s", role.value, username)
        return user_id

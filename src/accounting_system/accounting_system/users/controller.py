from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.http import api_call, json_body, login_required, ok
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    @api_call
    def auth_login():
        data = json_body()
        s_user = container.auth_service.authenticate(str(data.get("username") or ""), str(data.get("password") or ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        return ok({"success": True, "user": s_user})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return ok({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        return ok(
            {
                "id": session["user_id"],
                "username": session.get("username"),
                "name": session.get("name"),
                "role": session.get("role"),
            }
        )

    @app.route("/api/auth/users", methods=["POST"], endpoint="auth_create_user")
    @login_required
    @api_call
    def auth_create_user():
        user_id = container.user_service.create_account(current_role=session.get("role"), data=json_body())
        return ok({"success": True, "id": user_id}, 201)

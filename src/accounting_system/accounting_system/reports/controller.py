from __future__ import annotations

from flask import Flask, request

from ..common.http import api_call, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/monthly", methods=["GET"], endpoint="reports_monthly")
    @login_required
    @api_call
    def reports_monthly():
        return ok(container.report_service.monthly(request.args.get("months")))

    @app.route("/api/reports/categories", methods=["GET"], endpoint="reports_categories")
    @login_required
    @api_call
    def reports_categories():
        return ok(container.report_service.categories())

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="reports_dashboard")
    @login_required
    @api_call
    def reports_dashboard():
        return ok(container.report_service.dashboard())

from __future__ import annotations

from flask import Flask, request

from ..common.http import api_call, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    @api_call
    def employees_list():
        return ok(container.employee_service.list_employees(query=request.args.get("q")))

    @app.route("/api/employees/active", methods=["GET"], endpoint="employees_active")
    @login_required
    @api_call
    def employees_active():
        return ok(container.employee_service.list_active())

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @login_required
    @api_call
    def employees_create():
        return ok(container.employee_service.create_employee(json_body()), 201)

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    @api_call
    def employees_get(employee_id: int):
        return ok(container.employee_service.get_employee(employee_id))

    @app.route("/api/employees/<int:employee_id>", methods=["PATCH"], endpoint="employees_update")
    @login_required
    @api_call
    def employees_update(employee_id: int):
        return ok(container.employee_service.update_employee(employee_id, json_body()))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @login_required
    @api_call
    def employees_delete(employee_id: int):
        return ok({"success": container.employee_service.delete_employee(employee_id)})

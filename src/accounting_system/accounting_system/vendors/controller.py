from __future__ import annotations

from flask import Flask, request

from ..common.http import api_call, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/vendors", methods=["GET"], endpoint="vendors_list")
    @login_required
    @api_call
    def vendors_list():
        return ok(container.vendor_service.list_vendors(query=request.args.get("q")))

    @app.route("/api/vendors", methods=["POST"], endpoint="vendors_create")
    @login_required
    @api_call
    def vendors_create():
        return ok(container.vendor_service.create_vendor(json_body()), 201)

    @app.route("/api/vendors/<int:vendor_id>", methods=["GET"], endpoint="vendors_get")
    @login_required
    @api_call
    def vendors_get(vendor_id: int):
        return ok(container.vendor_service.get_vendor(vendor_id))

    @app.route("/api/vendors/<int:vendor_id>", methods=["PATCH"], endpoint="vendors_update")
    @login_required
    @api_call
    def vendors_update(vendor_id: int):
        return ok(container.vendor_service.update_vendor(vendor_id, json_body()))

    @app.route("/api/vendors/<int:vendor_id>", methods=["DELETE"], endpoint="vendors_delete")
    @login_required
    @api_call
    def vendors_delete(vendor_id: int):
        return ok({"success": container.vendor_service.delete_vendor(vendor_id)})

    @app.route("/api/vendors/<int:vendor_id>/vouchers", methods=["GET"], endpoint="vendors_vouchers")
    @login_required
    @api_call
    def vendors_vouchers(vendor_id: int):
        return ok(container.voucher_service.list_by_vendor(vendor_id))

from __future__ import annotations

from flask import Flask, request

from ..common.http import api_call, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/vouchers", methods=["GET"], endpoint="vouchers_list")
    @login_required
    @api_call
    def vouchers_list():
        return ok(
            container.voucher_service.list_vouchers(
                query=request.args.get("q"),
                status=request.args.get("status"),
            )
        )

    @app.route("/api/vouchers", methods=["POST"], endpoint="vouchers_create")
    @login_required
    @api_call
    def vouchers_create():
        return ok(container.voucher_service.create_voucher(json_body()), 201)

    @app.route("/api/vouchers/<int:voucher_id>", methods=["GET"], endpoint="vouchers_get")
    @login_required
    @api_call
    def vouchers_get(voucher_id: int):
        return ok(container.voucher_service.get_voucher(voucher_id))

    @app.route("/api/vouchers/<int:voucher_id>", methods=["PATCH"], endpoint="vouchers_update")
    @login_required
    @api_call
    def vouchers_update(voucher_id: int):
        return ok(container.voucher_service.update_voucher(voucher_id, json_body()))

    @app.route("/api/vouchers/<int:voucher_id>/status", methods=["POST"], endpoint="vouchers_set_status")
    @login_required
    @api_call
    def vouchers_set_status(voucher_id: int):
        data = json_body()
        return ok(container.voucher_service.set_status(voucher_id, data.get("status")))

    @app.route("/api/vouchers/<int:voucher_id>", methods=["DELETE"], endpoint="vouchers_delete")
    @login_required
    @api_call
    def vouchers_delete(voucher_id: int):
        return ok({"success": container.voucher_service.delete_voucher(voucher_id)})

from __future__ import annotations

from flask import Flask, send_file

from ..common.http import api_call, json_body, json_list_body, login_required, ok
from ..container import Container
from .service import EXPORT_MIMETYPE


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @login_required
    @api_call
    def payroll_list():
        return ok(container.payroll_service.list_records())

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_create")
    @login_required
    @api_call
    def payroll_create():
        return ok(container.payroll_service.create_record(json_body()), 201)

    @app.route("/api/payroll/batch", methods=["POST"], endpoint="payroll_batch")
    @login_required
    @api_call
    def payroll_batch():
        return ok(container.payroll_service.save_batch(json_list_body()))

    @app.route("/api/payroll/<int:record_id>", methods=["GET"], endpoint="payroll_get")
    @login_required
    @api_call
    def payroll_get(record_id: int):
        return ok(container.payroll_service.get_record(record_id))

    @app.route("/api/payroll/<int:record_id>", methods=["PATCH"], endpoint="payroll_update")
    @login_required
    @api_call
    def payroll_update(record_id: int):
        return ok(container.payroll_service.update_record(record_id, json_body()))

    @app.route("/api/payroll/<int:record_id>", methods=["DELETE"], endpoint="payroll_delete")
    @login_required
    @api_call
    def payroll_delete(record_id: int):
        return ok({"success": container.payroll_service.delete_record(record_id)})

    @app.route("/api/payroll/periods/<period>", methods=["GET"], endpoint="payroll_period")
    @login_required
    @api_call
    def payroll_period(period: str):
        return ok(container.payroll_service.list_period(period))

    @app.route("/api/payroll/periods/<period>/init", methods=["GET"], endpoint="payroll_period_init")
    @login_required
    @api_call
    def payroll_period_init(period: str):
        return ok(container.payroll_service.get_or_init_period(period))

    @app.route("/api/payroll/periods/<period>/summary", methods=["GET"], endpoint="payroll_period_summary")
    @login_required
    @api_call
    def payroll_period_summary(period: str):
        return ok(container.payroll_service.period_summary(period))

    @app.route("/api/payroll/periods/<period>/finalize", methods=["POST"], endpoint="payroll_period_finalize")
    @login_required
    @api_call
    def payroll_period_finalize(period: str):
        count = container.payroll_service.finalize_period(period)
        return ok({"success": True, "updated_count": count})

    @app.route(
        "/api/payroll/periods/<period>/save-and-finalize",
        methods=["POST"],
        endpoint="payroll_period_save_and_finalize",
    )
    @login_required
    @api_call
    def payroll_period_save_and_finalize(period: str):
        count = container.payroll_service.save_and_finalize(period, json_list_body())
        return ok({"success": True, "updated_count": count})

    @app.route("/api/payroll/periods/<period>/export.xlsx", methods=["GET"], endpoint="payroll_period_export")
    @login_required
    @api_call
    def payroll_period_export(period: str):
        output = container.payroll_service.export_period(period)
        return send_file(
            output,
            download_name=f"payroll_{period}.xlsx",
            as_attachment=True,
            mimetype=EXPORT_MIMETYPE,
        )

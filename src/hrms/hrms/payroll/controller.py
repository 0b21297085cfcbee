from __future__ import annotations

from flask import Flask, request

from ..common.http import arg_int, arg_limit, body_int, json_body, ok
from ..container import Container
from ..core.constants import DEFAULT_LIST_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    def list_payroll():
        rows = container.payroll_service.list_payslips(
            employee_id=arg_int("employee_id"),
            month=arg_int("month"),
            year=arg_int("year"),
            limit=arg_limit(DEFAULT_LIST_LIMIT),
        )
        return ok([r.to_dict() for r in rows])

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def generate():
        data = json_body()
        record = container.payroll_service.generate(
            body_int(data, "employee_id"),
            body_int(data, "month"),
            body_int(data, "year"),
        )
        return ok(record.to_dict(), message="Payroll generated successfully", status=201)

    @app.route("/api/payroll/process", methods=["POST"], endpoint="payroll_process")
    def process():
        data = json_body()
        processed = container.payroll_service.process_month(body_int(data, "month"), body_int(data, "year"))
        return ok(processed, message=f"Payroll processed for {len(processed)} employees")

    @app.route("/api/payroll/<int:payroll_id>/processed", methods=["POST"], endpoint="payroll_mark_processed")
    def mark_processed(payroll_id: int):
        return ok(container.payroll_service.mark_processed(payroll_id).to_dict())

    @app.route("/api/payroll/<int:payroll_id>/paid", methods=["POST"], endpoint="payroll_mark_paid")
    def mark_paid(payroll_id: int):
        data = request.get_json(silent=True) or {}
        record = container.payroll_service.mark_paid(
            payroll_id,
            payment_method=data.get("payment_method") or "bank_transfer",
            transaction_id=data.get("transaction_id"),
        )
        return ok(record.to_dict())

    @app.route("/api/payroll/<int:payroll_id>/cancel", methods=["POST"], endpoint="payroll_cancel")
    def cancel(payroll_id: int):
        return ok(container.payroll_service.cancel(payroll_id).to_dict())

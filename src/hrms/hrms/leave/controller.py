from __future__ import annotations

from flask import Flask, request

from ..common.http import arg_int, arg_limit, body_date, body_int, json_body, ok
from ..common.validators import require_enum
from ..container import Container
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import RequestStatus


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="leave_submit")
    def submit():
        data = json_body()
        leave = container.leave_service.submit(
            employee_id=body_int(data, "employee_id"),
            category=data.get("leave_type") or data.get("category") or "",
            start_date=body_date(data, "start_date"),
            end_date=body_date(data, "end_date"),
            reason=str(data.get("reason") or ""),
        )
        return ok(leave.to_dict(), message="Leave request submitted successfully", status=201)

    @app.route("/api/leaves", methods=["GET"], endpoint="leave_list")
    def list_leaves():
        raw_status = (request.args.get("status") or "").strip()
        status = require_enum(RequestStatus, raw_status, "status") if raw_status else None
        rows = container.leave_service.list_requests(
            employee_id=arg_int("employee_id"),
            status=status,
            limit=arg_limit(DEFAULT_LIST_LIMIT),
        )
        return ok([r.to_dict() for r in rows])

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="leave_approve")
    def approve(request_id: int):
        data = json_body()
        leave = container.leave_service.approve(request_id, body_int(data, "approver_id"))
        return ok(leave.to_dict(), message="Leave request approved successfully")

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="leave_reject")
    def reject(request_id: int):
        data = json_body()
        leave = container.leave_service.reject(
            request_id,
            body_int(data, "approver_id"),
            str(data.get("rejection_reason") or ""),
        )
        return ok(leave.to_dict(), message="Leave request rejected successfully")

    @app.route("/api/leaves/<int:request_id>/cancel", methods=["POST"], endpoint="leave_cancel")
    def cancel(request_id: int):
        data = json_body()
        leave = container.leave_service.cancel(request_id, body_int(data, "employee_id"))
        return ok(leave.to_dict(), message="Leave request cancelled")

    @app.route("/api/leaves/balance/<int:employee_id>", methods=["GET"], endpoint="leave_balance")
    def balance(employee_id: int):
        return ok(container.leave_service.open_ledger(employee_id).to_dict())

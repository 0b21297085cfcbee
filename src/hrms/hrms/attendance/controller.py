from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import arg_date, arg_int, arg_limit, ok
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:employee_id>/check-in", methods=["POST"], endpoint="attendance_check_in")
    def check_in(employee_id: int):
        data = request.get_json(silent=True) or {}
        record = container.attendance_service.check_in(employee_id, data.get("location"))
        return ok(record.to_dict(), message="Check-in successful")

    @app.route("/api/attendance/<int:employee_id>/check-out", methods=["POST"], endpoint="attendance_check_out")
    def check_out(employee_id: int):
        data = request.get_json(silent=True) or {}
        record = container.attendance_service.check_out(employee_id, data.get("location"))
        return ok(record.to_dict(), message="Check-out successful")

    @app.route("/api/attendance/<int:employee_id>/today", methods=["GET"], endpoint="attendance_today")
    def today(employee_id: int):
        record = container.attendance_service.get_today_record(employee_id, now_local().date())
        return ok(record.to_dict() if record else None)

    @app.route("/api/attendance/<int:employee_id>/history", methods=["GET"], endpoint="attendance_history")
    def history(employee_id: int):
        limit = arg_limit(DEFAULT_HISTORY_LIMIT)
        rows = container.attendance_service.get_history(employee_id, limit=limit)
        return ok([r.to_dict() for r in rows])

    @app.route("/api/attendance/<int:employee_id>/summary", methods=["GET"], endpoint="attendance_summary")
    def summary(employee_id: int):
        result = container.report_service.employee_summary(employee_id, start=arg_date("start"), end=arg_date("end"))
        return ok(result.to_dict())

    @app.route("/api/attendance/reports", methods=["GET"], endpoint="attendance_reports")
    def reports():
        start = arg_date("start")
        end = arg_date("end")
        if not start or not end:
            raise ValidationError("start and end are required")
        report = container.report_service.build_report(
            start=start,
            end=end,
            employee_id=arg_int("employee_id"),
            dept_id=arg_int("dept_id"),
        )
        return ok([r.to_dict() for r in report])

from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.exceptions import NotFound, ValidationError
from ..employees.repository import EmployeeRepository
from .aggregator import build_employee_report, summarize
from .model import AttendanceSummary, EmployeeAttendanceReport


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def employee_summary(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> AttendanceSummary:
        """Summary for one employee; defaults to month-to-date."""
        if not self._employees.get_by_id(employee_id):
            raise NotFound("Employee not found")

        today = today or now_local().date()
        start = start or today.replace(day=1)
        end = end or today
        if end < start:
            raise ValidationError("end must not be before start")

        records = self._attendance.list_for_employee(employee_id, start_date=start, end_date=end)
        return summarize(employee_id, records, start, end)

    def build_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
        dept_id: Optional[int] = None,
    ) -> list[EmployeeAttendanceReport]:
        if end < start:
            raise ValidationError("end must not be before start")
        rows = self._attendance.get_report_rows(
            start_date=start,
            end_date=end,
            employee_id=employee_id,
            dept_id=dept_id,
        )
        return build_employee_report(rows)

"""Attendance aggregation.

Two views over stored attendance rows, with different denominators:

* ``summarize`` measures one employee against the weekdays of a date range,
  so days without any row count as absent.
* ``build_employee_report`` groups whatever rows exist per employee and
  measures against the row count.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..attendance.model import AttendanceRecord, AttendanceReportRow
from ..common.datetime_utils import working_days
from ..core.enums import AttendanceStatus
from .model import AttendanceSummary, EmployeeAttendanceReport


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def summarize(employee_id: int, records: Iterable[AttendanceRecord], start: date, end: date) -> AttendanceSummary:
    in_range = [r for r in records if r.employee_id == employee_id and start <= r.work_date <= end]

    present_dates = {r.work_date for r in in_range if r.status.counts_as_present}
    workdays = working_days(start, end)
    absent = sum(1 for d in workdays if d not in present_dates)
    late = sum(1 for r in in_range if r.status == AttendanceStatus.LATE)

    if workdays:
        rate = _round_half_up(Decimal(100 * len(present_dates)) / Decimal(len(workdays)))
    else:
        rate = 0

    return AttendanceSummary(
        employee_id=employee_id,
        start=start,
        end=end,
        present=len(present_dates),
        absent=absent,
        late=late,
        rate=rate,
    )


def build_employee_report(rows: Iterable[AttendanceReportRow]) -> list[EmployeeAttendanceReport]:
    groups: dict[int, dict] = {}

    for r in rows:
        g = groups.get(r.employee_id)
        if not g:
            g = {
                "employee_name": r.full_name,
                "total_days": 0,
                "present_days": 0,
                "absent_days": 0,
                "late_days": 0,
                "total_working_minutes": 0,
                "total_overtime_minutes": 0,
            }
            groups[r.employee_id] = g

        g["total_days"] += 1
        if r.status == AttendanceStatus.PRESENT:
            g["present_days"] += 1
        elif r.status == AttendanceStatus.ABSENT:
            g["absent_days"] += 1
        elif r.status == AttendanceStatus.LATE:
            g["late_days"] += 1
        g["total_working_minutes"] += int(r.working_minutes or 0)
        g["total_overtime_minutes"] += int(r.overtime_minutes or 0)

    report = []
    for employee_id, g in groups.items():
        total = g["total_days"]
        rate = 100.0 * g["present_days"] / total if total else 0.0
        report.append(EmployeeAttendanceReport(employee_id=employee_id, attendance_rate=rate, **g))

    report.sort(key=lambda x: (x.employee_name, x.employee_id))
    return report

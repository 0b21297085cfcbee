from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow, GeoLocation


class AttendanceRepository(Protocol):
    """Storage contract for attendance rows.

    Implementations must enforce uniqueness on (employee_id, work_date) and
    raise ``AlreadyExists`` instead of overwriting.
    """

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        location: Optional[GeoLocation],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def set_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        location: Optional[GeoLocation],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        """Fill the check-in of an existing row; False if it already has one."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        location: Optional[GeoLocation],
        status: AttendanceStatus,
        working_minutes: int,
        overtime_minutes: int,
        notes: Optional[str] = None,
    ) -> bool:
        """Compare-and-swap: only succeeds while check-out is still empty."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        dept_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

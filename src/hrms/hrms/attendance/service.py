from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    AlreadyExists,
    NoCheckInFound,
    NotFound,
)
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendancePolicy, AttendanceRecord, GeoLocation
from .repository import AttendanceRepository
from .timekeeping import derive_worked_time

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out state machine for one row per (employee, date).

    A row moves from "no check-in" to "checked in" (present/late) to
    "checked out" (minutes derived) and is frozen after that.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        policy: AttendancePolicy | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._policy = policy or AttendancePolicy()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def check_in(self, employee_id: int, location: Any, *, now: datetime | None = None) -> AttendanceRecord:
        geo = GeoLocation.parse(location)
        now = now or now_local()
        today = now.date()

        if not self._employees.get_by_id(employee_id):
            raise NotFound("Employee not found")

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing and existing.is_checked_in:
            raise AlreadyCheckedIn("Already checked in today")

        strategy = self._factory.for_checkin(now=now, today=today, policy=self._policy)
        decision = strategy.decide_checkin(now=now, today=today, policy=self._policy)

        if existing:
            ok = self._attendance.set_checkin(
                attendance_id=existing.attendance_id,
                check_in_time=now,
                location=geo,
                status=decision.status,
                notes=decision.note,
            )
            if not ok:
                raise AlreadyCheckedIn("Already checked in today")
        else:
            try:
                self._attendance.create_checkin(
                    employee_id=employee_id,
                    work_date=today,
                    check_in_time=now,
                    location=geo,
                    status=decision.status,
                    notes=decision.note,
                )
            except AlreadyExists:
                # Lost the race against a concurrent check-in for the same day.
                raise AlreadyCheckedIn("Already checked in today")

        logger.info("employee %s checked in at %s (%s)", employee_id, now.isoformat(), decision.status.value)
        return self._reload(employee_id, today)

    def check_out(self, employee_id: int, location: Any = None, *, now: datetime | None = None) -> AttendanceRecord:
        geo = GeoLocation.parse(location) if location is not None else None
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record or record.check_in is None:
            raise NoCheckInFound("No check-in record found for today")
        if record.is_checked_out:
            raise AlreadyCheckedOut("Already checked out today")

        worked = derive_worked_time(
            record.check_in.timestamp,
            now,
            standard_day_minutes=self._policy.standard_day_minutes,
        )
        strategy = self._factory.for_checkout(working_minutes=worked.working_minutes, policy=self._policy)
        decision = strategy.decide_checkout(
            working_minutes=worked.working_minutes,
            policy=self._policy,
            current=record.status,
        )

        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            location=geo,
            status=decision.status,
            working_minutes=worked.working_minutes,
            overtime_minutes=worked.overtime_minutes,
            notes=decision.note or record.notes,
        )
        if not ok:
            raise AlreadyCheckedOut("Already checked out today")

        logger.info(
            "employee %s checked out at %s: %d min worked, %d min overtime",
            employee_id,
            now.isoformat(),
            worked.working_minutes,
            worked.overtime_minutes,
        )
        return self._reload(employee_id, today)

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def get_history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_employee(employee_id, limit)

    def _reload(self, employee_id: int, work_date: date) -> AttendanceRecord:
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if record is None:
            raise NotFound("Attendance record not found")
        return record

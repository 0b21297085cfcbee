from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import require_enum, require_month
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PaymentMethod, PayrollStatus, can_transition
from ..core.exceptions import AlreadyExists, DomainError, InvalidTransition, NotFound
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        payrolls: PayrollRepository,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payrolls = payrolls
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def generate(self, employee_id: int, month: int, year: int, *, now: Optional[datetime] = None) -> PayrollRecord:
        """Compute and store the payslip for one payroll period.

        Fails with ``AlreadyExists`` when the period already has a payslip,
        whether found up front or rejected by the storage unique key.
        """
        month, year = require_month(month, year)

        if self._payrolls.get_for_period(employee_id=employee_id, month=month, year=year):
            raise AlreadyExists("Payroll already exists for this month")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFound("Employee not found")

        start, end = month_bounds(year, month)
        rows = self._attendance.list_for_employee(employee_id, start_date=start, end_date=end)
        breakdown = self._calculator.calculate(
            basic_salary=employee.salary,
            month=month,
            year=year,
            attendance=rows,
        )

        payroll_id = self._payrolls.create(
            employee_id=employee_id,
            month=month,
            year=year,
            breakdown=breakdown,
            created_at=now or now_local(),
        )
        logger.info(
            "payroll %s generated for employee %s (%02d/%d): net %s, overtime %d min",
            payroll_id,
            employee_id,
            month,
            year,
            breakdown.net_salary,
            breakdown.overtime_minutes,
        )
        return self._get(payroll_id)

    def process_month(self, month: int, year: int, *, now: Optional[datetime] = None) -> list[str]:
        """Generate payslips for every active employee, best effort.

        Returns the codes of employees whose payslip was created; anyone
        failing (typically because a payslip already exists) is skipped.
        """
        month, year = require_month(month, year)
        processed: list[str] = []
        for employee in self._employees.list_active():
            try:
                self.generate(employee.employee_id, month, year, now=now)
            except DomainError as e:
                logger.warning(
                    "skipping payroll for employee %s (%02d/%d): %s",
                    employee.employee_code,
                    month,
                    year,
                    e.code,
                )
                continue
            processed.append(employee.employee_code)

        logger.info("payroll processed for %d employee(s) (%02d/%d)", len(processed), month, year)
        return processed

    def mark_processed(self, payroll_id: int) -> PayrollRecord:
        return self._move(payroll_id, PayrollStatus.PROCESSED)

    def mark_paid(
        self,
        payroll_id: int,
        *,
        payment_method: PaymentMethod | str = PaymentMethod.BANK_TRANSFER,
        transaction_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PayrollRecord:
        method = require_enum(PaymentMethod, payment_method, "payment method")
        return self._move(
            payroll_id,
            PayrollStatus.PAID,
            paid_at=now or now_local(),
            payment_method=method,
            transaction_id=(transaction_id or "").strip() or None,
        )

    def cancel(self, payroll_id: int) -> PayrollRecord:
        return self._move(payroll_id, PayrollStatus.CANCELLED)

    def get(self, payroll_id: int) -> PayrollRecord:
        return self._get(payroll_id)

    def list_payslips(
        self,
        *,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[PayrollRecord]:
        return self._payrolls.list_payrolls(employee_id=employee_id, month=month, year=year, limit=limit)

    def _move(self, payroll_id: int, target: PayrollStatus, **changes) -> PayrollRecord:
        record = self._get(payroll_id)
        if not can_transition(record.status, target):
            raise InvalidTransition(f"Cannot move payroll from {record.status.value} to {target.value}")

        ok = self._payrolls.update_status(payroll_id=payroll_id, expected=record.status, status=target, **changes)
        if not ok:
            raise InvalidTransition("Payroll status changed concurrently")

        logger.info("payroll %s: %s -> %s", payroll_id, record.status.value, target.value)
        return self._get(payroll_id)

    def _get(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get(payroll_id)
        if not record:
            raise NotFound("Payroll record not found")
        return record

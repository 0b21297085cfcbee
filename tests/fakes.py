from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from hrms.attendance.model import AttendanceRecord, AttendanceReportRow, GeoLocation, Punch
from hrms.core.enums import AttendanceStatus, LeaveCategory, PaymentMethod, PayrollStatus, RequestStatus
from hrms.core.exceptions import AlreadyExists
from hrms.employees.model import Employee
from hrms.leave.model import LeaveBalance, LeaveRequest
from hrms.payroll.model import PayrollBreakdown, PayrollRecord


def make_employee(employee_id: int = 1, *, salary="50000", is_active: bool = True, dept_id: Optional[int] = 1) -> Employee:
    return Employee(
        employee_id=employee_id,
        employee_code=f"EMP{employee_id:03d}",
        first_name="Emp",
        last_name=str(employee_id),
        email=f"emp{employee_id}@example.com",
        salary=Decimal(str(salary)),
        dept_id=dept_id,
        is_active=is_active,
    )


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> None:
        self._by_id[employee.employee_id] = employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_active(self):
        return [e for e in sorted(self._by_id.values(), key=lambda e: e.employee_id) if e.is_active]


class InMemoryAttendance:
    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._employees = employees
        self._id = 0

    def add(
        self,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        *,
        working_minutes: int = 0,
        overtime_minutes: int = 0,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
    ) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            check_in=Punch(check_in) if check_in else None,
            check_out=Punch(check_out) if check_out else None,
            status=status,
            working_minutes=working_minutes,
            overtime_minutes=overtime_minutes,
        )
        self._by_key[(employee_id, work_date)] = rec
        return rec

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_key.values())

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self._by_key.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date):
        items = [
            r for r in self._by_key.values() if r.employee_id == employee_id and start_date <= r.work_date <= end_date
        ]
        return sorted(items, key=lambda r: r.work_date)

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        location: Optional[GeoLocation],
        status: AttendanceStatus,
        notes=None,
    ) -> int:
        if (employee_id, work_date) in self._by_key:
            raise AlreadyExists("Attendance record already exists")
        self._id += 1
        self._by_key[(employee_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            check_in=Punch(check_in_time, location),
            check_out=None,
            status=status,
            notes=notes,
        )
        return self._id

    def set_checkin(self, *, attendance_id: int, check_in_time: datetime, location, status, notes=None) -> bool:
        for key, rec in self._by_key.items():
            if rec.attendance_id == attendance_id and rec.check_in is None:
                self._by_key[key] = replace(
                    rec,
                    check_in=Punch(check_in_time, location),
                    status=status,
                    notes=notes if notes is not None else rec.notes,
                )
                return True
        return False

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        location,
        status,
        working_minutes: int,
        overtime_minutes: int,
        notes=None,
    ) -> bool:
        for key, rec in self._by_key.items():
            if rec.attendance_id == attendance_id and rec.check_out is None:
                self._by_key[key] = replace(
                    rec,
                    check_out=Punch(check_out_time, location),
                    status=status,
                    working_minutes=working_minutes,
                    overtime_minutes=overtime_minutes,
                    notes=notes,
                )
                return True
        return False

    def get_report_rows(self, *, start_date: date, end_date: date, dept_id=None, employee_id=None):
        rows = []
        for rec in sorted(self._by_key.values(), key=lambda r: (r.work_date, r.employee_id)):
            if not start_date <= rec.work_date <= end_date:
                continue
            if employee_id is not None and rec.employee_id != employee_id:
                continue
            emp = self._employees.get_by_id(rec.employee_id) if self._employees else None
            if dept_id is not None and (emp is None or emp.dept_id != dept_id):
                continue
            rows.append(
                AttendanceReportRow(
                    employee_id=rec.employee_id,
                    full_name=emp.full_name if emp else f"#{rec.employee_id}",
                    employee_code=emp.employee_code if emp else "",
                    dept_id=emp.dept_id if emp else None,
                    work_date=rec.work_date,
                    status=rec.status,
                    working_minutes=rec.working_minutes,
                    overtime_minutes=rec.overtime_minutes,
                )
            )
        return rows


class InMemoryLeaveRequests:
    def __init__(self):
        self._by_id: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def create(self, *, employee_id, category, start_date, end_date, days, reason, created_at) -> int:
        rid = self._next_id
        self._next_id += 1
        self._by_id[rid] = LeaveRequest(
            request_id=rid,
            employee_id=employee_id,
            category=category,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        return rid

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self._by_id.get(int(request_id))

    def list_requests(self, *, employee_id=None, status=None, limit=200):
        items = [
            r
            for r in self._by_id.values()
            if (employee_id is None or r.employee_id == employee_id) and (status is None or r.status == status)
        ]
        items.sort(key=lambda r: r.request_id, reverse=True)
        return items[:limit]

    def decide(self, *, request_id, expected, status, decided_by, decided_at, rejection_reason=None) -> bool:
        req = self._by_id.get(int(request_id))
        if not req or req.status != expected:
            return False
        self._by_id[req.request_id] = replace(
            req,
            status=status,
            decided_by=decided_by,
            decided_at=decided_at,
            rejection_reason=rejection_reason,
        )
        return True


class InMemoryLeaveBalances:
    def __init__(self):
        self._by_employee: dict[int, LeaveBalance] = {}

    def get(self, employee_id: int) -> Optional[LeaveBalance]:
        return self._by_employee.get(employee_id)

    def create(self, balance: LeaveBalance) -> None:
        if balance.employee_id in self._by_employee:
            raise AlreadyExists("Leave balance already exists")
        self._by_employee[balance.employee_id] = replace(balance, balances=dict(balance.balances))

    def set(self, employee_id: int, category: LeaveCategory, days: int) -> None:
        current = self._by_employee.get(employee_id) or LeaveBalance(employee_id=employee_id)
        balances = dict(current.balances)
        balances[category] = days
        self._by_employee[employee_id] = replace(current, balances=balances, version=current.version + 1)

    def adjust(self, *, employee_id, category, delta, floor=None) -> bool:
        current = self._by_employee.get(employee_id)
        if current is None:
            return False
        new_value = current.available(category) + delta
        if floor is not None and new_value < floor:
            return False
        balances = dict(current.balances)
        balances[category] = new_value
        self._by_employee[employee_id] = replace(current, balances=balances, version=current.version + 1)
        return True


class InMemoryPayrolls:
    def __init__(self):
        self._by_id: dict[int, PayrollRecord] = {}
        self._next_id = 1

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        return self._by_id.get(int(payroll_id))

    def get_for_period(self, *, employee_id, month, year) -> Optional[PayrollRecord]:
        for r in self._by_id.values():
            if (r.employee_id, r.month, r.year) == (employee_id, month, year):
                return r
        return None

    def create(self, *, employee_id, month, year, breakdown: PayrollBreakdown, created_at) -> int:
        if self.get_for_period(employee_id=employee_id, month=month, year=year):
            raise AlreadyExists("Payroll for this month already exists")
        pid = self._next_id
        self._next_id += 1
        self._by_id[pid] = PayrollRecord(
            payroll_id=pid,
            employee_id=employee_id,
            month=month,
            year=year,
            basic_salary=breakdown.basic_salary,
            allowances=breakdown.allowances,
            deductions=breakdown.deductions,
            overtime=breakdown.overtime,
            bonus=breakdown.bonus,
            net_salary=breakdown.net_salary,
            status=PayrollStatus.PENDING,
            created_at=created_at,
        )
        return pid

    def update_status(
        self,
        *,
        payroll_id,
        expected,
        status,
        paid_at=None,
        payment_method: Optional[PaymentMethod] = None,
        transaction_id=None,
    ) -> bool:
        rec = self._by_id.get(int(payroll_id))
        if not rec or rec.status != expected:
            return False
        self._by_id[rec.payroll_id] = replace(
            rec,
            status=status,
            paid_at=paid_at or rec.paid_at,
            payment_method=payment_method or rec.payment_method,
            transaction_id=transaction_id or rec.transaction_id,
        )
        return True

    def list_payrolls(self, *, employee_id=None, month=None, year=None, limit=200):
        items = [
            r
            for r in self._by_id.values()
            if (employee_id is None or r.employee_id == employee_id)
            and (month is None or r.month == month)
            and (year is None or r.year == year)
        ]
        items.sort(key=lambda r: (-r.year, -r.month, r.employee_id))
        return items[:limit]

    def count(self) -> int:
        return len(self._by_id)

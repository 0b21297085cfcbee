from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.model import AttendancePolicy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_hhmm
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_WORK_START
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leave.mysql_leave_repository import MySQLLeaveBalanceRepository, MySQLLeaveRequestRepository
from .leave.repository import LeaveBalanceRepository, LeaveRequestRepository
from .leave.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leave_requests_repo: LeaveRequestRepository
    leave_balances_repo: LeaveBalanceRepository
    payrolls_repo: PayrollRepository

    attendance_service: AttendanceService
    report_service: AttendanceReportService
    leave_service: LeaveService
    payroll_service: PayrollService

    conn: Optional[DatabaseConnection] = None


def policy_from_settings(settings: Any) -> AttendancePolicy:
    work_start = getattr(settings, "WORK_START_TIME", None)
    half_day = getattr(settings, "HALF_DAY_THRESHOLD_MINUTES", None)
    return AttendancePolicy(
        work_start=parse_hhmm(work_start) if work_start else DEFAULT_WORK_START,
        late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
        half_day_threshold_minutes=int(half_day) if half_day is not None else None,
    )


def build_services(
    *,
    employees: EmployeeRepository,
    attendance: AttendanceRepository,
    leave_requests: LeaveRequestRepository,
    leave_balances: LeaveBalanceRepository,
    payrolls: PayrollRepository,
    policy: AttendancePolicy | None = None,
    strict_leave_balance: bool = False,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementations."""
    return Container(
        employees_repo=employees,
        attendance_repo=attendance,
        leave_requests_repo=leave_requests,
        leave_balances_repo=leave_balances,
        payrolls_repo=payrolls,
        attendance_service=AttendanceService(
            attendance,
            employees,
            policy=policy,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        report_service=AttendanceReportService(attendance, employees),
        leave_service=LeaveService(leave_requests, leave_balances, employees, strict_balance=strict_leave_balance),
        payroll_service=PayrollService(payrolls, attendance, employees),
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        employees=MySQLEmployeeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        leave_requests=MySQLLeaveRequestRepository(conn),
        leave_balances=MySQLLeaveBalanceRepository(conn),
        payrolls=MySQLPayrollRepository(conn),
        policy=policy_from_settings(settings) if settings is not None else None,
        strict_leave_balance=bool(getattr(settings, "STRICT_LEAVE_BALANCE", False)),
        conn=conn,
    )

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import PaymentMethod, PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal, unique_insert
from .model import Allowances, Deductions, Overtime, PayrollBreakdown, PayrollRecord
from .repository import PayrollRepository

_COLUMNS = """
    payroll_id, employee_id, month, year, basic_salary,
    hra, da, ta, other_allowance, pf, tax, insurance, other_deduction,
    overtime_hours, overtime_rate, overtime_amount, bonus, net_salary,
    status, created_at, paid_at, payment_method, transaction_id
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        basic_salary=to_decimal(r["basic_salary"]),
        allowances=Allowances(
            hra=to_decimal(r["hra"]),
            da=to_decimal(r["da"]),
            ta=to_decimal(r["ta"]),
            other=to_decimal(r["other_allowance"]),
        ),
        deductions=Deductions(
            pf=to_decimal(r["pf"]),
            tax=to_decimal(r["tax"]),
            insurance=to_decimal(r["insurance"]),
            other=to_decimal(r["other_deduction"]),
        ),
        overtime=Overtime(
            hours=to_decimal(r["overtime_hours"]),
            rate=to_decimal(r["overtime_rate"]),
            amount=to_decimal(r["overtime_amount"]),
        ),
        bonus=to_decimal(r["bonus"]),
        net_salary=to_decimal(r["net_salary"]),
        status=PayrollStatus(r["status"]),
        created_at=r["created_at"],
        paid_at=r.get("paid_at"),
        payment_method=PaymentMethod(r["payment_method"]) if r.get("payment_method") else None,
        transaction_id=r.get("transaction_id"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payrolls WHERE employee_id=%s AND month=%s AND year=%s",
                (int(employee_id), int(month), int(year)),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        breakdown: PayrollBreakdown,
        created_at: datetime,
    ) -> int:
        b = breakdown
        with unique_insert("Payroll for this month"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payrolls(
                    employee_id, month, year, basic_salary,
                    hra, da, ta, other_allowance, pf, tax, insurance, other_deduction,
                    overtime_hours, overtime_rate, overtime_amount, bonus, net_salary,
                    status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    int(month),
                    int(year),
                    b.basic_salary,
                    b.allowances.hra,
                    b.allowances.da,
                    b.allowances.ta,
                    b.allowances.other,
                    b.deductions.pf,
                    b.deductions.tax,
                    b.deductions.insurance,
                    b.deductions.other,
                    b.overtime.hours,
                    b.overtime.rate,
                    b.overtime.amount,
                    b.bonus,
                    b.net_salary,
                    PayrollStatus.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def update_status(
        self,
        *,
        payroll_id: int,
        expected: PayrollStatus,
        status: PayrollStatus,
        paid_at: Optional[datetime] = None,
        payment_method: Optional[PaymentMethod] = None,
        transaction_id: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payrolls
                SET status=%s,
                    paid_at=COALESCE(%s, paid_at),
                    payment_method=COALESCE(%s, payment_method),
                    transaction_id=COALESCE(%s, transaction_id)
                WHERE payroll_id=%s AND status=%s
                """,
                (
                    status.value,
                    paid_at,
                    payment_method.value if payment_method else None,
                    transaction_id,
                    int(payroll_id),
                    expected.value,
                ),
            )
            return cur.rowcount > 0

    def list_payrolls(
        self,
        *,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[PayrollRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payrolls {where} ORDER BY year DESC, month DESC, employee_id LIMIT %s",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

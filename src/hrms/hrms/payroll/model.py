from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentMethod, PayrollStatus

ZERO = Decimal("0")


@dataclass(frozen=True)
class Allowances:
    hra: Decimal = ZERO
    da: Decimal = ZERO
    ta: Decimal = ZERO
    other: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.hra + self.da + self.ta + self.other


@dataclass(frozen=True)
class Deductions:
    pf: Decimal = ZERO
    tax: Decimal = ZERO
    insurance: Decimal = ZERO
    other: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.pf + self.tax + self.insurance + self.other


@dataclass(frozen=True)
class Overtime:
    """Overtime for the period; ``rate`` is per hour."""

    hours: Decimal = ZERO
    rate: Decimal = ZERO
    amount: Decimal = ZERO


@dataclass(frozen=True)
class PayrollBreakdown:
    """Calculator output, before it is persisted."""

    basic_salary: Decimal
    allowances: Allowances
    deductions: Deductions
    overtime: Overtime
    bonus: Decimal
    net_salary: Decimal
    total_working_days: int
    overtime_minutes: int


@dataclass(frozen=True)
class PayrollRecord:
    """A payslip: exactly one per (employee, month, year)."""

    payroll_id: int
    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    allowances: Allowances
    deductions: Deductions
    overtime: Overtime
    bonus: Decimal
    net_salary: Decimal
    status: PayrollStatus
    created_at: datetime
    paid_at: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = None

    def to_dict(self) -> dict:
        def money(v: Decimal) -> str:
            return str(v)

        return {
            "payroll_id": self.payroll_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "basic_salary": money(self.basic_salary),
            "allowances": {
                "hra": money(self.allowances.hra),
                "da": money(self.allowances.da),
                "ta": money(self.allowances.ta),
                "other": money(self.allowances.other),
            },
            "deductions": {
                "pf": money(self.deductions.pf),
                "tax": money(self.deductions.tax),
                "insurance": money(self.deductions.insurance),
                "other": money(self.deductions.other),
            },
            "overtime": {
                "hours": money(self.overtime.hours),
                "rate": money(self.overtime.rate),
                "amount": money(self.overtime.amount),
            },
            "bonus": money(self.bonus),
            "net_salary": money(self.net_salary),
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
            "payment_method": self.payment_method.value if self.payment_method else None,
            "transaction_id": self.transaction_id,
        }

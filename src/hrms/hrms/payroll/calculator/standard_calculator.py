from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import days_in_month
from ...core import constants
from ..model import Allowances, Deductions, Overtime, PayrollBreakdown
from .base import PayrollCalculator


def money(value: Decimal) -> Decimal:
    return value.quantize(constants.MONEY_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PayrollPolicy:
    hra_rate: Decimal = constants.HRA_RATE
    da_rate: Decimal = constants.DA_RATE
    travel_allowance: Decimal = constants.TRAVEL_ALLOWANCE
    pf_rate: Decimal = constants.PF_RATE
    tax_rate: Decimal = constants.TAX_RATE
    insurance: Decimal = constants.INSURANCE_PREMIUM
    standard_day_minutes: int = constants.STANDARD_DAY_MINUTES


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: fixed salary structure plus overtime at the basic per-minute rate.

    The per-minute rate divides by every calendar day of the month, not by
    weekdays only.
    """

    def __init__(self, policy: PayrollPolicy | None = None):
        self._policy = policy or PayrollPolicy()

    @property
    def policy(self) -> PayrollPolicy:
        return self._policy

    def calculate(
        self,
        *,
        basic_salary: Decimal,
        month: int,
        year: int,
        attendance: Iterable[AttendanceRecord],
    ) -> PayrollBreakdown:
        p = self._policy
        basic = Decimal(basic_salary)
        total_days = days_in_month(year, month)

        allowances = Allowances(
            hra=money(basic * p.hra_rate),
            da=money(basic * p.da_rate),
            ta=money(p.travel_allowance),
        )
        deductions = Deductions(
            pf=money(basic * p.pf_rate),
            tax=money(basic * p.tax_rate),
            insurance=money(p.insurance),
        )

        overtime_minutes = sum(int(r.overtime_minutes or 0) for r in attendance)
        per_minute = basic / Decimal(total_days * p.standard_day_minutes)
        overtime = Overtime(
            hours=(Decimal(overtime_minutes) / Decimal(60)).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP),
            rate=money(per_minute * 60),
            amount=money(per_minute * overtime_minutes),
        )

        net = basic + allowances.total + overtime.amount - deductions.total
        return PayrollBreakdown(
            basic_salary=money(basic),
            allowances=allowances,
            deductions=deductions,
            overtime=overtime,
            bonus=Decimal("0.00"),
            net_salary=money(net),
            total_working_days=total_days,
            overtime_minutes=overtime_minutes,
        )

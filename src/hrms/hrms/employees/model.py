from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee, as far as payroll and attendance need it.

    Note: plain data object, no DB access. Leave balances live in their own
    ledger (see ``leave.model.LeaveBalance``).
    """

    employee_id: int
    employee_code: str
    first_name: str
    last_name: str
    email: str
    salary: Decimal
    dept_id: Optional[int] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentMethod, PayrollStatus
from .model import PayrollBreakdown, PayrollRecord


class PayrollRepository(Protocol):
    """Storage contract for payslips.

    ``create`` must enforce uniqueness on (employee_id, month, year) and raise
    ``AlreadyExists`` for a second writer.
    """

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        breakdown: PayrollBreakdown,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def list_payrolls(
        self,
        *,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[PayrollRecord]:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.constants import DEFAULT_LEAVE_BALANCE
from ..core.enums import LeaveCategory, RequestStatus


@dataclass(frozen=True)
class LeaveBalance:
    """Ledger of remaining leave days per category for one employee.

    Kept apart from the employee record and changed only through leave
    approval. ``version`` increases on every change.
    """

    employee_id: int
    balances: dict[LeaveCategory, int] = field(default_factory=lambda: dict(DEFAULT_LEAVE_BALANCE))
    version: int = 0

    def available(self, category: LeaveCategory) -> int:
        return int(self.balances.get(category, 0))

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "balances": {c.value: self.available(c) for c in LeaveCategory},
            "version": self.version,
        }


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    category: LeaveCategory
    start_date: date
    end_date: date
    days: int
    reason: str
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "employee_id": self.employee_id,
            "category": self.category.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "days": self.days,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "decided_by": self.decided_by,
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
            "rejection_reason": self.rejection_reason,
        }

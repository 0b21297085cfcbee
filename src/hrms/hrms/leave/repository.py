from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveCategory, RequestStatus
from .model import LeaveBalance, LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        category: LeaveCategory,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        expected: RequestStatus,
        status: RequestStatus,
        decided_by: Optional[int],
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Move ``expected`` -> ``status``; False if the request is no longer ``expected``."""

        raise NotImplementedError


class LeaveBalanceRepository(Protocol):
    def get(self, employee_id: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def create(self, balance: LeaveBalance) -> None:
        """Insert a new ledger; raises ``AlreadyExists`` if one is present."""

        raise NotImplementedError

    def adjust(
        self,
        *,
        employee_id: int,
        category: LeaveCategory,
        delta: int,
        floor: Optional[int] = None,
    ) -> bool:
        """Atomically add ``delta`` to one category.

        With ``floor`` set the change is applied only if the result stays
        ``>= floor``. Returns False when nothing was changed.
        """

        raise NotImplementedError

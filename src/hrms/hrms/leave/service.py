from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import inclusive_days, now_local
from ..common.validators import require_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveCategory, RequestStatus, can_transition
from ..core.exceptions import AlreadyExists, InsufficientBalance, InvalidTransition, NotFound, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveBalanceRepository, LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave requests and the per-employee balance ledger.

    Submission checks the balance but does not reserve it. Approval
    decrements it. By default approval does not re-check the balance, so two
    pending requests approved one after the other may drive it negative.
    ``strict_balance=True`` makes the decrement floor-checked instead.
    """

    def __init__(
        self,
        requests: LeaveRequestRepository,
        balances: LeaveBalanceRepository,
        employees: EmployeeRepository,
        *,
        strict_balance: bool = False,
    ):
        self._requests = requests
        self._balances = balances
        self._employees = employees
        self._strict = bool(strict_balance)

    def open_ledger(self, employee_id: int) -> LeaveBalance:
        """Return the employee's ledger, creating it with default entitlements if missing."""
        existing = self._balances.get(employee_id)
        if existing:
            return existing
        if not self._employees.get_by_id(employee_id):
            raise NotFound("Employee not found")
        try:
            self._balances.create(LeaveBalance(employee_id=employee_id))
        except AlreadyExists:
            pass
        return self.get_balance(employee_id)

    def get_balance(self, employee_id: int) -> LeaveBalance:
        balance = self._balances.get(employee_id)
        if not balance:
            raise NotFound("Leave balance not found")
        return balance

    def submit(
        self,
        *,
        employee_id: int,
        category: LeaveCategory | str,
        start_date: date,
        end_date: date,
        reason: str,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        category = require_enum(LeaveCategory, category, "leave category")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")
        reason = require_non_empty(reason, "Reason")

        days = inclusive_days(start_date, end_date)
        available = self.open_ledger(employee_id).available(category)
        if days > available:
            raise InsufficientBalance(f"Insufficient {category.value} leave balance. Available: {available} days")

        request_id = self._requests.create(
            employee_id=employee_id,
            category=category,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
            created_at=now or now_local(),
        )
        logger.info("leave request %s submitted: employee %s, %d %s day(s)", request_id, employee_id, days, category.value)
        return self._get_request(request_id)

    def approve(self, request_id: int, approver_id: int, *, now: Optional[datetime] = None) -> LeaveRequest:
        req = self._get_request(request_id)
        self._ensure_transition(req, RequestStatus.APPROVED)

        floor = 0 if self._strict else None
        if not self._balances.adjust(employee_id=req.employee_id, category=req.category, delta=-req.days, floor=floor):
            if self._balances.get(req.employee_id) is None:
                raise NotFound("Leave balance not found")
            available = self.get_balance(req.employee_id).available(req.category)
            raise InsufficientBalance(
                f"Insufficient {req.category.value} leave balance. Available: {available} days"
            )

        try:
            decided = self._requests.decide(
                request_id=req.request_id,
                expected=RequestStatus.PENDING,
                status=RequestStatus.APPROVED,
                decided_by=approver_id,
                decided_at=now or now_local(),
            )
        except Exception:
            logger.warning("leave request %s: decision failed, refunding %d day(s)", req.request_id, req.days)
            self._balances.adjust(employee_id=req.employee_id, category=req.category, delta=req.days)
            raise
        if not decided:
            # Someone else decided the request in between; give the days back.
            self._balances.adjust(employee_id=req.employee_id, category=req.category, delta=req.days)
            raise InvalidTransition("Leave request has already been decided")

        logger.info("leave request %s approved by %s", req.request_id, approver_id)
        return self._get_request(req.request_id)

    def reject(
        self,
        request_id: int,
        approver_id: int,
        reason: str = "",
        *,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        req = self._get_request(request_id)
        self._ensure_transition(req, RequestStatus.REJECTED)

        decided = self._requests.decide(
            request_id=req.request_id,
            expected=RequestStatus.PENDING,
            status=RequestStatus.REJECTED,
            decided_by=approver_id,
            decided_at=now or now_local(),
            rejection_reason=(reason or "").strip() or None,
        )
        if not decided:
            raise InvalidTransition("Leave request has already been decided")

        logger.info("leave request %s rejected by %s", req.request_id, approver_id)
        return self._get_request(req.request_id)

    def cancel(self, request_id: int, employee_id: int, *, now: Optional[datetime] = None) -> LeaveRequest:
        """Withdraw a pending request. Balance is not touched."""
        req = self._get_request(request_id)
        if req.employee_id != employee_id:
            raise NotFound("Leave request not found")
        self._ensure_transition(req, RequestStatus.CANCELLED)

        decided = self._requests.decide(
            request_id=req.request_id,
            expected=RequestStatus.PENDING,
            status=RequestStatus.CANCELLED,
            decided_by=employee_id,
            decided_at=now or now_local(),
        )
        if not decided:
            raise InvalidTransition("Leave request has already been decided")
        return self._get_request(req.request_id)

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        return self._requests.list_requests(employee_id=employee_id, status=status, limit=limit)

    def _get_request(self, request_id: int) -> LeaveRequest:
        req = self._requests.get(request_id)
        if not req:
            raise NotFound("Leave request not found")
        return req

    @staticmethod
    def _ensure_transition(req: LeaveRequest, target: RequestStatus) -> None:
        if not can_transition(req.status, target):
            raise InvalidTransition(f"Cannot move leave request from {req.status.value} to {target.value}")

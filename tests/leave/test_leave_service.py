from __future__ import annotations

from datetime import date, datetime

import pytest

from hrms.core.enums import LeaveCategory, RequestStatus
from hrms.core.exceptions import InsufficientBalance, InvalidTransition, NotFound, ValidationError
from hrms.leave.service import LeaveService
from tests.fakes import InMemoryLeaveBalances, InMemoryLeaveRequests

NOW = datetime(2024, 3, 1, 9, 0)


@pytest.fixture
def balances():
    return InMemoryLeaveBalances()


@pytest.fixture
def requests_repo():
    return InMemoryLeaveRequests()


@pytest.fixture
def svc(requests_repo, balances, employees):
    return LeaveService(requests_repo, balances, employees)


def _submit(svc, employee_id=1, category="casual", start=date(2024, 1, 10), end=date(2024, 1, 14)):
    return svc.submit(
        employee_id=employee_id,
        category=category,
        start_date=start,
        end_date=end,
        reason="Family trip",
        now=NOW,
    )


def test_open_ledger_creates_default_entitlements(svc):
    ledger = svc.open_ledger(1)

    assert ledger.available(LeaveCategory.CASUAL) == 12
    assert ledger.available(LeaveCategory.SICK) == 15
    assert ledger.available(LeaveCategory.MATERNITY) == 180
    assert svc.open_ledger(1) == ledger


def test_open_ledger_unknown_employee(svc):
    with pytest.raises(NotFound):
        svc.open_ledger(404)


def test_submit_counts_inclusive_days_and_leaves_balance(svc):
    req = _submit(svc)

    assert req.days == 5
    assert req.status == RequestStatus.PENDING
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 12


def test_submit_over_balance_is_rejected(svc, balances, requests_repo):
    svc.open_ledger(1)
    balances.set(1, LeaveCategory.CASUAL, 3)

    with pytest.raises(InsufficientBalance):
        _submit(svc)
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 3
    assert requests_repo.list_requests() == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"category": "vacation"},
        {"start": date(2024, 1, 14), "end": date(2024, 1, 10)},
    ],
)
def test_submit_validation(svc, kwargs):
    with pytest.raises(ValidationError):
        _submit(svc, **kwargs)


def test_submit_requires_reason(svc):
    with pytest.raises(ValidationError):
        svc.submit(
            employee_id=1,
            category="sick",
            start_date=date(2024, 1, 10),
            end_date=date(2024, 1, 10),
            reason="   ",
        )


def test_approve_decrements_balance(svc):
    req = _submit(svc)

    approved = svc.approve(req.request_id, approver_id=2, now=NOW)

    assert approved.status == RequestStatus.APPROVED
    assert approved.decided_by == 2
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 7


def test_approve_twice_is_invalid_and_charges_once(svc):
    req = _submit(svc)
    svc.approve(req.request_id, approver_id=2)

    with pytest.raises(InvalidTransition):
        svc.approve(req.request_id, approver_id=2)
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 7


def test_reject_leaves_balance_untouched(svc):
    req = _submit(svc)

    rejected = svc.reject(req.request_id, approver_id=2, reason=" overlaps release ")

    assert rejected.status == RequestStatus.REJECTED
    assert rejected.rejection_reason == "overlaps release"
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 12
    with pytest.raises(InvalidTransition):
        svc.approve(req.request_id, approver_id=2)


def test_pending_requests_can_overdraw_without_strict_mode(svc):
    first = _submit(svc, start=date(2024, 1, 1), end=date(2024, 1, 8))
    second = _submit(svc, start=date(2024, 2, 1), end=date(2024, 2, 8))

    svc.approve(first.request_id, approver_id=2)
    svc.approve(second.request_id, approver_id=2)

    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == -4


def test_strict_mode_refuses_overdraw(requests_repo, balances, employees):
    svc = LeaveService(requests_repo, balances, employees, strict_balance=True)
    first = _submit(svc, start=date(2024, 1, 1), end=date(2024, 1, 8))
    second = _submit(svc, start=date(2024, 2, 1), end=date(2024, 2, 8))
    svc.approve(first.request_id, approver_id=2)

    with pytest.raises(InsufficientBalance):
        svc.approve(second.request_id, approver_id=2)
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 4
    assert requests_repo.get(second.request_id).status == RequestStatus.PENDING


def test_cancel_by_owner_only(svc):
    req = _submit(svc)

    with pytest.raises(NotFound):
        svc.cancel(req.request_id, employee_id=2)

    cancelled = svc.cancel(req.request_id, employee_id=1)
    assert cancelled.status == RequestStatus.CANCELLED
    with pytest.raises(InvalidTransition):
        svc.reject(req.request_id, approver_id=2)


def test_unknown_request(svc):
    with pytest.raises(NotFound):
        svc.approve(999, approver_id=2)


def test_list_requests_by_status(svc):
    a = _submit(svc)
    b = _submit(svc, category="sick")
    svc.approve(a.request_id, approver_id=2)

    pending = svc.list_requests(status=RequestStatus.PENDING)

    assert [r.request_id for r in pending] == [b.request_id]


class _DropsFirstDecision(InMemoryLeaveRequests):
    def __init__(self):
        super().__init__()
        self.failures = 1

    def decide(self, **kwargs) -> bool:
        if self.failures:
            self.failures -= 1
            raise ConnectionError("lost connection")
        return super().decide(**kwargs)


class _DecidedElsewhere(InMemoryLeaveRequests):
    def decide(self, **kwargs) -> bool:
        super().decide(**{**kwargs, "status": RequestStatus.REJECTED})
        return super().decide(**kwargs)


def test_failed_decision_refunds_and_retry_charges_once(balances, employees):
    requests_repo = _DropsFirstDecision()
    svc = LeaveService(requests_repo, balances, employees)
    req = _submit(svc)

    with pytest.raises(ConnectionError):
        svc.approve(req.request_id, approver_id=2)
    assert requests_repo.get(req.request_id).status == RequestStatus.PENDING
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 12

    svc.approve(req.request_id, approver_id=2)
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 7


def test_approve_losing_race_refunds_days(balances, employees):
    svc = LeaveService(_DecidedElsewhere(), balances, employees)
    req = _submit(svc)

    with pytest.raises(InvalidTransition):
        svc.approve(req.request_id, approver_id=2)
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 12


def test_cancelling_approved_leave_fails(svc):
    req = _submit(svc)
    svc.approve(req.request_id, approver_id=2)

    with pytest.raises(InvalidTransition):
        svc.cancel(req.request_id, employee_id=1)
    assert svc.get_balance(1).available(LeaveCategory.CASUAL) == 7

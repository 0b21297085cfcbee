from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored on an attendance row."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"
    LEAVE = "leave"

    @property
    def counts_as_present(self) -> bool:
        return self in {AttendanceStatus.PRESENT, AttendanceStatus.LATE}


class LeaveCategory(str, Enum):
    CASUAL = "casual"
    SICK = "sick"
    ANNUAL = "annual"
    MATERNITY = "maternity"
    PATERNITY = "paternity"


class RequestStatus(str, Enum):
    """Leave request workflow state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"
    CASH = "cash"


# Allowed moves; anything missing from a set is rejected.
REQUEST_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED, RequestStatus.CANCELLED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
}

PAYROLL_TRANSITIONS: dict[PayrollStatus, frozenset[PayrollStatus]] = {
    PayrollStatus.PENDING: frozenset({PayrollStatus.PROCESSED, PayrollStatus.PAID, PayrollStatus.CANCELLED}),
    PayrollStatus.PROCESSED: frozenset({PayrollStatus.PAID, PayrollStatus.CANCELLED}),
    PayrollStatus.PAID: frozenset(),
    PayrollStatus.CANCELLED: frozenset(),
}


def can_transition(current: Enum, target: Enum) -> bool:
    if isinstance(current, RequestStatus):
        return target in REQUEST_TRANSITIONS[current]
    if isinstance(current, PayrollStatus):
        return target in PAYROLL_TRANSITIONS[current]
    raise TypeError(f"No transition table for {type(current).__name__}")

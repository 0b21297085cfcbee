from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ..model import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after work start (plus grace)."""

    def decide_checkin(self, *, now: datetime, today: date, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.LATE,
            note=f"Checked in after {policy.work_start.strftime('%H:%M')}",
        )

    def decide_checkout(self, *, working_minutes: int, policy: AttendancePolicy, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)

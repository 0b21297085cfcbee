from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ..model import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Check-out with fewer minutes than the configured half-day threshold."""

    def decide_checkin(self, *, now: datetime, today: date, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, working_minutes: int, policy: AttendancePolicy, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            note=f"Worked {working_minutes} min (< {policy.half_day_threshold_minutes})",
        )

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .model import AttendancePolicy
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, today: date, policy: AttendancePolicy) -> AttendanceStrategy:
        threshold = datetime.combine(today, policy.work_start) + timedelta(minutes=policy.late_grace_minutes)
        if now > threshold:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, working_minutes: int, policy: AttendancePolicy) -> AttendanceStrategy:
        threshold = policy.half_day_threshold_minutes
        if threshold is not None and working_minutes < threshold:
            return HalfDayStrategy()
        return NormalStrategy()

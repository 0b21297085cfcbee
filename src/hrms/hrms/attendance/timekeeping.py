from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import minutes_between
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class WorkedTime:
    working_minutes: int
    overtime_minutes: int


def derive_worked_time(check_in: datetime, check_out: datetime, *, standard_day_minutes: int) -> WorkedTime:
    """Minutes between the punches, and the part beyond a standard day."""
    if check_out < check_in:
        raise ValidationError("Check-out cannot be earlier than check-in")
    working = minutes_between(check_in, check_out)
    return WorkedTime(working_minutes=working, overtime_minutes=max(0, working - standard_day_minutes))

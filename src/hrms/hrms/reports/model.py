from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceSummary:
    employee_id: int
    start: date
    end: date
    present: int
    absent: int
    late: int
    rate: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["start"] = self.start.isoformat()
        data["end"] = self.end.isoformat()
        return data


@dataclass(frozen=True)
class EmployeeAttendanceReport:
    """One line of the per-employee attendance report."""

    employee_id: int
    employee_name: str
    total_days: int
    present_days: int
    absent_days: int
    late_days: int
    total_working_minutes: int
    total_overtime_minutes: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return asdict(self)

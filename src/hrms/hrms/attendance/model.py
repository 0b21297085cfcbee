from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional

from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_WORK_START, STANDARD_DAY_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidLocation


@dataclass(frozen=True)
class GeoLocation:
    """GeoJSON-style point: coordinates are (longitude, latitude)."""

    coordinates: tuple[float, float]
    type: str = "Point"

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    @classmethod
    def parse(cls, raw: Any) -> "GeoLocation":
        """Build from a mapping like ``{"type": "Point", "coordinates": [lng, lat]}``."""
        if isinstance(raw, GeoLocation):
            return raw
        if not isinstance(raw, dict):
            raise InvalidLocation("Location is required (type & coordinates)")

        coords = raw.get("coordinates")
        if not isinstance(coords, (list, tuple)) or len(coords) != 2:
            raise InvalidLocation("Location must carry a [longitude, latitude] pair")
        if any(isinstance(c, bool) for c in coords):
            raise InvalidLocation("Location coordinates must be numeric")
        try:
            lng, lat = (float(c) for c in coords)
        except (TypeError, ValueError):
            raise InvalidLocation("Location coordinates must be numeric")
        if not (-180.0 <= lng <= 180.0 and -90.0 <= lat <= 90.0):
            raise InvalidLocation("Location coordinates out of range")

        return cls(coordinates=(lng, lat), type=str(raw.get("type") or "Point"))

    def to_dict(self) -> dict:
        return {"type": self.type, "coordinates": [self.longitude, self.latitude]}


@dataclass(frozen=True)
class Punch:
    """A check-in or check-out event."""

    timestamp: datetime
    location: Optional[GeoLocation] = None

    def to_dict(self) -> dict:
        return {
            "time": self.timestamp.isoformat(),
            "location": self.location.to_dict() if self.location else None,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per (employee, work_date)."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[Punch]
    check_out: Optional[Punch]
    status: AttendanceStatus
    working_minutes: int = 0
    overtime_minutes: int = 0
    notes: Optional[str] = None

    @property
    def is_checked_in(self) -> bool:
        return self.check_in is not None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out is not None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "check_in": self.check_in.to_dict() if self.check_in else None,
            "check_out": self.check_out.to_dict() if self.check_out else None,
            "status": self.status.value,
            "working_minutes": self.working_minutes,
            "overtime_minutes": self.overtime_minutes,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendancePolicy:
    """Company thresholds used when deriving status and minutes."""

    work_start: time = DEFAULT_WORK_START
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    standard_day_minutes: int = STANDARD_DAY_MINUTES
    half_day_threshold_minutes: Optional[int] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports (joined with employee data)."""

    employee_id: int
    full_name: str
    employee_code: str
    dept_id: Optional[int]
    work_date: date
    status: AttendanceStatus
    working_minutes: int = 0
    overtime_minutes: int = 0

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable

from ...attendance.model import AttendanceRecord
from ..model import PayrollBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        basic_salary: Decimal,
        month: int,
        year: int,
        attendance: Iterable[AttendanceRecord],
    ) -> PayrollBreakdown:
        raise NotImplementedError

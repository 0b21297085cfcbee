from __future__ import annotations

from datetime import datetime

import pytest

from hrms.container import build_services
from hrms.main import create_app
from tests.fakes import (
    InMemoryAttendance,
    InMemoryEmployees,
    InMemoryLeaveBalances,
    InMemoryLeaveRequests,
    InMemoryPayrolls,
    make_employee,
)

GEO = {"type": "Point", "coordinates": [77.5946, 12.9716]}


@pytest.fixture
def fixed_now() -> datetime:
    # A Wednesday, before the default 09:00 start.
    return datetime(2024, 3, 6, 8, 50, 0)


@pytest.fixture
def location() -> dict:
    return dict(GEO)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees([make_employee(1), make_employee(2, salary="30000")])


@pytest.fixture
def attendance_repo(employees) -> InMemoryAttendance:
    return InMemoryAttendance(employees)


@pytest.fixture
def container(employees, attendance_repo):
    return build_services(
        employees=employees,
        attendance=attendance_repo,
        leave_requests=InMemoryLeaveRequests(),
        leave_balances=InMemoryLeaveBalances(),
        payrolls=InMemoryPayrolls(),
    )


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_insert
from .model import AttendanceRecord, AttendanceReportRow, GeoLocation, Punch
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date,
    check_in_time, check_in_lng, check_in_lat,
    check_out_time, check_out_lng, check_out_lat,
    status, working_minutes, overtime_minutes, notes
"""


def _coords(location: Optional[GeoLocation]) -> tuple[Optional[float], Optional[float]]:
    if location is None:
        return None, None
    return location.longitude, location.latitude


def _punch(r: dict, prefix: str) -> Optional[Punch]:
    ts = r.get(f"{prefix}_time")
    if ts is None:
        return None
    lng, lat = r.get(f"{prefix}_lng"), r.get(f"{prefix}_lat")
    location = GeoLocation(coordinates=(float(lng), float(lat))) if lng is not None and lat is not None else None
    return Punch(timestamp=ts, location=location)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=_punch(r, "check_in"),
        check_out=_punch(r, "check_out"),
        status=AttendanceStatus(r["status"]),
        working_minutes=int(r.get("working_minutes") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        location: Optional[GeoLocation],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> int:
        lng, lat = _coords(location)
        with unique_insert("Attendance record"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in_time, check_in_lng, check_in_lat, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, check_in_time, lng, lat, status.value, notes),
            )
            return int(cur.lastrowid)

    def set_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        location: Optional[GeoLocation],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        lng, lat = _coords(location)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_in_lng=%s, check_in_lat=%s, status=%s, notes=COALESCE(%s, notes)
                WHERE attendance_id=%s AND check_in_time IS NULL
                """,
                (check_in_time, lng, lat, status.value, notes, int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        location: Optional[GeoLocation],
        status: AttendanceStatus,
        working_minutes: int,
        overtime_minutes: int,
        notes: Optional[str] = None,
    ) -> bool:
        lng, lat = _coords(location)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, check_out_lng=%s, check_out_lat=%s,
                    status=%s, working_minutes=%s, overtime_minutes=%s, notes=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (
                    check_out_time,
                    lng,
                    lat,
                    status.value,
                    int(working_minutes),
                    int(overtime_minutes),
                    notes,
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        dept_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if dept_id is not None:
            clauses.append("e.dept_id=%s")
            params.append(int(dept_id))
        if employee_id is not None:
            clauses.append("e.employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    e.employee_id, CONCAT(e.first_name, ' ', e.last_name) AS full_name,
                    e.employee_code, e.dept_id,
                    ar.work_date, ar.status, ar.working_minutes, ar.overtime_minutes
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                WHERE {where}
                ORDER BY ar.work_date DESC, e.employee_id ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    employee_id=int(r["employee_id"]),
                    full_name=r["full_name"],
                    employee_code=r["employee_code"],
                    dept_id=r.get("dept_id"),
                    work_date=r["work_date"],
                    status=AttendanceStatus(r["status"]),
                    working_minutes=int(r.get("working_minutes") or 0),
                    overtime_minutes=int(r.get("overtime_minutes") or 0),
                )
                for r in fetchall(cur)
            ]

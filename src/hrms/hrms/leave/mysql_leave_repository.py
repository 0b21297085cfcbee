from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveCategory, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_insert
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveBalanceRepository, LeaveRequestRepository

_REQUEST_COLUMNS = """
    request_id, employee_id, category, start_date, end_date, days, reason,
    status, created_at, decided_by, decided_at, rejection_reason
"""

# Column names come from this whitelist only, never from caller input.
_CATEGORY_COLUMNS = {c: c.value for c in LeaveCategory}


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        category=LeaveCategory(r["category"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days=int(r["days"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        category: LeaveCategory,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, category, start_date, end_date, days, reason, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    category.value,
                    start_date,
                    end_date,
                    int(days),
                    reason,
                    RequestStatus.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REQUEST_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            row = fetchone(cur)
            return _to_request(row) if row else None

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_REQUEST_COLUMNS}
                FROM leave_requests
                {where}
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        expected: RequestStatus,
        status: RequestStatus,
        decided_by: Optional[int],
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=%s, rejection_reason=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, decided_by, decided_at, rejection_reason, int(request_id), expected.value),
            )
            return cur.rowcount > 0


class MySQLLeaveBalanceRepository(LeaveBalanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int) -> Optional[LeaveBalance]:
        cols = ", ".join(_CATEGORY_COLUMNS.values())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT employee_id, {cols}, version FROM leave_balances WHERE employee_id=%s",
                (int(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return LeaveBalance(
                employee_id=int(row["employee_id"]),
                balances={c: int(row[col]) for c, col in _CATEGORY_COLUMNS.items()},
                version=int(row["version"]),
            )

    def create(self, balance: LeaveBalance) -> None:
        cols = ", ".join(_CATEGORY_COLUMNS.values())
        placeholders = ", ".join(["%s"] * len(_CATEGORY_COLUMNS))
        values = [balance.available(c) for c in _CATEGORY_COLUMNS]
        with unique_insert("Leave balance"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO leave_balances(employee_id, {cols}, version) VALUES(%s, {placeholders}, %s)",
                (int(balance.employee_id), *values, int(balance.version)),
            )

    def adjust(
        self,
        *,
        employee_id: int,
        category: LeaveCategory,
        delta: int,
        floor: Optional[int] = None,
    ) -> bool:
        col = _CATEGORY_COLUMNS[LeaveCategory(category)]
        sql = f"UPDATE leave_balances SET {col} = {col} + %s, version = version + 1 WHERE employee_id=%s"
        params: list[object] = [int(delta), int(employee_id)]
        if floor is not None:
            sql += f" AND {col} + %s >= %s"
            params.extend([int(delta), int(floor)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return cur.rowcount > 0

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import ExceptionType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_mysql_datetime, range_clauses, to_mysql_datetime
from .model import ExceptionRequest, LeaveBalance, LeaveRequest
from .repository import RequestRepository

_EXCEPTION_COLUMNS = """
    request_id, employee_id, attendance_id, work_date, exception_type,
    proposed_clock_in, proposed_clock_out, reason, status, created_at,
    decided_by, decided_at, admin_comment
"""

_LEAVE_COLUMNS = """
    request_id, employee_id, start_date, end_date, leave_type, reason,
    status, created_at, decided_by, decided_at, admin_comment
"""

_BALANCE_COLUMNS = "balance_id, employee_id, leave_type, year, allocated_days, used_days"


def _to_exception(r: dict) -> ExceptionRequest:
    return ExceptionRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        attendance_id=int(r["attendance_id"]) if r.get("attendance_id") else None,
        work_date=r["work_date"],
        exception_type=ExceptionType(r["exception_type"]),
        proposed_clock_in=from_mysql_datetime(r.get("proposed_clock_in")),
        proposed_clock_out=from_mysql_datetime(r.get("proposed_clock_out")),
        reason=r.get("reason") or "",
        status=RequestStatus(r["status"]),
        created_at=from_mysql_datetime(r["created_at"]),
        decided_by=int(r["decided_by"]) if r.get("decided_by") else None,
        decided_at=from_mysql_datetime(r.get("decided_at")),
        admin_comment=r.get("admin_comment"),
    )


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_type=r["leave_type"],
        reason=r.get("reason"),
        status=RequestStatus(r["status"]),
        created_at=from_mysql_datetime(r["created_at"]),
        decided_by=int(r["decided_by"]) if r.get("decided_by") else None,
        decided_at=from_mysql_datetime(r.get("decided_at")),
        admin_comment=r.get("admin_comment"),
    )


def _to_balance(r: dict) -> LeaveBalance:
    return LeaveBalance(
        balance_id=int(r["balance_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=r["leave_type"],
        year=int(r["year"]),
        allocated_days=int(r["allocated_days"]),
        used_days=int(r["used_days"]),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Exception requests --------
    def create_exception(
        self,
        *,
        employee_id: int,
        work_date: date,
        exception_type: ExceptionType,
        proposed_clock_in: Optional[datetime],
        proposed_clock_out: Optional[datetime],
        reason: str,
        attendance_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_exceptions(
                    employee_id, attendance_id, work_date, exception_type,
                    proposed_clock_in, proposed_clock_out, reason, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    attendance_id,
                    work_date,
                    exception_type.value,
                    to_mysql_datetime(proposed_clock_in),
                    to_mysql_datetime(proposed_clock_out),
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_exception(self, *, request_id: int) -> Optional[ExceptionRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EXCEPTION_COLUMNS} FROM attendance_exceptions WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_exception(r) if r else None

    def list_exceptions(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 500,
    ) -> Sequence[ExceptionRequest]:
        clauses, params = range_clauses("work_date", start, end)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses) or "1=1"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EXCEPTION_COLUMNS}
                FROM attendance_exceptions
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_exception(r) for r in fetchall(cur)]

    def decide_exception(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_comment: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_exceptions
                SET status=%s, decided_by=%s, decided_at=UTC_TIMESTAMP(), admin_comment=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(decided_by),
                    admin_comment,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    # -------- Leave requests --------
    def create_leave(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        leave_type: str,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, start_date, end_date, leave_type, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), start_date, end_date, leave_type, reason, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_LEAVE_COLUMNS} FROM leave_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_leaves(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        # Overlap with [start, end]
        if end is not None:
            clauses.append("start_date <= %s")
            params.append(end)
        if start is not None:
            clauses.append("end_date >= %s")
            params.append(start)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_LEAVE_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_comment: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=UTC_TIMESTAMP(), admin_comment=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(decided_by),
                    admin_comment,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    # -------- Leave balances --------
    def get_balance(self, *, employee_id: int, leave_type: str, year: int) -> Optional[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BALANCE_COLUMNS}
                FROM leave_balances
                WHERE employee_id=%s AND leave_type=%s AND year=%s
                """,
                (int(employee_id), leave_type, int(year)),
            )
            r = fetchone(cur)
            return _to_balance(r) if r else None

    def list_balances(self, *, employee_id: int, year: int) -> Sequence[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BALANCE_COLUMNS}
                FROM leave_balances
                WHERE employee_id=%s AND year=%s
                ORDER BY leave_type
                """,
                (int(employee_id), int(year)),
            )
            return [_to_balance(r) for r in fetchall(cur)]

    def upsert_allocation(self, *, employee_id: int, leave_type: str, year: int, allocated_days: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_balances(employee_id, leave_type, year, allocated_days)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE allocated_days=VALUES(allocated_days)
                """,
                (int(employee_id), leave_type, int(year), int(allocated_days)),
            )
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT balance_id FROM leave_balances WHERE employee_id=%s AND leave_type=%s AND year=%s",
                (int(employee_id), leave_type, int(year)),
            )
            r = fetchone(cur)
            return int(r["balance_id"]) if r else 0

    def add_used_days(self, *, employee_id: int, leave_type: str, year: int, days: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_balances
                SET used_days = used_days + %s
                WHERE employee_id=%s AND leave_type=%s AND year=%s
                  AND allocated_days - used_days >= %s
                """,
                (int(days), int(employee_id), leave_type, int(year), int(days)),
            )
            return cur.rowcount > 0

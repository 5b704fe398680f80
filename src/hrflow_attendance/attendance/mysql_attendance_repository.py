from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_mysql_datetime,
    range_clauses,
    to_mysql_datetime,
)
from .model import AttendanceDay
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, clock_in_time, clock_out_time, total_hours, status, is_remote, notes"


def _to_day(r: dict) -> AttendanceDay:
    return AttendanceDay(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        clock_in=from_mysql_datetime(r.get("clock_in_time")),
        clock_out=from_mysql_datetime(r.get("clock_out_time")),
        total_hours=float(r["total_hours"]) if r.get("total_hours") is not None else None,
        recorded_status=r.get("status"),
        is_remote=bool(r.get("is_remote")),
        note=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_day(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_day(r) if r else None

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceDay]:
        clauses, params = range_clauses("work_date", start, end)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses) or "1=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE {where} ORDER BY work_date ASC, employee_id ASC",
                tuple(params),
            )
            return [_to_day(r) for r in fetchall(cur)]

    def create_clock_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        clock_in: datetime,
        recorded_status: str,
        is_remote: bool = False,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, work_date, clock_in_time, status, is_remote, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, to_mysql_datetime(clock_in), recorded_status, int(is_remote), note),
            )
            return int(cur.lastrowid)

    def update_clock_out(self, *, attendance_id: int, clock_out: datetime, total_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET clock_out_time=%s, total_hours=%s
                WHERE attendance_id=%s AND clock_out_time IS NULL
                """,
                (to_mysql_datetime(clock_out), round(float(total_hours), 4), int(attendance_id)),
            )
            return cur.rowcount > 0

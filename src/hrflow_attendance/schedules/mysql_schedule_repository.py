from __future__ import annotations

from datetime import time
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkSchedule
from .repository import ScheduleRepository

_COLUMNS = "schedule_id, employee_id, start_time, end_time, working_days, minimum_daily_hours, is_active"


def _to_schedule(r: dict) -> WorkSchedule:
    days = [d.strip() for d in (r.get("working_days") or "").split(",") if d.strip()]
    return WorkSchedule(
        schedule_id=int(r["schedule_id"]),
        employee_id=int(r["employee_id"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        working_days=frozenset(days),
        minimum_daily_hours=float(r["minimum_daily_hours"]),
        is_active=bool(r["is_active"]),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_employee(self, employee_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_schedules WHERE employee_id=%s AND is_active=1",
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def list_active(self) -> Sequence[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_schedules WHERE is_active=1")
            return [_to_schedule(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        employee_id: int,
        start_time: time,
        end_time: time,
        working_days: Iterable[str],
        minimum_daily_hours: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_schedules(employee_id, start_time, end_time, working_days, minimum_daily_hours, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time),
                    working_days=VALUES(working_days),
                    minimum_daily_hours=VALUES(minimum_daily_hours),
                    is_active=1
                """,
                (int(employee_id), start_time, end_time, ",".join(working_days), float(minimum_daily_hours)),
            )

            # If it was an update, lastrowid can be 0; fetch schedule_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute("SELECT schedule_id FROM work_schedules WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return int(r["schedule_id"]) if r else 0

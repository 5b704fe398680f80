from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import FullEmployeeRecord
from .repository import EmployeeRepository

_COLUMNS = "employee_id, full_name, email, phone, department, position, manager_id, hire_date, status"


def _to_record(r: dict) -> FullEmployeeRecord:
    return FullEmployeeRecord(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        email=r["email"],
        phone=r.get("phone"),
        department=r.get("department"),
        position=r.get("position"),
        manager_id=int(r["manager_id"]) if r.get("manager_id") else None,
        hire_date=r.get("hire_date"),
        status=r.get("status") or "active",
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[FullEmployeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_active(self) -> Sequence[FullEmployeeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE status='active' ORDER BY employee_id ASC")
            return [_to_record(r) for r in fetchall(cur)]

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceDay]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[AttendanceDay]:
        """Rows with start <= work_date <= end, optionally for one employee."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update_clock_out(self, *, attendance_id: int, clock_out: datetime, total_hours: float) -> bool:
        raise NotImplementedError

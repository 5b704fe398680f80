from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..common.timezone import RegionalClock
from ..common.validators import optional_text
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import DayStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceDay
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in/clock-out lifecycle of an AttendanceDay."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Optional[RegionalClock] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock or RegionalClock()

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

    def clock_in(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        is_remote: bool = False,
        note: Optional[str] = None,
    ) -> AttendanceDay:
        instant = self._clock.parse_instant(now or self._clock.now())
        today = self._clock.regional_date(instant)

        self._require_employee(employee_id)

        existing = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if existing:
            raise ValidationError("Already clocked in today")

        note = optional_text(note)
        attendance_id = self._attendance.create_clock_in(
            employee_id=int(employee_id),
            work_date=today,
            clock_in=instant,
            recorded_status=DayStatus.PRESENT.value,
            is_remote=bool(is_remote),
            note=note,
        )
        logger.info(
            "Clock-in recorded",
            extra={"employee_id": int(employee_id), "work_date": today.isoformat(), "attendance_id": attendance_id},
        )
        return AttendanceDay(
            employee_id=int(employee_id),
            work_date=today,
            clock_in=instant,
            recorded_status=DayStatus.PRESENT.value,
            is_remote=bool(is_remote),
            note=note,
            attendance_id=attendance_id,
        )

    def clock_out(self, employee_id: int, *, now: Optional[datetime] = None) -> AttendanceDay:
        instant = self._clock.parse_instant(now or self._clock.now())
        today = self._clock.regional_date(instant)

        record = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if not record or record.clock_in is None:
            raise ValidationError("No clock-in record found for today")
        if record.clock_out is not None:
            raise ValidationError("Already clocked out today")
        if instant < record.clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        total_hours = hours_between(record.clock_in, instant)
        if not self._attendance.update_clock_out(
            attendance_id=int(record.attendance_id),
            clock_out=instant,
            total_hours=total_hours,
        ):
            raise ValidationError("Failed to record clock-out")

        logger.info(
            "Clock-out recorded",
            extra={"employee_id": int(employee_id), "work_date": today.isoformat(), "total_hours": round(total_hours, 2)},
        )
        return replace(record, clock_out=instant, total_hours=total_hours)

    def get_history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_employee(int(employee_id), int(limit))
        return [self._to_row(r) for r in rows]

    def _fmt(self, instant: Optional[datetime]) -> str:
        if instant is None:
            return "--:--"
        return self._clock.to_regional(instant).strftime("%H:%M")

    def _to_row(self, r: AttendanceDay) -> dict:
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "clock_in": self._fmt(r.clock_in),
            "clock_out": self._fmt(r.clock_out),
            "total_hours": round(r.total_hours, 2) if r.total_hours is not None else None,
            "status": r.recorded_status or "",
            "is_remote": r.is_remote,
            "note": r.note or "",
        }

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayStatus
from ..core.exceptions import DomainError, ValidationError


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one employee on one regional calendar date.

    clock_in/clock_out are aware UTC instants. leave_type and corrected_by are
    only set on snapshots produced by the request overlay.
    """

    employee_id: int
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    recorded_status: Optional[str] = None
    is_remote: bool = False
    note: Optional[str] = None
    attendance_id: Optional[int] = None
    total_hours: Optional[float] = None
    leave_type: Optional[str] = None
    corrected_by: Optional[int] = None

    def __post_init__(self):
        if self.clock_in and self.clock_out and self.clock_out < self.clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None

    @property
    def on_leave(self) -> bool:
        return self.leave_type is not None


@dataclass(frozen=True)
class DayClassification:
    """Derived (not persisted) outcome of classifying one AttendanceDay."""

    work_date: date
    status: DayStatus
    lateness_minutes: int = 0
    earliness_minutes: int = 0
    total_hours: Optional[float] = None

    @property
    def is_worked(self) -> bool:
        return self.status in (DayStatus.PRESENT, DayStatus.LATE)

    @property
    def is_incomplete(self) -> bool:
        """Clocked in but not out yet: in progress, not a failure."""
        return self.is_worked and self.total_hours is None

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "lateness_minutes": self.lateness_minutes,
            "earliness_minutes": self.earliness_minutes,
            "total_hours": self.total_hours,
            "incomplete": self.is_incomplete,
        }


@dataclass(frozen=True)
class DayFailure:
    """A day whose classification raised; reported next to the good days."""

    work_date: date
    error: DomainError

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "error": type(self.error).__name__,
            "message": str(self.error),
        }

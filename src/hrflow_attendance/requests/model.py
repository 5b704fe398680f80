from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ExceptionType, RequestStatus


@dataclass(frozen=True)
class ExceptionRequest:
    """Correction proposal for one employee-day.

    proposed_clock_in/out are aware UTC instants.
    """

    request_id: int
    employee_id: int
    work_date: date
    exception_type: ExceptionType
    reason: str
    status: RequestStatus
    created_at: datetime
    proposed_clock_in: Optional[datetime] = None
    proposed_clock_out: Optional[datetime] = None
    attendance_id: Optional[int] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_comment: Optional[str] = None

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    start_date: date
    end_date: date
    leave_type: str
    status: RequestStatus
    created_at: datetime
    reason: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_comment: Optional[str] = None

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @property
    def total_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def days_by_year(self) -> dict[int, int]:
        """Calendar days of the leave, split by the year they fall in."""
        out: dict[int, int] = {}
        for year in range(self.start_date.year, self.end_date.year + 1):
            first = max(self.start_date, date(year, 1, 1))
            last = min(self.end_date, date(year, 12, 31))
            out[year] = (last - first).days + 1
        return out


@dataclass(frozen=True)
class LeaveBalance:
    """Yearly entitlement for one employee and leave type."""

    employee_id: int
    leave_type: str
    year: int
    allocated_days: int
    used_days: int = 0
    balance_id: Optional[int] = None

    @property
    def remaining_days(self) -> int:
        return self.allocated_days - self.used_days

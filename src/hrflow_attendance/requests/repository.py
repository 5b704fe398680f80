from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ExceptionType, RequestStatus
from .model import ExceptionRequest, LeaveBalance, LeaveRequest


class RequestRepository(Protocol):
    # Exception requests
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
        raise NotImplementedError

    def get_exception(self, *, request_id: int) -> Optional[ExceptionRequest]:
        raise NotImplementedError

    def list_exceptions(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 500,
    ) -> Sequence[ExceptionRequest]:
        raise NotImplementedError

    def decide_exception(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_comment: Optional[str] = None,
    ) -> bool:
        """Only transitions a pending request; returns False otherwise."""

        raise NotImplementedError

    # Leave requests
    def create_leave(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        leave_type: str,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        """Leaves overlapping [start, end]."""

        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_comment: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    # Leave balances
    def get_balance(self, *, employee_id: int, leave_type: str, year: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def list_balances(self, *, employee_id: int, year: int) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def upsert_allocation(self, *, employee_id: int, leave_type: str, year: int, allocated_days: int) -> int:
        """Sets allocated_days, keeping used_days; returns the balance id."""

        raise NotImplementedError

    def add_used_days(self, *, employee_id: int, leave_type: str, year: int, days: int) -> bool:
        """Only succeeds while the balance still covers the days."""

        raise NotImplementedError

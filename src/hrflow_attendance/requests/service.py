from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence, Union

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_hhmm
from ..common.timezone import RegionalClock
from ..common.validators import optional_text, require_non_empty, require_positive_id
from ..core.enums import ExceptionType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Capability, has_capability
from .model import ExceptionRequest, LeaveBalance, LeaveRequest
from .overlay import apply_exception, blank_day
from .repository import RequestRepository

logger = logging.getLogger(__name__)

TimeInput = Union[str, time, None]


class RequestService:
    """Submission and the one-time approve/reject decision for requests."""

    def __init__(
        self,
        requests: RequestRepository,
        attendance: AttendanceRepository,
        *,
        clock: Optional[RegionalClock] = None,
    ):
        self._requests = requests
        self._attendance = attendance
        self._clock = clock or RegionalClock()

    @staticmethod
    def _require_approver(current_role: Role) -> None:
        if not has_capability(current_role, Capability.APPROVE_REQUESTS):
            raise AuthorizationError("You are not allowed to decide requests")

    def _to_instant(self, work_date: date, value: TimeInput) -> Optional[datetime]:
        t = value if isinstance(value, time) else parse_hhmm(value)
        if t is None:
            return None
        return self._clock.combine(work_date, t)

    @staticmethod
    def _parse_type(value: Union[str, ExceptionType]) -> ExceptionType:
        try:
            return ExceptionType(value)
        except ValueError:
            raise ValidationError(f"Unknown exception type: {value!r}")

    def submit_exception(
        self,
        *,
        employee_id: int,
        work_date: date,
        exception_type: Union[str, ExceptionType],
        reason: str,
        proposed_clock_in: TimeInput = None,
        proposed_clock_out: TimeInput = None,
    ) -> int:
        kind = self._parse_type(exception_type)
        reason = require_non_empty(reason, "Reason")

        clock_in = self._to_instant(work_date, proposed_clock_in)
        clock_out = self._to_instant(work_date, proposed_clock_out)

        if kind.corrects_clock_in and clock_in is None:
            raise ValidationError("Proposed clock-in time is required for this exception type")
        if kind.corrects_clock_out and clock_out is None:
            raise ValidationError("Proposed clock-out time is required for this exception type")
        if clock_in and clock_out and clock_out < clock_in:
            raise ValidationError("Proposed clock-out cannot be earlier than proposed clock-in")

        record = self._attendance.get_for_employee_and_date(int(employee_id), work_date)
        request_id = self._requests.create_exception(
            employee_id=int(employee_id),
            work_date=work_date,
            exception_type=kind,
            proposed_clock_in=clock_in if kind.corrects_clock_in else None,
            proposed_clock_out=clock_out if kind.corrects_clock_out else None,
            reason=reason,
            attendance_id=record.attendance_id if record else None,
        )
        logger.info(
            "Exception request submitted",
            extra={"request_id": request_id, "employee_id": int(employee_id), "exception_type": kind.value},
        )
        return request_id

    def _get_pending_exception(self, request_id: int) -> ExceptionRequest:
        req = self._requests.get_exception(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been decided")
        return req

    def approve_exception(self, *, current_role: Role, admin_id: int, request_id: int, admin_comment: str = "") -> None:
        self._require_approver(current_role)
        req = self._get_pending_exception(request_id)

        # The corrected day must still be consistent once the request applies.
        record = self._attendance.get_for_employee_and_date(req.employee_id, req.work_date)
        apply_exception(record or blank_day(req.employee_id, req.work_date), req)

        self._decide_exception(req.request_id, RequestStatus.APPROVED, admin_id, admin_comment)

    def reject_exception(self, *, current_role: Role, admin_id: int, request_id: int, admin_comment: str = "") -> None:
        self._require_approver(current_role)
        req = self._get_pending_exception(request_id)
        self._decide_exception(req.request_id, RequestStatus.REJECTED, admin_id, admin_comment)

    def _decide_exception(self, request_id: int, status: RequestStatus, admin_id: int, admin_comment: str) -> None:
        decided = self._requests.decide_exception(
            request_id=int(request_id),
            status=status,
            decided_by=int(admin_id),
            admin_comment=optional_text(admin_comment),
        )
        if not decided:
            raise ValidationError("Request has already been decided")
        logger.info("Exception request decided", extra={"request_id": int(request_id), "status": status.value})

    def submit_leave(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        leave_type: str,
        reason: Optional[str] = None,
    ) -> int:
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        leave_type = require_non_empty(leave_type, "Leave type")
        request_id = self._requests.create_leave(
            employee_id=int(employee_id),
            start_date=start_date,
            end_date=end_date,
            leave_type=leave_type,
            reason=optional_text(reason),
        )
        logger.info("Leave request submitted", extra={"request_id": request_id, "employee_id": int(employee_id)})
        return request_id

    def _get_pending_leave(self, request_id: int) -> LeaveRequest:
        req = self._requests.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been decided")
        return req

    def approve_leave(self, *, current_role: Role, admin_id: int, request_id: int, admin_comment: str = "") -> None:
        """Approve a pending leave and draw it down from the matching balances.

        Years without an allocation for the leave type are not tracked; a
        tracked year that cannot cover its share of the leave blocks approval.
        """
        self._require_approver(current_role)
        req = self._get_pending_leave(request_id)

        tracked = {}
        for year, days in req.days_by_year().items():
            balance = self._requests.get_balance(employee_id=req.employee_id, leave_type=req.leave_type, year=year)
            if balance is None:
                continue
            if balance.remaining_days < days:
                raise ValidationError(
                    f"Insufficient {req.leave_type} balance for {year}: "
                    f"{balance.remaining_days} day(s) left, {days} requested"
                )
            tracked[year] = days

        self._decide_leave(req.request_id, RequestStatus.APPROVED, admin_id, admin_comment)

        for year, days in tracked.items():
            drawn = self._requests.add_used_days(
                employee_id=req.employee_id, leave_type=req.leave_type, year=year, days=days
            )
            if not drawn:
                logger.warning(
                    "Leave balance not drawn down",
                    extra={"request_id": req.request_id, "year": year, "days": days},
                )

    def reject_leave(self, *, current_role: Role, admin_id: int, request_id: int, admin_comment: str = "") -> None:
        self._require_approver(current_role)
        req = self._get_pending_leave(request_id)
        self._decide_leave(req.request_id, RequestStatus.REJECTED, admin_id, admin_comment)

    def _decide_leave(self, request_id: int, status: RequestStatus, admin_id: int, admin_comment: str) -> None:
        decided = self._requests.decide_leave(
            request_id=int(request_id),
            status=status,
            decided_by=int(admin_id),
            admin_comment=optional_text(admin_comment),
        )
        if not decided:
            raise ValidationError("Request has already been decided")
        logger.info("Leave request decided", extra={"request_id": int(request_id), "status": status.value})

    def list_admin_pending(self, *, current_role: Role) -> dict:
        self._require_approver(current_role)
        return {
            "exceptions": list(self._requests.list_exceptions(status=RequestStatus.PENDING)),
            "leaves": list(self._requests.list_leaves(status=RequestStatus.PENDING)),
        }

    def allocate_leave(
        self,
        *,
        current_role: Role,
        employee_id: int,
        leave_type: str,
        year: int,
        allocated_days: int,
    ) -> int:
        self._require_approver(current_role)
        employee_id = require_positive_id(employee_id, "Employee")
        leave_type = require_non_empty(leave_type, "Leave type")
        if isinstance(year, bool) or not isinstance(year, int) or not 2000 <= year <= 2100:
            raise ValidationError(f"Invalid year: {year!r}")
        if isinstance(allocated_days, bool) or not isinstance(allocated_days, int) or allocated_days < 0:
            raise ValidationError("Allocated days must be a whole number of days, zero or more")

        current = self._requests.get_balance(employee_id=employee_id, leave_type=leave_type, year=year)
        if current and allocated_days < current.used_days:
            raise ValidationError(f"{current.used_days} day(s) already used; allocation cannot be lower")

        balance_id = self._requests.upsert_allocation(
            employee_id=employee_id, leave_type=leave_type, year=year, allocated_days=allocated_days
        )
        logger.info(
            "Leave allocated",
            extra={"employee_id": employee_id, "leave_type": leave_type, "year": year, "days": allocated_days},
        )
        return balance_id

    def leave_balances(
        self, *, current_role: Role, viewer_id: Optional[int], employee_id: int, year: int
    ) -> Sequence[LeaveBalance]:
        if viewer_id != int(employee_id) and not has_capability(current_role, Capability.VIEW_TEAM_REPORTS):
            raise AuthorizationError("You can only view your own leave balances")
        return list(self._requests.list_balances(employee_id=int(employee_id), year=int(year)))

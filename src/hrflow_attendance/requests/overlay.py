from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, TypeVar, Union

from ..attendance.model import AttendanceDay
from ..core.enums import OverlayPrecedence
from .model import ExceptionRequest, LeaveRequest

_Request = TypeVar("_Request", bound=Union[ExceptionRequest, LeaveRequest])


def blank_day(employee_id: int, work_date: date) -> AttendanceDay:
    """Stand-in for a date that has no attendance row at all."""
    return AttendanceDay(employee_id=int(employee_id), work_date=work_date)


def _latest(requests: Iterable[_Request]) -> Optional[_Request]:
    # Most recently approved wins; request_id breaks ties deterministically.
    return max(
        requests,
        key=lambda r: (r.decided_at or r.created_at, r.request_id),
        default=None,
    )


def approved_exception_for(day: AttendanceDay, exceptions: Iterable[ExceptionRequest]) -> Optional[ExceptionRequest]:
    return _latest(
        ex
        for ex in exceptions
        if ex.is_approved and ex.employee_id == day.employee_id and ex.work_date == day.work_date
    )


def approved_leave_for(day: AttendanceDay, leaves: Iterable[LeaveRequest]) -> Optional[LeaveRequest]:
    return _latest(
        lv for lv in leaves if lv.is_approved and lv.employee_id == day.employee_id and lv.covers(day.work_date)
    )


def apply_exception(day: AttendanceDay, exception: ExceptionRequest) -> AttendanceDay:
    clock_in = day.clock_in
    clock_out = day.clock_out
    if exception.exception_type.corrects_clock_in and exception.proposed_clock_in is not None:
        clock_in = exception.proposed_clock_in
    if exception.exception_type.corrects_clock_out and exception.proposed_clock_out is not None:
        clock_out = exception.proposed_clock_out

    total_hours = day.total_hours
    if (clock_in, clock_out) != (day.clock_in, day.clock_out):
        total_hours = None
    return replace(day, clock_in=clock_in, clock_out=clock_out, total_hours=total_hours, corrected_by=exception.request_id)


def apply_overlay(
    day: AttendanceDay,
    exceptions: Iterable[ExceptionRequest] = (),
    leaves: Iterable[LeaveRequest] = (),
    *,
    precedence: OverlayPrecedence = OverlayPrecedence.LEAVE_WINS,
) -> AttendanceDay:
    """Return the effective day after approved exceptions and leaves.

    Only approved requests for this employee and date count; the inputs are
    never modified. When both a leave and an exception apply, precedence
    decides which one is kept.
    """
    exception = approved_exception_for(day, exceptions)
    leave = approved_leave_for(day, leaves)

    if leave and exception:
        if precedence == OverlayPrecedence.LEAVE_WINS:
            exception = None
        else:
            leave = None

    effective = day
    if exception:
        effective = apply_exception(effective, exception)
    if leave:
        effective = replace(effective, leave_type=leave.leave_type)
    return effective

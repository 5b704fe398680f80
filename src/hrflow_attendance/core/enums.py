from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role, as asserted by the external auth layer."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class DayStatus(str, Enum):
    """Derived status of one employee-day after classification."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    LEAVE = "leave"
    NON_WORKING = "non_working"


class RequestStatus(str, Enum):
    """Approval state shared by exception and leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ExceptionType(str, Enum):
    LATE_ARRIVAL = "late_arrival"
    EARLY_DEPARTURE = "early_departure"
    MISSED_CLOCK_IN = "missed_clock_in"
    MISSED_CLOCK_OUT = "missed_clock_out"
    WRONG_TIME = "wrong_time"

    @property
    def corrects_clock_in(self) -> bool:
        return self in (ExceptionType.MISSED_CLOCK_IN, ExceptionType.WRONG_TIME)

    @property
    def corrects_clock_out(self) -> bool:
        return self in (ExceptionType.MISSED_CLOCK_OUT, ExceptionType.WRONG_TIME)


class OverlayPrecedence(str, Enum):
    """Which approved request wins when a leave and an exception share a date."""

    LEAVE_WINS = "leave_wins"
    EXCEPTION_WINS = "exception_wins"


class IssueType(str, Enum):
    ABSENT = "absent"
    LATE = "late"
    EARLY = "early"
    MISSED_CLOCK_OUT = "missed_clock_out"
    INCOMPLETE_HOURS = "incomplete_hours"


class BreachKind(str, Enum):
    CONSECUTIVE = "consecutive"
    MONTHLY = "monthly"

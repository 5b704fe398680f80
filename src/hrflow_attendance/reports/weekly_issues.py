from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.classifier import AttendanceClassifier
from ..attendance.model import AttendanceDay
from ..common.datetime_utils import iter_days
from ..common.timezone import RegionalClock
from ..core.constants import WEEKDAY_NAMES
from ..core.enums import DayStatus, ExceptionType, IssueType, RequestStatus
from ..core.exceptions import DomainError
from ..requests.model import ExceptionRequest, LeaveRequest
from ..requests.overlay import approved_leave_for, blank_day
from ..schedules.resolver import ScheduleResolver

logger = logging.getLogger(__name__)

# Exception types that explain each kind of issue.
ISSUE_EXCEPTION_TYPES: dict[IssueType, tuple[ExceptionType, ...]] = {
    IssueType.ABSENT: (ExceptionType.MISSED_CLOCK_IN,),
    IssueType.LATE: (ExceptionType.LATE_ARRIVAL,),
    IssueType.MISSED_CLOCK_OUT: (ExceptionType.MISSED_CLOCK_OUT,),
    IssueType.EARLY: (ExceptionType.EARLY_DEPARTURE,),
    IssueType.INCOMPLETE_HOURS: (ExceptionType.WRONG_TIME,),
}


@dataclass(frozen=True)
class Issue:
    issue_type: IssueType
    details: dict = field(default_factory=dict)
    exception_type: Optional[ExceptionType] = None
    exception_status: Optional[RequestStatus] = None

    @property
    def exception_submitted(self) -> bool:
        return self.exception_status is not None and self.exception_status != RequestStatus.REJECTED

    def to_dict(self) -> dict:
        return {
            "type": self.issue_type.value,
            "details": self.details,
            "exception_submitted": self.exception_submitted,
            "exception_type": self.exception_type.value if self.exception_type else None,
            "exception_status": self.exception_status.value if self.exception_status else None,
        }


@dataclass(frozen=True)
class DailyIssues:
    work_date: date
    issues: tuple[Issue, ...]

    @property
    def day_name(self) -> str:
        return WEEKDAY_NAMES[self.work_date.weekday()]


@dataclass(frozen=True)
class EmployeeIssueReport:
    employee_id: int
    employee_name: str
    week_start: date
    week_end: date
    days: tuple[DailyIssues, ...] = ()
    failed_dates: tuple[date, ...] = ()

    @property
    def total_issues(self) -> int:
        return sum(len(d.issues) for d in self.days)

    @property
    def issues_with_exceptions(self) -> int:
        return sum(1 for d in self.days for i in d.issues if i.exception_submitted)

    @property
    def issues_without_exceptions(self) -> int:
        return self.total_issues - self.issues_with_exceptions

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "total_issues": self.total_issues,
            "issues_with_exceptions": self.issues_with_exceptions,
            "issues_without_exceptions": self.issues_without_exceptions,
            "days": [
                {"date": d.work_date.isoformat(), "day_name": d.day_name, "issues": [i.to_dict() for i in d.issues]}
                for d in self.days
            ],
            "failed_dates": [d.isoformat() for d in self.failed_dates],
        }


def _issue(issue_type: IssueType, exceptions: Sequence[ExceptionRequest], **details) -> Issue:
    matching = [ex for ex in exceptions if ex.exception_type in ISSUE_EXCEPTION_TYPES[issue_type]]
    # Prefer a live (non-rejected) submission when several exist.
    matching.sort(key=lambda ex: (ex.status != RequestStatus.REJECTED, ex.created_at, ex.request_id))
    found = matching[-1] if matching else None
    return Issue(
        issue_type=issue_type,
        details=details,
        exception_type=found.exception_type if found else None,
        exception_status=found.status if found else None,
    )


def build_weekly_issues(
    *,
    employee_id: int,
    employee_name: str,
    week_start: date,
    resolver: ScheduleResolver,
    classifier: AttendanceClassifier,
    days: Iterable[AttendanceDay],
    exceptions: Iterable[ExceptionRequest] = (),
    leaves: Iterable[LeaveRequest] = (),
    clock: Optional[RegionalClock] = None,
    today: Optional[date] = None,
) -> EmployeeIssueReport:
    """List one employee's attendance issues for the Monday..Sunday week.

    Raw attendance is inspected (exceptions do not correct it here); each
    issue records whether an explaining exception was submitted.
    """
    clock = clock or RegionalClock()
    week_end = week_start + timedelta(days=6)
    by_date = {d.work_date: d for d in days if d.employee_id == employee_id}
    exceptions = [ex for ex in exceptions if ex.employee_id == employee_id]
    leaves = list(leaves)
    minimum = resolver.schedule_for(employee_id).minimum_daily_hours
    # Days after today have not happened yet.
    last = week_end if today is None else min(week_end, today)

    daily: list[DailyIssues] = []
    failed: list[date] = []
    for current in iter_days(week_start, last):
        day = by_date.get(current) or blank_day(employee_id, current)
        if approved_leave_for(day, leaves):
            continue

        try:
            result = classifier.classify(day, resolver.resolve(employee_id, current))
        except DomainError as e:
            logger.warning(
                "Skipping day in weekly issues",
                extra={"employee_id": employee_id, "work_date": current.isoformat(), "error": str(e)},
            )
            failed.append(current)
            continue

        if result.status == DayStatus.NON_WORKING:
            continue

        day_exceptions = [ex for ex in exceptions if ex.work_date == current]
        issues: list[Issue] = []
        if result.status == DayStatus.ABSENT:
            issues.append(_issue(IssueType.ABSENT, day_exceptions))
        else:
            clock_in = clock.to_regional(day.clock_in).strftime("%H:%M")
            if result.status == DayStatus.LATE:
                issues.append(_issue(IssueType.LATE, day_exceptions, late_minutes=result.lateness_minutes, clock_in=clock_in))
            if day.clock_out is None:
                issues.append(_issue(IssueType.MISSED_CLOCK_OUT, day_exceptions, clock_in=clock_in))
            else:
                clock_out = clock.to_regional(day.clock_out).strftime("%H:%M")
                if result.earliness_minutes > 0:
                    issues.append(
                        _issue(IssueType.EARLY, day_exceptions, early_minutes=result.earliness_minutes, clock_out=clock_out)
                    )
                if result.total_hours is not None and result.total_hours < minimum:
                    issues.append(
                        _issue(
                            IssueType.INCOMPLETE_HOURS,
                            day_exceptions,
                            total_hours=round(result.total_hours, 2),
                            minimum_hours=minimum,
                        )
                    )

        if issues:
            daily.append(DailyIssues(work_date=current, issues=tuple(issues)))

    return EmployeeIssueReport(
        employee_id=employee_id,
        employee_name=employee_name,
        week_start=week_start,
        week_end=week_end,
        days=tuple(daily),
        failed_dates=tuple(failed),
    )

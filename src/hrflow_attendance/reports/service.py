from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..attendance.classifier import AttendanceClassifier
from ..attendance.model import AttendanceDay, DayClassification, DayFailure
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days, month_bounds, week_start as monday_of
from ..common.timezone import RegionalClock
from ..core.enums import OverlayPrecedence, RequestStatus, Role
from ..core.exceptions import AuthorizationError, DomainError
from ..employees.model import Capability, EmployeeRecord, has_capability
from ..employees.repository import EmployeeRepository
from ..employees.service import EmployeeDirectory
from ..requests.model import ExceptionRequest, LeaveRequest
from ..requests.overlay import apply_overlay, blank_day
from ..requests.repository import RequestRepository
from ..schedules.model import WorkSchedule
from ..schedules.repository import ScheduleRepository
from ..schedules.resolver import ScheduleResolver
from .aggregator import HoursDeduction, MonthSummary, aggregate_month
from .breaches import Breach, detect_breaches
from .weekly_issues import EmployeeIssueReport, build_weekly_issues

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyReport:
    employee: EmployeeRecord
    month: date
    days: tuple[DayClassification, ...]
    failures: tuple[DayFailure, ...]
    summary: MonthSummary
    breaches: tuple[Breach, ...]

    def to_dict(self) -> dict:
        return {
            "employee": {
                "employee_id": self.employee.employee_id,
                "full_name": self.employee.full_name,
                "department": self.employee.department,
                "position": self.employee.position,
            },
            "month": self.month.strftime("%Y-%m"),
            "days": [d.to_dict() for d in self.days],
            "failures": [f.to_dict() for f in self.failures],
            "summary": self.summary.to_dict(),
            "breaches": [b.to_dict() for b in self.breaches],
        }


class AttendanceReportService:
    """Fetch-then-compute pipeline behind the attendance reports.

    Every step reads from a repository exactly once; everything after the
    fetches is pure computation over those snapshots.
    """

    def __init__(
        self,
        *,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
        requests: RequestRepository,
        classifier: Optional[AttendanceClassifier] = None,
        deduction: Optional[HoursDeduction] = None,
        precedence: OverlayPrecedence = OverlayPrecedence.LEAVE_WINS,
        default_schedule: Optional[WorkSchedule] = None,
        clock: Optional[RegionalClock] = None,
    ):
        self._employees = employees
        self._directory = EmployeeDirectory(employees)
        self._attendance = attendance
        self._schedules = schedules
        self._requests = requests
        self._classifier = classifier or AttendanceClassifier()
        self._deduction = deduction or HoursDeduction()
        self._precedence = precedence
        self._default_schedule = default_schedule
        self._clock = clock or RegionalClock()

    def classify_days(
        self,
        *,
        employee_id: int,
        dates: Iterable[date],
        resolver: ScheduleResolver,
        days: Iterable[AttendanceDay],
        exceptions: Iterable[ExceptionRequest] = (),
        leaves: Iterable[LeaveRequest] = (),
    ) -> tuple[list[DayClassification], list[DayFailure]]:
        """Overlay and classify each date independently.

        A day that fails is reported as a DayFailure; the rest still count.
        """
        by_date = {d.work_date: d for d in days if d.employee_id == employee_id}
        exceptions = list(exceptions)
        leaves = list(leaves)

        classified: list[DayClassification] = []
        failures: list[DayFailure] = []
        for current in dates:
            try:
                raw = by_date.get(current) or blank_day(employee_id, current)
                effective = apply_overlay(raw, exceptions, leaves, precedence=self._precedence)
                classified.append(self._classifier.classify(effective, resolver.resolve(employee_id, current)))
            except DomainError as e:
                logger.warning(
                    "Day classification failed",
                    extra={"employee_id": employee_id, "work_date": current.isoformat(), "error": str(e)},
                )
                failures.append(DayFailure(work_date=current, error=e))
        return classified, failures

    def monthly_report(
        self,
        *,
        employee_id: int,
        month: date,
        current_role: Role,
        viewer_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> MonthlyReport:
        employee_id = int(employee_id)
        if viewer_id != employee_id and not has_capability(current_role, Capability.VIEW_TEAM_REPORTS):
            raise AuthorizationError("You can only view your own attendance")

        first, last = month_bounds(month)
        today = today or self._clock.regional_today()

        employee = self._directory.get(employee_id, current_role=current_role, viewer_id=viewer_id)
        schedule = self._schedules.get_active_for_employee(employee_id)
        days = self._attendance.list_range(start=first, end=last, employee_id=employee_id)
        exceptions = self._requests.list_exceptions(
            start=first, end=last, employee_id=employee_id, status=RequestStatus.APPROVED
        )
        leaves = self._requests.list_leaves(start=first, end=last, employee_id=employee_id, status=RequestStatus.APPROVED)

        resolver = ScheduleResolver([schedule] if schedule else [], default=self._default_schedule, clock=self._clock)
        # Days after the regional today have not happened yet.
        classified, failures = self.classify_days(
            employee_id=employee_id,
            dates=iter_days(first, min(last, today)),
            resolver=resolver,
            days=days,
            exceptions=exceptions,
            leaves=leaves,
        )

        summary = aggregate_month(classified, first, deduction=self._deduction, failures=failures)
        return MonthlyReport(
            employee=employee,
            month=first,
            days=tuple(classified),
            failures=tuple(failures),
            summary=summary,
            breaches=tuple(detect_breaches(classified)),
        )

    def weekly_issues(
        self, *, week_start: date, current_role: Role, today: Optional[date] = None
    ) -> list[EmployeeIssueReport]:
        if not has_capability(current_role, Capability.VIEW_TEAM_REPORTS):
            raise AuthorizationError("You are not allowed to view team reports")

        start = monday_of(week_start)
        end = start + timedelta(days=6)
        today = today or self._clock.regional_today()

        employees = self._employees.list_active()
        resolver = ScheduleResolver(self._schedules.list_active(), default=self._default_schedule, clock=self._clock)
        days = self._attendance.list_range(start=start, end=end)
        # Rejected requests are still needed: they mark an issue as explained-then-refused.
        exceptions = self._requests.list_exceptions(start=start, end=end)
        leaves = self._requests.list_leaves(start=start, end=end, status=RequestStatus.APPROVED)

        reports = []
        for employee in employees:
            report = build_weekly_issues(
                employee_id=employee.employee_id,
                employee_name=employee.full_name,
                week_start=start,
                resolver=resolver,
                classifier=self._classifier,
                days=days,
                exceptions=exceptions,
                leaves=leaves,
                clock=self._clock,
                today=today,
            )
            if report.total_issues or report.failed_dates:
                reports.append(report)

        logger.info("Weekly issues built", extra={"week_start": start.isoformat(), "reports": len(reports)})
        return reports

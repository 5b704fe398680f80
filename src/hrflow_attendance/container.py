from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.classifier import AttendanceClassifier
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.rules import ClassificationRules
from .attendance.service import AttendanceService
from .common.timezone import RegionalClock
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_REGION_UTC_OFFSET_HOURS
from .core.enums import OverlayPrecedence
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeDirectory
from .reports.aggregator import HoursDeduction
from .reports.service import AttendanceReportService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import RequestService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    clock: RegionalClock

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    schedules_repo: ScheduleRepository
    requests_repo: RequestRepository

    employee_directory: EmployeeDirectory
    attendance_service: AttendanceService
    schedule_service: ScheduleService
    request_service: RequestService
    report_service: AttendanceReportService


def _deduction_from(settings: Any) -> HoursDeduction:
    raw = getattr(settings, "HOURS_DEDUCTION", None) or {}
    return HoursDeduction(
        hours=int(raw.get("hours", 0)),
        minutes=int(raw.get("minutes", 0)),
        enabled=bool(raw.get("enabled", False)),
    )


def _precedence_from(settings: Any) -> OverlayPrecedence:
    value = getattr(settings, "OVERLAY_PRECEDENCE", OverlayPrecedence.LEAVE_WINS.value)
    try:
        return OverlayPrecedence(value)
    except ValueError:
        raise ValidationError(f"Unknown OVERLAY_PRECEDENCE: {value!r}")


def build_services(
    *,
    settings: Any,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    schedules_repo: ScheduleRepository,
    requests_repo: RequestRepository,
) -> Container:
    """Wire services over the given repositories; settings are read here only."""

    clock = RegionalClock(int(getattr(settings, "REGION_UTC_OFFSET_HOURS", DEFAULT_REGION_UTC_OFFSET_HOURS)))
    rules = ClassificationRules(
        late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES))
    )

    report_service = AttendanceReportService(
        employees=employees_repo,
        attendance=attendance_repo,
        schedules=schedules_repo,
        requests=requests_repo,
        classifier=AttendanceClassifier(rules),
        deduction=_deduction_from(settings),
        precedence=_precedence_from(settings),
        clock=clock,
    )

    return Container(
        clock=clock,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        schedules_repo=schedules_repo,
        requests_repo=requests_repo,
        employee_directory=EmployeeDirectory(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo, clock=clock),
        schedule_service=ScheduleService(schedules_repo),
        request_service=RequestService(requests_repo, attendance_repo, clock=clock),
        report_service=report_service,
    )


def build_container(settings: Any) -> Container:
    db_config = getattr(settings, "DB_CONFIG")
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        settings=settings,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        requests_repo=MySQLRequestRepository(conn),
    )

from __future__ import annotations

from datetime import date, time

import pytest

from hrflow_attendance.attendance.model import AttendanceDay
from hrflow_attendance.core.enums import ExceptionType, RequestStatus, Role
from hrflow_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from hrflow_attendance.requests.service import RequestService

DAY = date(2026, 1, 14)


@pytest.fixture
def service(requests_repo, attendance_repo, clock):
    return RequestService(requests_repo, attendance_repo, clock=clock)


def test_submit_missed_clock_in_converts_regional_time(service, requests_repo, attendance_repo, at):
    attendance_repo.add(AttendanceDay(employee_id=1, work_date=DAY, attendance_id=11))

    rid = service.submit_exception(
        employee_id=1,
        work_date=DAY,
        exception_type="missed_clock_in",
        reason="Forgot my badge",
        proposed_clock_in="09:05",
    )

    req = requests_repo.get_exception(request_id=rid)
    assert req.status == RequestStatus.PENDING
    assert req.exception_type == ExceptionType.MISSED_CLOCK_IN
    assert req.proposed_clock_in == at(DAY, 9, 5)
    assert req.proposed_clock_out is None
    assert req.attendance_id == 11


def test_submit_requires_times_for_type(service):
    with pytest.raises(ValidationError, match="clock-out time is required"):
        service.submit_exception(
            employee_id=1,
            work_date=DAY,
            exception_type=ExceptionType.WRONG_TIME,
            reason="Clock drift",
            proposed_clock_in=time(9, 0),
        )


def test_submit_rejects_inverted_times(service):
    with pytest.raises(ValidationError, match="earlier than"):
        service.submit_exception(
            employee_id=1,
            work_date=DAY,
            exception_type="wrong_time",
            reason="Clock drift",
            proposed_clock_in="17:00",
            proposed_clock_out="09:00",
        )


def test_submit_rejects_unknown_type_and_blank_reason(service):
    with pytest.raises(ValidationError, match="Unknown exception type"):
        service.submit_exception(employee_id=1, work_date=DAY, exception_type="vacation", reason="x")
    with pytest.raises(ValidationError):
        service.submit_exception(employee_id=1, work_date=DAY, exception_type="late_arrival", reason="   ")


def test_admin_approves_exception(service, requests_repo):
    rid = service.submit_exception(
        employee_id=1, work_date=DAY, exception_type="late_arrival", reason="Metro delay"
    )

    service.approve_exception(current_role=Role.ADMIN, admin_id=9, request_id=rid, admin_comment="ok")

    req = requests_repo.get_exception(request_id=rid)
    assert req.status == RequestStatus.APPROVED
    assert req.decided_by == 9
    assert req.admin_comment == "ok"


def test_decision_is_one_time(service):
    rid = service.submit_exception(employee_id=1, work_date=DAY, exception_type="late_arrival", reason="Metro")
    service.reject_exception(current_role=Role.ADMIN, admin_id=9, request_id=rid)

    with pytest.raises(ValidationError, match="already been decided"):
        service.approve_exception(current_role=Role.ADMIN, admin_id=9, request_id=rid)


def test_employee_and_manager_cannot_decide(service):
    rid = service.submit_exception(employee_id=1, work_date=DAY, exception_type="late_arrival", reason="Metro")

    for role in (Role.EMPLOYEE, Role.MANAGER):
        with pytest.raises(AuthorizationError):
            service.approve_exception(current_role=role, admin_id=1, request_id=rid)


def test_approve_missing_request(service):
    with pytest.raises(NotFoundError):
        service.approve_exception(current_role=Role.ADMIN, admin_id=9, request_id=404)
    with pytest.raises(NotFoundError):
        service.reject_leave(current_role=Role.ADMIN, admin_id=9, request_id=404)


def test_approval_rejects_correction_that_inverts_the_day(service, requests_repo, attendance_repo, at):
    attendance_repo.add(
        AttendanceDay(employee_id=1, work_date=DAY, clock_in=at(DAY, 9, 0), clock_out=at(DAY, 12, 0))
    )
    rid = service.submit_exception(
        employee_id=1, work_date=DAY, exception_type="missed_clock_in", reason="Typo", proposed_clock_in="13:00"
    )

    with pytest.raises(ValidationError):
        service.approve_exception(current_role=Role.ADMIN, admin_id=9, request_id=rid)
    assert requests_repo.get_exception(request_id=rid).status == RequestStatus.PENDING


def test_approval_does_not_touch_attendance(service, attendance_repo, at):
    rid = service.submit_exception(
        employee_id=1, work_date=DAY, exception_type="missed_clock_in", reason="Badge", proposed_clock_in="09:00"
    )

    service.approve_exception(current_role=Role.ADMIN, admin_id=9, request_id=rid)

    assert attendance_repo.get_for_employee_and_date(1, DAY) is None


def test_leave_lifecycle(service, requests_repo):
    rid = service.submit_leave(
        employee_id=1, start_date=date(2026, 2, 2), end_date=date(2026, 2, 4), leave_type="annual", reason="Trip"
    )
    assert requests_repo.get_leave(request_id=rid).total_days == 3

    service.approve_leave(current_role=Role.ADMIN, admin_id=9, request_id=rid)

    assert requests_repo.get_leave(request_id=rid).status == RequestStatus.APPROVED
    with pytest.raises(ValidationError):
        service.reject_leave(current_role=Role.ADMIN, admin_id=9, request_id=rid)


def test_leave_end_before_start_rejected(service):
    with pytest.raises(ValidationError, match="End date"):
        service.submit_leave(
            employee_id=1, start_date=date(2026, 2, 4), end_date=date(2026, 2, 2), leave_type="annual"
        )


def test_admin_pending_lists_only_pending(service):
    a = service.submit_exception(employee_id=1, work_date=DAY, exception_type="late_arrival", reason="Metro")
    service.submit_exception(employee_id=2, work_date=DAY, exception_type="early_departure", reason="Doctor")
    service.submit_leave(employee_id=1, start_date=DAY, end_date=DAY, leave_type="sick")
    service.approve_exception(current_role=Role.ADMIN, admin_id=9, request_id=a)

    pending = service.list_admin_pending(current_role=Role.ADMIN)

    assert [r.employee_id for r in pending["exceptions"]] == [2]
    assert len(pending["leaves"]) == 1
    with pytest.raises(AuthorizationError):
        service.list_admin_pending(current_role=Role.EMPLOYEE)

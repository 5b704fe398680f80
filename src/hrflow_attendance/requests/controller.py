from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_employee_id, current_role, error_response, json_body, login_required, ok
from ..common.timezone import RegionalClock
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from .model import ExceptionRequest, LeaveBalance, LeaveRequest


def _hhmm(clock: RegionalClock, instant) -> Optional[str]:
    return clock.to_regional(instant).strftime("%H:%M") if instant else None


def exception_to_dict(clock: RegionalClock, r: ExceptionRequest) -> dict:
    return {
        "request_id": r.request_id,
        "employee_id": r.employee_id,
        "work_date": r.work_date.isoformat(),
        "exception_type": r.exception_type.value,
        "proposed_clock_in": _hhmm(clock, r.proposed_clock_in),
        "proposed_clock_out": _hhmm(clock, r.proposed_clock_out),
        "reason": r.reason,
        "status": r.status.value,
        "admin_comment": r.admin_comment or "",
    }


def leave_to_dict(r: LeaveRequest) -> dict:
    return {
        "request_id": r.request_id,
        "employee_id": r.employee_id,
        "start_date": r.start_date.isoformat(),
        "end_date": r.end_date.isoformat(),
        "total_days": r.total_days,
        "leave_type": r.leave_type,
        "reason": r.reason or "",
        "status": r.status.value,
        "admin_comment": r.admin_comment or "",
    }


def balance_to_dict(b: LeaveBalance) -> dict:
    return {
        "employee_id": b.employee_id,
        "leave_type": b.leave_type,
        "year": b.year,
        "allocated_days": b.allocated_days,
        "used_days": b.used_days,
        "remaining_days": b.remaining_days,
    }


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {raw!r}")


def register(app: Flask, container: Container) -> None:
    service = container.request_service

    @app.route("/api/exceptions", methods=["POST"], endpoint="submit_exception")
    @login_required
    def submit_exception():
        try:
            data = json_body()
            request_id = service.submit_exception(
                employee_id=current_employee_id(),
                work_date=parse_iso_date(data.get("work_date") or ""),
                exception_type=data.get("exception_type") or "",
                reason=data.get("reason") or "",
                proposed_clock_in=data.get("proposed_clock_in"),
                proposed_clock_out=data.get("proposed_clock_out"),
            )
            return ok({"request_id": request_id}, status=201, message="Exception request submitted")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/exceptions/<int:request_id>/approve", methods=["POST"], endpoint="approve_exception")
    @login_required
    def approve_exception(request_id: int):
        try:
            service.approve_exception(
                current_role=current_role(),
                admin_id=current_employee_id(),
                request_id=request_id,
                admin_comment=json_body().get("admin_comment", ""),
            )
            return ok(message="Exception request approved")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/exceptions/<int:request_id>/reject", methods=["POST"], endpoint="reject_exception")
    @login_required
    def reject_exception(request_id: int):
        try:
            service.reject_exception(
                current_role=current_role(),
                admin_id=current_employee_id(),
                request_id=request_id,
                admin_comment=json_body().get("admin_comment", ""),
            )
            return ok(message="Exception request rejected")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/leaves", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        try:
            data = json_body()
            request_id = service.submit_leave(
                employee_id=current_employee_id(),
                start_date=parse_iso_date(data.get("start_date") or ""),
                end_date=parse_iso_date(data.get("end_date") or ""),
                leave_type=data.get("leave_type") or "",
                reason=data.get("reason"),
            )
            return ok({"request_id": request_id}, status=201, message="Leave request submitted")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @login_required
    def approve_leave(request_id: int):
        try:
            service.approve_leave(
                current_role=current_role(),
                admin_id=current_employee_id(),
                request_id=request_id,
                admin_comment=json_body().get("admin_comment", ""),
            )
            return ok(message="Leave request approved")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @login_required
    def reject_leave(request_id: int):
        try:
            service.reject_leave(
                current_role=current_role(),
                admin_id=current_employee_id(),
                request_id=request_id,
                admin_comment=json_body().get("admin_comment", ""),
            )
            return ok(message="Leave request rejected")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/requests/pending", methods=["GET"], endpoint="pending_requests")
    @login_required
    def pending_requests():
        try:
            data = service.list_admin_pending(current_role=current_role())
            return ok(
                {
                    "exceptions": [exception_to_dict(container.clock, r) for r in data["exceptions"]],
                    "leaves": [leave_to_dict(r) for r in data["leaves"]],
                }
            )
        except DomainError as e:
            return error_response(e)

    @app.route("/api/leave-balances/<int:employee_id>", methods=["PUT"], endpoint="allocate_leave")
    @login_required
    def allocate_leave(employee_id: int):
        try:
            data = json_body()
            balance_id = service.allocate_leave(
                current_role=current_role(),
                employee_id=employee_id,
                leave_type=data.get("leave_type") or "",
                year=data.get("year"),
                allocated_days=data.get("allocated_days"),
            )
            return ok({"balance_id": balance_id}, message="Leave allocated")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/leave-balances", methods=["GET"], endpoint="leave_balances")
    @login_required
    def leave_balances():
        try:
            balances = service.leave_balances(
                current_role=current_role(),
                viewer_id=current_employee_id(),
                employee_id=_int_arg("employee_id", current_employee_id()),
                year=_int_arg("year", container.clock.regional_today().year),
            )
            return ok([balance_to_dict(b) for b in balances])
        except DomainError as e:
            return error_response(e)

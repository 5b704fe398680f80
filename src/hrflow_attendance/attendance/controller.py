from __future__ import annotations

from flask import Flask, request

from ..common.http import current_employee_id, error_response, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import DomainError
from .model import AttendanceDay


def _to_dict(container: Container, day: AttendanceDay) -> dict:
    clock = container.clock
    return {
        "attendance_id": day.attendance_id,
        "employee_id": day.employee_id,
        "work_date": day.work_date.isoformat(),
        "clock_in": clock.to_regional(day.clock_in).isoformat() if day.clock_in else None,
        "clock_out": clock.to_regional(day.clock_out).isoformat() if day.clock_out else None,
        "total_hours": round(day.total_hours, 2) if day.total_hours is not None else None,
        "is_remote": day.is_remote,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        try:
            data = json_body()
            day = container.attendance_service.clock_in(
                current_employee_id(),
                is_remote=bool(data.get("is_remote", False)),
                note=data.get("note"),
            )
            return ok(_to_dict(container, day), status=201, message="Clocked in")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        try:
            day = container.attendance_service.clock_out(current_employee_id())
            return ok(_to_dict(container, day), message="Clocked out")
        except DomainError as e:
            return error_response(e)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            limit = int(request.args.get("limit", 30))
        except ValueError:
            limit = 30
        return ok(container.attendance_service.get_history(current_employee_id(), limit=limit))

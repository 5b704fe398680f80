from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_hhmm
from ..common.http import current_role, error_response, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules/<int:employee_id>", methods=["PUT"], endpoint="configure_schedule")
    @login_required
    def configure_schedule(employee_id: int):
        try:
            data = json_body()
            working_days = data.get("working_days") or []
            if isinstance(working_days, str):
                working_days = [d for d in working_days.split(",") if d.strip()]
            if not isinstance(working_days, list):
                raise ValidationError("working_days must be a list of weekday names")

            minimum = data.get("minimum_daily_hours")
            try:
                minimum = float(minimum) if minimum is not None else None
            except (TypeError, ValueError):
                raise ValidationError("minimum_daily_hours must be a number")

            schedule_id = container.schedule_service.configure(
                current_role=current_role(),
                employee_id=employee_id,
                start_time=parse_hhmm(data.get("start_time")),
                end_time=parse_hhmm(data.get("end_time")),
                working_days=working_days,
                minimum_daily_hours=minimum,
            )
            return ok({"schedule_id": schedule_id}, message="Schedule saved")
        except DomainError as e:
            return error_response(e)

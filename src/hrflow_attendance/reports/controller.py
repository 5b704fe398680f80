from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.http import current_employee_id, current_role, error_response, login_required, ok
from ..container import Container
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    @login_required
    def monthly_report():
        try:
            raw_employee = request.args.get("employee_id")
            try:
                employee_id = int(raw_employee) if raw_employee else current_employee_id()
            except ValueError:
                raise ValidationError(f"Invalid employee_id: {raw_employee!r}")

            month_arg = request.args.get("month")
            month = parse_month(month_arg) if month_arg else container.clock.regional_today().replace(day=1)

            report = container.report_service.monthly_report(
                employee_id=employee_id,
                month=month,
                current_role=current_role(),
                viewer_id=current_employee_id(),
            )
            return ok(report.to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/api/reports/weekly-issues", methods=["GET"], endpoint="weekly_issues")
    @login_required
    def weekly_issues():
        try:
            week_arg = request.args.get("week_start")
            week_start = parse_iso_date(week_arg) if week_arg else container.clock.regional_today()
            reports = container.report_service.weekly_issues(week_start=week_start, current_role=current_role())
            return ok([r.to_dict() for r in reports])
        except DomainError as e:
            return error_response(e)

from __future__ import annotations

from dataclasses import asdict

from flask import Flask

from ..common.http import current_employee_id, current_role, error_response, login_required, ok
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employee_detail")
    @login_required
    def employee_detail(employee_id: int):
        try:
            record = container.employee_directory.get(
                employee_id,
                current_role=current_role(),
                viewer_id=current_employee_id(),
            )
            data = asdict(record)
            if data.get("hire_date"):
                data["hire_date"] = data["hire_date"].isoformat()
            return ok(data)
        except DomainError as e:
            return error_response(e)

from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .model import Capability, EmployeeRecord, has_capability
from .repository import EmployeeRepository


class EmployeeDirectory:
    """Returns the employee record variant the caller is entitled to.

    Callers holding VIEW_FULL_PROFILE, and employees looking at themselves,
    get the full record; everyone else gets the directory entry.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int, *, current_role: Role, viewer_id: Optional[int] = None) -> EmployeeRecord:
        record = self._employees.get_by_id(int(employee_id))
        if not record:
            raise NotFoundError("Employee not found")
        if has_capability(current_role, Capability.VIEW_FULL_PROFILE):
            return record
        if viewer_id is not None and int(viewer_id) == record.employee_id:
            return record
        return record.to_directory()

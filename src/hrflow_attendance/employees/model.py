from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Union

from ..core.enums import Role


class Capability(str, Enum):
    VIEW_FULL_PROFILE = "view_full_profile"
    APPROVE_REQUESTS = "approve_requests"
    MANAGE_SCHEDULES = "manage_schedules"
    VIEW_TEAM_REPORTS = "view_team_reports"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.MANAGER: frozenset({Capability.VIEW_FULL_PROFILE, Capability.VIEW_TEAM_REPORTS}),
    Role.EMPLOYEE: frozenset(),
}


def has_capability(role: Role, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


@dataclass(frozen=True)
class FullEmployeeRecord:
    """Employee as seen by callers allowed to read the whole profile."""

    employee_id: int
    full_name: str
    email: str
    department: Optional[str]
    position: Optional[str]
    phone: Optional[str] = None
    manager_id: Optional[int] = None
    hire_date: Optional[date] = None
    status: str = "active"

    def to_directory(self) -> "DirectoryEmployeeRecord":
        return DirectoryEmployeeRecord(
            employee_id=self.employee_id,
            full_name=self.full_name,
            department=self.department,
            position=self.position,
        )


@dataclass(frozen=True)
class DirectoryEmployeeRecord:
    """Public directory entry: no contact or HR fields."""

    employee_id: int
    full_name: str
    department: Optional[str]
    position: Optional[str]


EmployeeRecord = Union[FullEmployeeRecord, DirectoryEmployeeRecord]

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FullEmployeeRecord


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[FullEmployeeRecord]:
        raise NotImplementedError

    def list_active(self) -> Sequence[FullEmployeeRecord]:
        raise NotImplementedError

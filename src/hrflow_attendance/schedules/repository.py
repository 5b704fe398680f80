from __future__ import annotations

from datetime import time
from typing import Iterable, Optional, Protocol, Sequence

from .model import WorkSchedule


class ScheduleRepository(Protocol):
    def get_active_for_employee(self, employee_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def list_active(self) -> Sequence[WorkSchedule]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        employee_id: int,
        start_time: time,
        end_time: time,
        working_days: Iterable[str],
        minimum_daily_hours: float,
    ) -> int:
        """Create or replace the employee's active schedule.

        Returns schedule_id.
        """

        raise NotImplementedError

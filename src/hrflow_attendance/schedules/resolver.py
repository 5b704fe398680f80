from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.timezone import RegionalClock
from .model import DEFAULT_SCHEDULE, ResolvedSchedule, WorkSchedule


class ScheduleResolver:
    """Resolves an employee's expectations for a date from a schedule snapshot.

    The snapshot is taken at construction; resolving never touches storage.
    """

    def __init__(
        self,
        schedules: Iterable[WorkSchedule] = (),
        *,
        default: Optional[WorkSchedule] = None,
        clock: Optional[RegionalClock] = None,
    ):
        self._by_employee: dict[int, WorkSchedule] = {
            s.employee_id: s for s in schedules if s.is_active and s.employee_id is not None
        }
        self._default = default or DEFAULT_SCHEDULE
        self._clock = clock or RegionalClock()

    def schedule_for(self, employee_id: int) -> WorkSchedule:
        return self._by_employee.get(int(employee_id), self._default)

    def resolve(self, employee_id: int, day: date) -> ResolvedSchedule:
        schedule = self.schedule_for(employee_id)
        if not schedule.is_working_day(day):
            return ResolvedSchedule.non_working()

        return ResolvedSchedule(
            is_working_day=True,
            expected_clock_in=self._clock.combine(day, schedule.start_time),
            expected_clock_out=self._clock.combine(day, schedule.end_time),
            minimum_daily_hours=float(schedule.minimum_daily_hours),
        )

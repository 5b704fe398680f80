from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import (
    DEFAULT_END_TIME,
    DEFAULT_MINIMUM_DAILY_HOURS,
    DEFAULT_START_TIME,
    DEFAULT_WORKING_DAYS,
    WEEKDAY_NAMES,
)
from ..core.exceptions import MalformedSchedule


@dataclass(frozen=True)
class WorkSchedule:
    """Working days and expected hours for one employee (or the default).

    Times are regional wall-clock times. An empty working_days set means the
    default week (every day except Sunday).
    """

    employee_id: Optional[int]
    start_time: time = DEFAULT_START_TIME
    end_time: time = DEFAULT_END_TIME
    working_days: frozenset[str] = field(default_factory=frozenset)
    minimum_daily_hours: float = DEFAULT_MINIMUM_DAILY_HOURS
    is_active: bool = True
    schedule_id: Optional[int] = None

    def is_working_day(self, day: date) -> bool:
        days = self.working_days or DEFAULT_WORKING_DAYS
        return WEEKDAY_NAMES[day.weekday()] in days

    def validate(self) -> "WorkSchedule":
        if self.end_time <= self.start_time:
            raise MalformedSchedule(
                f"End time {self.end_time:%H:%M} must be after start time {self.start_time:%H:%M}"
            )
        return self


DEFAULT_SCHEDULE = WorkSchedule(employee_id=None)


@dataclass(frozen=True)
class ResolvedSchedule:
    """Expectations for one employee on one date, as absolute instants."""

    is_working_day: bool
    expected_clock_in: Optional[datetime] = None
    expected_clock_out: Optional[datetime] = None
    minimum_daily_hours: float = DEFAULT_MINIMUM_DAILY_HOURS

    @classmethod
    def non_working(cls) -> "ResolvedSchedule":
        return cls(is_working_day=False, minimum_daily_hours=0.0)

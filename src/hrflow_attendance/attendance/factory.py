from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import minutes_between
from ..schedules.model import ResolvedSchedule
from .model import AttendanceDay
from .rules import ClassificationRules
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import ClassificationStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.non_working_strategy import NonWorkingStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class ClassificationStrategyFactory:
    """Factory Pattern: choose the strategy for a day based on the rules.

    Order matters: leave beats everything, then non-working days, then a
    missing clock-in.
    """

    def for_day(self, *, day: AttendanceDay, schedule: ResolvedSchedule, rules: ClassificationRules) -> ClassificationStrategy:
        if day.on_leave:
            return LeaveStrategy()
        if not schedule.is_working_day:
            return NonWorkingStrategy()
        if day.clock_in is None:
            return AbsentStrategy()

        if minutes_between(schedule.expected_clock_in, day.clock_in) > rules.late_grace_minutes:
            return LateStrategy()
        return PresentStrategy()

from __future__ import annotations

from abc import ABC, abstractmethod

from ...common.datetime_utils import hours_between, minutes_between
from ...core.enums import DayStatus
from ...schedules.model import ResolvedSchedule
from ..model import AttendanceDay, DayClassification
from ..rules import ClassificationRules


class ClassificationStrategy(ABC):
    """Strategy Pattern: encapsulate how one kind of day is classified."""

    @abstractmethod
    def classify(self, *, day: AttendanceDay, schedule: ResolvedSchedule, rules: ClassificationRules) -> DayClassification:
        raise NotImplementedError


class WorkedDayStrategy(ClassificationStrategy):
    """Shared measurement for days with a clock-in on a working day."""

    status: DayStatus = DayStatus.PRESENT

    def classify(self, *, day: AttendanceDay, schedule: ResolvedSchedule, rules: ClassificationRules) -> DayClassification:
        lateness = max(0, minutes_between(schedule.expected_clock_in, day.clock_in))

        earliness = 0
        total_hours = None
        if day.clock_out is not None:
            earliness = max(0, minutes_between(day.clock_out, schedule.expected_clock_out))
            total_hours = hours_between(day.clock_in, day.clock_out)

        return DayClassification(
            work_date=day.work_date,
            status=self.status,
            lateness_minutes=lateness,
            earliness_minutes=earliness,
            total_hours=total_hours,
        )

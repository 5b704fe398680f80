from __future__ import annotations

from ...core.enums import DayStatus
from ...schedules.model import ResolvedSchedule
from ..model import AttendanceDay, DayClassification
from ..rules import ClassificationRules
from .base import ClassificationStrategy


class NonWorkingStrategy(ClassificationStrategy):
    def classify(self, *, day: AttendanceDay, schedule: ResolvedSchedule, rules: ClassificationRules) -> DayClassification:
        return DayClassification(work_date=day.work_date, status=DayStatus.NON_WORKING)

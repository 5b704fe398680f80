from __future__ import annotations

from typing import Optional

from ..core.exceptions import MalformedSchedule
from ..schedules.model import ResolvedSchedule
from .factory import ClassificationStrategyFactory
from .model import AttendanceDay, DayClassification
from .rules import ClassificationRules


class AttendanceClassifier:
    """Turns one (overlaid) AttendanceDay plus its schedule into a status.

    Pure and deterministic: the same inputs always give the same result.
    """

    def __init__(
        self,
        rules: Optional[ClassificationRules] = None,
        *,
        strategy_factory: Optional[ClassificationStrategyFactory] = None,
    ):
        self._rules = rules or ClassificationRules()
        self._factory = strategy_factory or ClassificationStrategyFactory()

    @property
    def rules(self) -> ClassificationRules:
        return self._rules

    @staticmethod
    def _check_schedule(schedule: ResolvedSchedule) -> None:
        if not schedule.is_working_day:
            return
        start, end = schedule.expected_clock_in, schedule.expected_clock_out
        if start is None or end is None:
            raise MalformedSchedule("Working day without expected clock-in/out")
        if end <= start:
            raise MalformedSchedule("Expected clock-out must be after expected clock-in")

    def classify(self, day: AttendanceDay, schedule: ResolvedSchedule) -> DayClassification:
        self._check_schedule(schedule)
        strategy = self._factory.for_day(day=day, schedule=schedule, rules=self._rules)
        return strategy.classify(day=day, schedule=schedule, rules=self._rules)

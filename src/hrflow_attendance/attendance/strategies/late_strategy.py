from __future__ import annotations

from ...core.enums import DayStatus
from .base import WorkedDayStrategy


class LateStrategy(WorkedDayStrategy):
    """Late clock-in."""

    status = DayStatus.LATE

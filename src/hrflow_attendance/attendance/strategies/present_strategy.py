from __future__ import annotations

from ...core.enums import DayStatus
from .base import WorkedDayStrategy


class PresentStrategy(WorkedDayStrategy):
    """Clocked in on time (or within the grace window)."""

    status = DayStatus.PRESENT

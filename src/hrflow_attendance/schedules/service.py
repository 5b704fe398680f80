from __future__ import annotations

import logging
from datetime import time
from typing import Iterable, Optional

from ..core.constants import DEFAULT_MINIMUM_DAILY_HOURS, WEEKDAY_NAMES
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.model import Capability, has_capability
from .model import WorkSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    @staticmethod
    def _normalize_days(working_days: Iterable[str]) -> frozenset[str]:
        by_lower = {name.lower(): name for name in WEEKDAY_NAMES}
        out = set()
        for raw in working_days or ():
            name = by_lower.get(str(raw).strip().lower())
            if not name:
                raise ValidationError(f"Unknown weekday: {raw!r}")
            out.add(name)
        return frozenset(out)

    def configure(
        self,
        *,
        current_role: Role,
        employee_id: int,
        start_time: Optional[time],
        end_time: Optional[time],
        working_days: Iterable[str] = (),
        minimum_daily_hours: Optional[float] = None,
    ) -> int:
        if not has_capability(current_role, Capability.MANAGE_SCHEDULES):
            raise AuthorizationError("You are not allowed to manage schedules")

        if int(employee_id) <= 0:
            raise ValidationError("Employee is invalid")
        if start_time is None or end_time is None:
            raise ValidationError("Start and end time are required")

        hours = DEFAULT_MINIMUM_DAILY_HOURS if minimum_daily_hours is None else float(minimum_daily_hours)
        if hours < 0 or hours > 24:
            raise ValidationError("Minimum daily hours must be between 0 and 24")

        schedule = WorkSchedule(
            employee_id=int(employee_id),
            start_time=start_time,
            end_time=end_time,
            working_days=self._normalize_days(working_days),
            minimum_daily_hours=hours,
        ).validate()

        schedule_id = self._schedules.upsert(
            employee_id=schedule.employee_id,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            working_days=sorted(schedule.working_days, key=WEEKDAY_NAMES.index),
            minimum_daily_hours=schedule.minimum_daily_hours,
        )
        logger.info("Schedule configured", extra={"employee_id": schedule.employee_id, "schedule_id": schedule_id})
        return schedule_id

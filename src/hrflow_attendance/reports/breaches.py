from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..attendance.model import DayClassification
from ..core.constants import CONSECUTIVE_ABSENCE_THRESHOLD, MONTHLY_ABSENCE_THRESHOLD
from ..core.enums import BreachKind, DayStatus


@dataclass(frozen=True)
class Breach:
    kind: BreachKind
    count: int
    dates: tuple[date, ...]
    message: str

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "count": self.count,
            "dates": [d.isoformat() for d in self.dates],
            "message": self.message,
        }


def _consecutive(run: list[date]) -> Breach:
    return Breach(
        kind=BreachKind.CONSECUTIVE,
        count=len(run),
        dates=tuple(run),
        message=f"{len(run)} consecutive absences detected ({run[0]:%b %d} - {run[-1]:%b %d})",
    )


def detect_breaches(
    classifications: Iterable[DayClassification],
    *,
    consecutive_threshold: int = CONSECUTIVE_ABSENCE_THRESHOLD,
    monthly_threshold: int = MONTHLY_ABSENCE_THRESHOLD,
) -> list[Breach]:
    """Absence patterns worth flagging on an attendance calendar.

    Any day that is not absent (including non-working and leave days) ends a
    run of consecutive absences, and so does a date missing from the input.
    """
    days = sorted(classifications, key=lambda c: c.work_date)
    breaches: list[Breach] = []

    run: list[date] = []
    for c in days:
        absent = c.status == DayStatus.ABSENT
        if absent and run and c.work_date == run[-1] + timedelta(days=1):
            run.append(c.work_date)
            continue
        if len(run) >= consecutive_threshold:
            breaches.append(_consecutive(run))
        run = [c.work_date] if absent else []
    if len(run) >= consecutive_threshold:
        breaches.append(_consecutive(run))

    absences = [c.work_date for c in days if c.status == DayStatus.ABSENT]
    if len(absences) > monthly_threshold:
        breaches.append(
            Breach(
                kind=BreachKind.MONTHLY,
                count=len(absences),
                dates=tuple(absences),
                message=f"Total of {len(absences)} absences this month (exceeds {monthly_threshold}-day threshold)",
            )
        )
    return breaches

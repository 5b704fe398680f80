from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import DayClassification, DayFailure
from ..common.datetime_utils import month_bounds, week_start


@dataclass(frozen=True)
class HoursDeduction:
    """Fixed break/lunch time subtracted from each worked day when enabled."""

    hours: int = 0
    minutes: int = 0
    enabled: bool = False

    @property
    def in_hours(self) -> float:
        if not self.enabled:
            return 0.0
        return self.hours + self.minutes / 60

    def apply(self, hours: float) -> float:
        return max(0.0, hours - self.in_hours)


def _average(total_hours: float, days_worked: int) -> float:
    return total_hours / days_worked if days_worked else 0.0


@dataclass(frozen=True)
class WeekSummary:
    """Monday..Sunday range; totals only count days inside the month."""

    week_start: date
    week_end: date
    total_hours: float
    days_worked: int

    @property
    def average_hours(self) -> float:
        return _average(self.total_hours, self.days_worked)

    def to_dict(self) -> dict:
        return {
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "total_hours": round(self.total_hours, 2),
            "days_worked": self.days_worked,
            "average_hours": round(self.average_hours, 2),
        }


@dataclass(frozen=True)
class MonthSummary:
    year: int
    month: int
    total_hours: float
    days_worked: int
    weeks: tuple[WeekSummary, ...] = ()
    failed_dates: tuple[date, ...] = ()

    @property
    def average_hours(self) -> float:
        return _average(self.total_hours, self.days_worked)

    def to_dict(self) -> dict:
        return {
            "month": f"{self.year:04d}-{self.month:02d}",
            "total_hours": round(self.total_hours, 2),
            "days_worked": self.days_worked,
            "average_hours": round(self.average_hours, 2),
            "weeks": [w.to_dict() for w in self.weeks],
            "failed_dates": [d.isoformat() for d in self.failed_dates],
        }


def month_weeks(month: date) -> list[tuple[date, date]]:
    """Monday-start weeks overlapping the month, shown in full."""
    first, last = month_bounds(month)
    weeks = []
    start = week_start(first)
    while start <= last:
        weeks.append((start, start + timedelta(days=6)))
        start += timedelta(days=7)
    return weeks


def _in_month(classifications: Iterable[DayClassification], month: date) -> dict[date, DayClassification]:
    first, last = month_bounds(month)
    # Keyed by date so a day fed twice is still counted once.
    return {c.work_date: c for c in classifications if first <= c.work_date <= last}


def _worked_hours(c: DayClassification, deduction: HoursDeduction) -> Optional[float]:
    if not c.is_worked or c.total_hours is None:
        return None
    return deduction.apply(c.total_hours)


def _summarize(days: Iterable[DayClassification], deduction: HoursDeduction) -> tuple[float, int]:
    total = 0.0
    worked = 0
    for c in days:
        hours = _worked_hours(c, deduction)
        if hours is None:
            continue
        total += hours
        worked += 1
    return total, worked


def aggregate_weeks(
    classifications: Iterable[DayClassification],
    month: date,
    *,
    deduction: Optional[HoursDeduction] = None,
) -> list[WeekSummary]:
    deduction = deduction or HoursDeduction()
    by_date = _in_month(classifications, month)

    out: list[WeekSummary] = []
    for start, end in month_weeks(month):
        days = [c for d, c in by_date.items() if start <= d <= end]
        total, worked = _summarize(days, deduction)
        out.append(WeekSummary(week_start=start, week_end=end, total_hours=total, days_worked=worked))
    return out


def aggregate_month(
    classifications: Iterable[DayClassification],
    month: date,
    *,
    deduction: Optional[HoursDeduction] = None,
    failures: Sequence[DayFailure] = (),
) -> MonthSummary:
    classifications = list(classifications)
    weeks = aggregate_weeks(classifications, month, deduction=deduction)
    total, worked = _summarize(_in_month(classifications, month).values(), deduction or HoursDeduction())

    first, last = month_bounds(month)
    return MonthSummary(
        year=first.year,
        month=first.month,
        total_hours=total,
        days_worked=worked,
        weeks=tuple(weeks),
        failed_dates=tuple(sorted(f.work_date for f in failures if first <= f.work_date <= last)),
    )

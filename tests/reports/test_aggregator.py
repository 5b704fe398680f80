from datetime import date, timedelta

import pytest

from hrflow_attendance.attendance.model import DayClassification, DayFailure
from hrflow_attendance.core.enums import DayStatus
from hrflow_attendance.core.exceptions import MalformedSchedule
from hrflow_attendance.reports.aggregator import (
    HoursDeduction,
    aggregate_month,
    aggregate_weeks,
    month_weeks,
)


def _worked(day: date, hours: float = 8.0, status: DayStatus = DayStatus.PRESENT) -> DayClassification:
    return DayClassification(work_date=day, status=status, total_hours=hours)


@pytest.mark.parametrize("n", [0, 1, 5, 20])
def test_n_full_days_total_eight_n(n):
    days = [_worked(date(2024, 1, 1) + timedelta(days=i)) for i in range(n)]

    summary = aggregate_month(days, date(2024, 1, 1))

    assert summary.total_hours == pytest.approx(8.0 * n)
    assert summary.days_worked == n
    assert summary.average_hours == (8.0 if n else 0.0)


def test_weeks_start_on_monday_and_cover_month():
    weeks = month_weeks(date(2024, 1, 1))

    assert weeks[0] == (date(2024, 1, 1), date(2024, 1, 7))
    assert weeks[-1] == (date(2024, 1, 29), date(2024, 2, 4))
    assert len(weeks) == 5


def test_prior_month_day_excluded_but_week_range_shown():
    days = [_worked(date(2024, 1, 30), 9.0), _worked(date(2024, 2, 1), 8.0), _worked(date(2024, 2, 2), 7.0)]

    summary = aggregate_month(days, date(2024, 2, 1))

    first_week = summary.weeks[0]
    assert first_week.week_start == date(2024, 1, 29)
    assert first_week.total_hours == pytest.approx(15.0)
    assert first_week.days_worked == 2
    assert summary.total_hours == pytest.approx(15.0)


def test_month_total_equals_sum_of_weeks():
    days = [_worked(date(2024, 3, d), 7.25) for d in (1, 4, 11, 18, 25, 29)]

    summary = aggregate_month(days, date(2024, 3, 1))

    assert summary.total_hours == pytest.approx(sum(w.total_hours for w in summary.weeks))
    assert summary.days_worked == sum(w.days_worked for w in summary.weeks)


def test_only_completed_worked_days_count():
    days = [
        _worked(date(2024, 1, 2), 8.0, DayStatus.LATE),
        DayClassification(work_date=date(2024, 1, 3), status=DayStatus.LATE, lateness_minutes=20),
        DayClassification(work_date=date(2024, 1, 4), status=DayStatus.ABSENT),
        DayClassification(work_date=date(2024, 1, 5), status=DayStatus.LEAVE),
        DayClassification(work_date=date(2024, 1, 7), status=DayStatus.NON_WORKING),
    ]

    summary = aggregate_month(days, date(2024, 1, 1))

    assert summary.days_worked == 1
    assert summary.total_hours == pytest.approx(8.0)


def test_duplicate_day_counted_once():
    day = _worked(date(2024, 1, 2), 8.0)

    assert aggregate_month([day, day], date(2024, 1, 1)).total_hours == pytest.approx(8.0)


def test_no_worked_days_average_is_zero():
    summary = aggregate_month([], date(2024, 1, 1))

    assert summary.average_hours == 0.0
    assert all(w.average_hours == 0.0 for w in summary.weeks)


def test_enabled_deduction_applies_per_worked_day():
    days = [_worked(date(2024, 1, 2), 9.0), _worked(date(2024, 1, 3), 0.25)]
    deduction = HoursDeduction(hours=0, minutes=30, enabled=True)

    weeks = aggregate_weeks(days, date(2024, 1, 1), deduction=deduction)

    # 9.0 - 0.5 + max(0, 0.25 - 0.5)
    assert weeks[0].total_hours == pytest.approx(8.5)
    assert weeks[0].days_worked == 2


def test_disabled_deduction_is_ignored():
    deduction = HoursDeduction(hours=1, minutes=0, enabled=False)

    summary = aggregate_month([_worked(date(2024, 1, 2), 9.0)], date(2024, 1, 1), deduction=deduction)

    assert summary.total_hours == pytest.approx(9.0)


def test_failures_are_listed_without_affecting_totals():
    failure = DayFailure(work_date=date(2024, 1, 9), error=MalformedSchedule("bad"))

    summary = aggregate_month([_worked(date(2024, 1, 8))], date(2024, 1, 1), failures=[failure])

    assert summary.failed_dates == (date(2024, 1, 9),)
    assert summary.to_dict()["failed_dates"] == ["2024-01-09"]
    assert summary.total_hours == pytest.approx(8.0)

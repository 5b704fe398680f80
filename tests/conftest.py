from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timezone

import pytest

from hrflow_attendance.attendance.model import AttendanceDay
from hrflow_attendance.common.timezone import RegionalClock
from hrflow_attendance.core.enums import RequestStatus
from hrflow_attendance.employees.model import FullEmployeeRecord
from hrflow_attendance.requests.model import ExceptionRequest, LeaveBalance, LeaveRequest
from hrflow_attendance.schedules.model import WorkSchedule


class FakeEmployeesRepo:
    def __init__(self, employees=()):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))

    def list_active(self):
        return [e for e in self._by_id.values() if e.status == "active"]


class FakeAttendanceRepo:
    def __init__(self, days=()):
        self._next_id = 1
        self.rows: dict[int, AttendanceDay] = {}
        for d in days:
            self.add(d)

    def add(self, day: AttendanceDay) -> AttendanceDay:
        rid = day.attendance_id or self._next_id
        self._next_id = max(self._next_id, rid) + 1
        day = replace(day, attendance_id=rid)
        self.rows[rid] = day
        return day

    def get_recent_for_employee(self, employee_id, limit):
        rows = [r for r in self.rows.values() if r.employee_id == int(employee_id)]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)[: int(limit)]

    def get_for_employee_and_date(self, employee_id, work_date):
        for r in self.rows.values():
            if r.employee_id == int(employee_id) and r.work_date == work_date:
                return r
        return None

    def list_range(self, *, start, end, employee_id=None):
        return [
            r
            for r in sorted(self.rows.values(), key=lambda r: r.work_date)
            if start <= r.work_date <= end and (employee_id is None or r.employee_id == employee_id)
        ]

    def create_clock_in(self, *, employee_id, work_date, clock_in, recorded_status, is_remote=False, note=None):
        day = self.add(
            AttendanceDay(
                employee_id=employee_id,
                work_date=work_date,
                clock_in=clock_in,
                recorded_status=recorded_status,
                is_remote=is_remote,
                note=note,
            )
        )
        return day.attendance_id

    def update_clock_out(self, *, attendance_id, clock_out, total_hours):
        row = self.rows.get(int(attendance_id))
        if not row or row.clock_out is not None:
            return False
        self.rows[row.attendance_id] = replace(row, clock_out=clock_out, total_hours=total_hours)
        return True


class FakeSchedulesRepo:
    def __init__(self, schedules=()):
        self._next_id = 1
        self.by_employee: dict[int, WorkSchedule] = {}
        for s in schedules:
            self.by_employee[s.employee_id] = s

    def get_active_for_employee(self, employee_id):
        s = self.by_employee.get(int(employee_id))
        return s if s and s.is_active else None

    def list_active(self):
        return [s for s in self.by_employee.values() if s.is_active]

    def upsert(self, *, employee_id, start_time, end_time, working_days, minimum_daily_hours):
        existing = self.by_employee.get(int(employee_id))
        schedule_id = existing.schedule_id if existing and existing.schedule_id else self._next_id
        self._next_id = max(self._next_id, schedule_id) + 1
        self.by_employee[int(employee_id)] = WorkSchedule(
            employee_id=int(employee_id),
            start_time=start_time,
            end_time=end_time,
            working_days=frozenset(working_days),
            minimum_daily_hours=minimum_daily_hours,
            schedule_id=schedule_id,
        )
        return schedule_id


class FakeRequestsRepo:
    def __init__(self, exceptions=(), leaves=()):
        self._next_id = 100
        self.exceptions: dict[int, ExceptionRequest] = {e.request_id: e for e in exceptions}
        self.leaves: dict[int, LeaveRequest] = {lv.request_id: lv for lv in leaves}
        self.balances: dict[tuple, LeaveBalance] = {}
        self.decided_at = datetime(2026, 2, 1, 11, 0, tzinfo=timezone.utc)

    def _new_id(self):
        rid = self._next_id
        self._next_id += 1
        return rid

    def create_exception(
        self, *, employee_id, work_date, exception_type, proposed_clock_in, proposed_clock_out, reason, attendance_id=None
    ):
        rid = self._new_id()
        self.exceptions[rid] = ExceptionRequest(
            request_id=rid,
            employee_id=employee_id,
            work_date=work_date,
            exception_type=exception_type,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=datetime(2026, 2, 1, 10, 0, tzinfo=timezone.utc),
            proposed_clock_in=proposed_clock_in,
            proposed_clock_out=proposed_clock_out,
            attendance_id=attendance_id,
        )
        return rid

    def get_exception(self, *, request_id):
        return self.exceptions.get(int(request_id))

    def list_exceptions(self, *, start=None, end=None, employee_id=None, status=None, limit=500):
        out = [
            r
            for r in self.exceptions.values()
            if (start is None or r.work_date >= start)
            and (end is None or r.work_date <= end)
            and (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
        ]
        return out[:limit]

    def decide_exception(self, *, request_id, status, decided_by, admin_comment=None):
        req = self.exceptions.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.exceptions[req.request_id] = replace(
            req, status=status, decided_by=decided_by, decided_at=self.decided_at, admin_comment=admin_comment
        )
        return True

    def create_leave(self, *, employee_id, start_date, end_date, leave_type, reason):
        rid = self._new_id()
        self.leaves[rid] = LeaveRequest(
            request_id=rid,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            leave_type=leave_type,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=datetime(2026, 2, 1, 10, 0, tzinfo=timezone.utc),
        )
        return rid

    def get_leave(self, *, request_id):
        return self.leaves.get(int(request_id))

    def list_leaves(self, *, start=None, end=None, employee_id=None, status=None, limit=500):
        out = [
            r
            for r in self.leaves.values()
            if (end is None or r.start_date <= end)
            and (start is None or r.end_date >= start)
            and (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
        ]
        return out[:limit]

    def decide_leave(self, *, request_id, status, decided_by, admin_comment=None):
        req = self.leaves.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.leaves[req.request_id] = replace(
            req, status=status, decided_by=decided_by, decided_at=self.decided_at, admin_comment=admin_comment
        )
        return True

    def get_balance(self, *, employee_id, leave_type, year):
        return self.balances.get((int(employee_id), leave_type, int(year)))

    def list_balances(self, *, employee_id, year):
        return sorted(
            (b for b in self.balances.values() if b.employee_id == int(employee_id) and b.year == int(year)),
            key=lambda b: b.leave_type,
        )

    def upsert_allocation(self, *, employee_id, leave_type, year, allocated_days):
        key = (int(employee_id), leave_type, int(year))
        existing = self.balances.get(key)
        if existing:
            self.balances[key] = replace(existing, allocated_days=allocated_days)
            return existing.balance_id
        balance_id = self._new_id()
        self.balances[key] = LeaveBalance(
            employee_id=int(employee_id),
            leave_type=leave_type,
            year=int(year),
            allocated_days=allocated_days,
            balance_id=balance_id,
        )
        return balance_id

    def add_used_days(self, *, employee_id, leave_type, year, days):
        key = (int(employee_id), leave_type, int(year))
        balance = self.balances.get(key)
        if not balance or balance.remaining_days < days:
            return False
        self.balances[key] = replace(balance, used_days=balance.used_days + days)
        return True


def make_employee(employee_id: int, name: str = "Aisha Khan", **kwargs) -> FullEmployeeRecord:
    return FullEmployeeRecord(
        employee_id=employee_id,
        full_name=name,
        email=kwargs.pop("email", f"employee{employee_id}@example.com"),
        department=kwargs.pop("department", "Operations"),
        position=kwargs.pop("position", "Analyst"),
        phone=kwargs.pop("phone", "+971500000000"),
        **kwargs,
    )


@pytest.fixture
def clock():
    return RegionalClock(4)


@pytest.fixture
def at(clock):
    """Build a UTC instant from a regional wall-clock reading."""

    def _at(day: date, hh: int, mm: int = 0, ss: int = 0):
        return clock.combine(day, time(hh, mm, ss))

    return _at


@pytest.fixture
def employees_repo():
    return FakeEmployeesRepo([make_employee(1), make_employee(2, "Omar Haddad")])


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def schedules_repo():
    return FakeSchedulesRepo()


@pytest.fixture
def requests_repo():
    return FakeRequestsRepo()


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def exception_factory():
    def _make(request_id, employee_id, work_date, exception_type, *, status=RequestStatus.APPROVED, **kwargs):
        return ExceptionRequest(
            request_id=request_id,
            employee_id=employee_id,
            work_date=work_date,
            exception_type=exception_type,
            reason=kwargs.pop("reason", "Badge reader was offline"),
            status=status,
            created_at=kwargs.pop("created_at", datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)),
            **kwargs,
        )

    return _make


@pytest.fixture
def leave_factory():
    def _make(request_id, employee_id, start_date, end_date, *, status=RequestStatus.APPROVED, **kwargs):
        return LeaveRequest(
            request_id=request_id,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            leave_type=kwargs.pop("leave_type", "annual"),
            status=status,
            created_at=kwargs.pop("created_at", datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)),
            **kwargs,
        )

    return _make

from __future__ import annotations

from datetime import date, datetime

import pytest

from odoo_attendance.attendance.model import DateFilter
from odoo_attendance.attendance.odoo_attendance_repository import OdooAttendanceRepository
from odoo_attendance.attendance.service import AttendanceService
from odoo_attendance.core.exceptions import AlreadyCheckedIn, ConflictError, ServiceError, ValidationError


def make_service(rpc, clock):
    return AttendanceService(OdooAttendanceRepository(rpc), clock=clock)


def test_get_current_attendance_none_when_off_the_clock(odoo, rpc, clock):
    odoo.add_attendance(5, "2026-02-03 08:00:00", "2026-02-03 16:00:00", 8.0)
    svc = make_service(rpc, clock)

    assert svc.get_current_attendance(5) is None


def test_get_current_attendance_returns_open_record(odoo, rpc, clock):
    open_id = odoo.add_attendance(5, "2026-02-04 08:00:00")
    svc = make_service(rpc, clock)

    record = svc.get_current_attendance(5)

    assert record.attendance_id == open_id
    assert record.is_open
    assert record.employee_id == 5
    assert record.check_in_time == datetime(2026, 2, 4, 8, 0, 0)
    _, _, _, model, method, args, kwargs = odoo.object_calls("search_read")[0]
    assert model == "hr.attendance"
    assert args == [[["employee_id", "=", 5], ["check_out", "=", False]]]
    assert kwargs["limit"] == 1
    assert kwargs["order"] == "check_in desc"


def test_check_in_creates_record_with_second_precision(odoo, rpc, clock):
    svc = make_service(rpc, clock)

    attendance_id = svc.check_in(5)

    created = odoo.object_calls("create")[0][5][0]
    assert created == {"employee_id": 5, "check_in": "2026-02-04 09:15:30"}
    record = svc.get_current_attendance(5)
    assert record.attendance_id == attendance_id
    assert record.check_in_time == datetime(2026, 2, 4, 9, 15, 30)


def test_check_in_twice_fails_and_creates_nothing(odoo, rpc, clock):
    svc = make_service(rpc, clock)
    svc.check_in(5)

    with pytest.raises(AlreadyCheckedIn):
        svc.check_in(5)

    assert len(odoo.object_calls("create")) == 1
    assert len(odoo.open_records(5)) == 1


def test_sequential_check_in_out_keeps_single_open_record(odoo, rpc, clock):
    svc = make_service(rpc, clock)

    for hour in (8, 10, 13):
        clock.now = datetime(2026, 2, 4, hour, 0, 0)
        attendance_id = svc.check_in(5)
        assert len(odoo.open_records(5)) == 1
        clock.now = datetime(2026, 2, 4, hour + 1, 0, 0)
        svc.check_out(attendance_id)
        assert odoo.open_records(5) == []


def test_check_out_stamps_current_time(odoo, rpc, clock):
    open_id = odoo.add_attendance(5, "2026-02-04 08:00:00")
    svc = make_service(rpc, clock)

    assert svc.check_out(open_id) is True

    ids, values = odoo.object_calls("write")[0][5]
    assert ids == [open_id]
    assert values == {"check_out": "2026-02-04 09:15:30"}


def test_second_check_out_overwrites_previous_time(odoo, rpc, clock):
    open_id = odoo.add_attendance(5, "2026-02-04 08:00:00")
    svc = make_service(rpc, clock)
    svc.check_out(open_id)

    clock.now = datetime(2026, 2, 4, 11, 0, 0)
    svc.check_out(open_id)

    row = next(r for r in odoo.tables["hr.attendance"] if r["id"] == open_id)
    assert row["check_out"] == "2026-02-04 11:00:00"


def test_check_out_expect_open_rejects_closed_record(odoo, rpc, clock):
    closed_id = odoo.add_attendance(5, "2026-02-04 08:00:00", "2026-02-04 09:00:00", 1.0)
    svc = make_service(rpc, clock)

    with pytest.raises(ConflictError):
        svc.check_out(closed_id, expect_open=True)

    assert odoo.object_calls("write") == []


def test_check_out_expect_open_accepts_open_record(odoo, rpc, clock):
    open_id = odoo.add_attendance(5, "2026-02-04 08:00:00")
    svc = make_service(rpc, clock)

    assert svc.check_out(open_id, expect_open=True) is True


@pytest.mark.parametrize("bad", [None, 0, False, "abc"])
def test_missing_identifiers_are_validation_errors(rpc, clock, bad):
    svc = make_service(rpc, clock)

    with pytest.raises(ValidationError):
        svc.check_in(bad)
    with pytest.raises(ValidationError):
        svc.check_out(bad)


def test_user_only_account_reports_no_employee(rpc, clock):
    svc = make_service(rpc, clock)

    with pytest.raises(ValidationError) as exc:
        svc.get_weekly_summary(None)

    assert "No employee" in str(exc.value)


def test_remote_failures_are_resignaled(odoo, rpc, clock, network_down):
    svc = make_service(rpc, clock)
    odoo.fail_with = network_down

    with pytest.raises(ServiceError, match="Could not retrieve attendance status."):
        svc.get_current_attendance(5)
    with pytest.raises(ServiceError, match="Could not retrieve attendance status."):
        svc.check_in(5)
    with pytest.raises(ServiceError, match="Could not register check-out"):
        svc.check_out(9)
    with pytest.raises(ServiceError, match="Could not retrieve attendance history."):
        svc.get_attendance_history(5)
    with pytest.raises(ServiceError, match="Could not retrieve weekly summary."):
        svc.get_weekly_summary(5)


def test_check_in_create_failure_is_resignaled(odoo, rpc, clock, network_down):
    svc = make_service(rpc, clock)
    odoo.fail_with = network_down
    odoo.fail_when = lambda params: params["args"][4] == "create"

    with pytest.raises(ServiceError, match="Could not register check-in"):
        svc.check_in(5)

    assert odoo.open_records(5) == []


def test_history_newest_first_with_limit(odoo, rpc, clock):
    for day in (1, 2, 3):
        odoo.add_attendance(5, f"2026-02-0{day} 08:00:00", f"2026-02-0{day} 12:00:00", 4.0)
    odoo.add_attendance(6, "2026-02-03 08:00:00", "2026-02-03 12:00:00", 4.0)
    svc = make_service(rpc, clock)

    records = svc.get_attendance_history(5, limit=2)

    assert [r.check_in_time.day for r in records] == [3, 2]
    assert all(r.employee_id == 5 for r in records)


def test_history_date_filter_is_inclusive(odoo, rpc, clock):
    for day in (1, 2, 3, 4):
        odoo.add_attendance(5, f"2026-02-0{day} 18:30:00", f"2026-02-0{day} 19:00:00", 0.5)
    svc = make_service(rpc, clock)

    records = svc.get_attendance_history(5, 50, DateFilter(start=date(2026, 2, 2), end=date(2026, 2, 3)))

    assert [r.check_in_time.day for r in records] == [3, 2]
    domain = odoo.object_calls("search_read")[0][5][0]
    assert ["check_in", ">=", "2026-02-02 00:00:00"] in domain
    assert ["check_in", "<=", "2026-02-03 23:59:59"] in domain


def test_weekly_summary_on_wednesday(odoo, rpc, clock):
    odoo.add_attendance(5, "2026-01-30 08:00:00", "2026-01-30 16:00:00", 8.0)
    odoo.add_attendance(5, "2026-02-02 08:00:00", "2026-02-02 11:30:00", 3.5)
    odoo.add_attendance(5, "2026-02-03 08:00:00", "2026-02-03 12:00:00", 4.0)
    odoo.add_attendance(5, "2026-02-04 08:00:00", "2026-02-04 08:45:00", 0.75)
    svc = make_service(rpc, clock)

    summary = svc.get_weekly_summary(5)

    assert summary.week_start == date(2026, 2, 2)
    assert summary.total_hours == 8.25
    assert summary.record_count == 3
    assert [r.check_in_time.day for r in summary.records] == [2, 3, 4]


def test_weekly_summary_on_sunday_uses_previous_monday(odoo, rpc, clock):
    clock.now = datetime(2026, 2, 8, 20, 0, 0)
    svc = make_service(rpc, clock)

    summary = svc.get_weekly_summary(5)

    assert summary.week_start == date(2026, 2, 2)
    domain = odoo.object_calls("search_read")[0][5][0]
    assert ["check_in", ">=", "2026-02-02 00:00:00"] in domain


def test_weekly_summary_counts_open_record_as_zero_hours(odoo, rpc, clock):
    odoo.add_attendance(5, "2026-02-02 08:00:00", "2026-02-02 10:10:00", 2.1666666)
    odoo.add_attendance(5, "2026-02-04 08:00:00", worked_hours=False)
    svc = make_service(rpc, clock)

    summary = svc.get_weekly_summary(5)

    assert summary.total_hours == 2.17
    assert summary.record_count == 2


def test_refresh_home_fetches_both(odoo, rpc, clock):
    odoo.add_attendance(5, "2026-02-02 08:00:00", "2026-02-02 12:00:00", 4.0)
    open_id = odoo.add_attendance(5, "2026-02-04 08:00:00")
    svc = make_service(rpc, clock)

    state = svc.refresh_home(5)

    assert state.is_checked_in
    assert state.current.attendance_id == open_id
    assert state.weekly.total_hours == 4.0
    assert state.weekly.record_count == 2


def test_refresh_home_fails_if_either_fetch_fails(odoo, rpc, clock, network_down):
    svc = make_service(rpc, clock)
    odoo.fail_with = network_down
    odoo.fail_when = lambda params: params["args"][6].get("limit") is None

    with pytest.raises(ServiceError, match="weekly summary"):
        svc.refresh_home(5)

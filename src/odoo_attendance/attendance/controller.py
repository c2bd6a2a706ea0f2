from __future__ import annotations

from datetime import datetime
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import calculate_duration, format_duration, parse_iso_date, to_server_datetime
from ..common.responses import fail
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT, SERVER_DATE_FORMAT
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, DateFilter, WeeklySummary


def _fmt(value: Optional[datetime]) -> Optional[str]:
    return to_server_datetime(value) if value else None


def record_to_json(record: AttendanceRecord, *, now: Optional[datetime] = None) -> dict:
    if record.is_open:
        duration = calculate_duration(record.check_in_time, now=now)
    else:
        duration = format_duration(record.worked_hours)
    return {
        "id": record.attendance_id,
        "employee_id": record.employee_id,
        "check_in": _fmt(record.check_in_time),
        "check_out": _fmt(record.check_out_time),
        "worked_hours": record.worked_hours,
        "duration": duration,
    }


def summary_to_json(summary: WeeklySummary) -> dict:
    return {
        "week_start": summary.week_start.strftime(SERVER_DATE_FORMAT),
        "total_hours": summary.total_hours,
        "total_label": format_duration(summary.total_hours),
        "record_count": summary.record_count,
        "records": [record_to_json(r) for r in summary.records],
    }


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not container.auth_service.is_authenticated:
                return fail("Please log in to continue.", 401)
            return view(*args, **kwargs)

        return wrapper

    def _employee_id() -> Optional[int]:
        current = container.auth_service.current
        return current.employee.employee_id if current else None

    def _parse_date_arg(name: str):
        value = request.args.get(name)
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date for '{name}', expected YYYY-MM-DD")

    @app.route("/api/home", methods=["GET"], endpoint="home")
    @login_required
    def home():
        state = container.attendance_service.refresh_home(_employee_id())
        return jsonify({
            "success": True,
            "checked_in": state.is_checked_in,
            "current": record_to_json(state.current) if state.current else None,
            "weekly": summary_to_json(state.weekly),
        }), 200

    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        attendance_id = container.attendance_service.check_in(_employee_id())
        return jsonify({"success": True, "message": "Checked in", "attendance_id": attendance_id}), 200

    @app.route("/api/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        data = request.get_json(silent=True) or {}
        attendance_id = data.get("attendance_id")
        if attendance_id is None:
            current = container.attendance_service.get_current_attendance(_employee_id())
            attendance_id = current.attendance_id if current else None

        container.attendance_service.check_out(attendance_id, expect_open=bool(data.get("expect_open", False)))
        return jsonify({"success": True, "message": "Checked out", "attendance_id": attendance_id}), 200

    @app.route("/api/history", methods=["GET"], endpoint="history")
    @login_required
    def history():
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            raise ValidationError("Invalid limit")

        start = _parse_date_arg("from")
        end = _parse_date_arg("to")
        date_filter = DateFilter(start=start, end=end) if (start or end) else None

        records = container.attendance_service.get_attendance_history(_employee_id(), limit, date_filter)
        return jsonify({"success": True, "records": [record_to_json(r) for r in records]}), 200

    @app.route("/api/summary/week", methods=["GET"], endpoint="weekly_summary")
    @login_required
    def weekly_summary():
        summary = container.attendance_service.get_weekly_summary(_employee_id())
        return jsonify({"success": True, "summary": summary_to_json(summary)}), 200

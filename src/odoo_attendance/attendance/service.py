from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import end_of_day, now_local, start_of_day, week_start
from ..common.validators import require_id
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import AlreadyCheckedIn, ConflictError, RpcError, ServiceError
from .model import AttendanceRecord, DateFilter, HomeState, WeeklySummary
from .repository import AttendanceRepository

NO_EMPLOYEE_MESSAGE = "No employee is associated with this account."
NO_ATTENDANCE_MESSAGE = "Attendance ID is required"


def round_hours(value: float) -> float:
    """Half-up rounding to 2 decimals."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class AttendanceService:
    """Use case: check-in/check-out and history for one employee.

    At most one open record per employee is enforced here, by looking the open
    record up before creating a new one. The lookup and the create are two
    separate remote calls, so two devices checking in at the same moment can
    both succeed; only the server could close that gap.
    """

    def __init__(self, attendance: AttendanceRepository, *, clock: Callable[[], datetime] = now_local):
        self._attendance = attendance
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def _now(self) -> datetime:
        return self._clock().replace(microsecond=0)

    def get_current_attendance(self, employee_id: Optional[int]) -> Optional[AttendanceRecord]:
        employee_id = require_id(employee_id, NO_EMPLOYEE_MESSAGE)
        try:
            return self._attendance.get_open_for_employee(employee_id)
        except RpcError as e:
            self._logger.error("Error getting current attendance for employee %s: %s", employee_id, e)
            raise ServiceError("Could not retrieve attendance status.") from e

    def check_in(self, employee_id: Optional[int]) -> int:
        employee_id = require_id(employee_id, NO_EMPLOYEE_MESSAGE)

        if self.get_current_attendance(employee_id):
            raise AlreadyCheckedIn("You already have an active check-in. Please check out first.")

        now = self._now()
        try:
            attendance_id = self._attendance.create_checkin(employee_id=employee_id, check_in_time=now)
        except RpcError as e:
            self._logger.error("Error during check-in for employee %s: %s", employee_id, e)
            raise ServiceError("Could not register check-in. Please try again.") from e

        self._logger.info("Employee %s checked in at %s (attendance %s)", employee_id, now, attendance_id)
        return attendance_id

    def check_out(self, attendance_id: Optional[int], *, expect_open: bool = False) -> bool:
        """Stamp check-out on ``attendance_id``.

        By default an already closed record is overwritten with the new time.
        With ``expect_open`` the record is read first and a closed one raises
        ``ConflictError`` instead.
        """
        attendance_id = require_id(attendance_id, NO_ATTENDANCE_MESSAGE)

        try:
            if expect_open:
                record = self._attendance.get_by_id(attendance_id)
                if record is None:
                    raise ConflictError("This attendance record no longer exists.")
                if not record.is_open:
                    raise ConflictError("This attendance record is already checked out.")

            now = self._now()
            self._attendance.update_checkout(attendance_id=attendance_id, check_out_time=now)
        except RpcError as e:
            self._logger.error("Error during check-out of attendance %s: %s", attendance_id, e)
            raise ServiceError("Could not register check-out. Please try again.") from e

        self._logger.info("Attendance %s checked out at %s", attendance_id, now)
        return True

    def get_attendance_history(
        self,
        employee_id: Optional[int],
        limit: int = DEFAULT_HISTORY_LIMIT,
        date_filter: Optional[DateFilter] = None,
    ) -> Sequence[AttendanceRecord]:
        employee_id = require_id(employee_id, NO_EMPLOYEE_MESSAGE)

        start = end = None
        if date_filter:
            if date_filter.start is not None:
                start = date_filter.start if isinstance(date_filter.start, datetime) else start_of_day(date_filter.start)
            if date_filter.end is not None:
                end = date_filter.end if isinstance(date_filter.end, datetime) else end_of_day(date_filter.end)

        try:
            return list(self._attendance.list_for_employee(employee_id, start=start, end=end, limit=limit))
        except RpcError as e:
            self._logger.error("Error fetching attendance history for employee %s: %s", employee_id, e)
            raise ServiceError("Could not retrieve attendance history.") from e

    def get_weekly_summary(self, employee_id: Optional[int]) -> WeeklySummary:
        employee_id = require_id(employee_id, NO_EMPLOYEE_MESSAGE)
        monday = week_start(self._clock())

        try:
            records = list(self._attendance.list_for_employee(employee_id, start=monday, newest_first=False))
        except RpcError as e:
            self._logger.error("Error fetching weekly summary for employee %s: %s", employee_id, e)
            raise ServiceError("Could not retrieve weekly summary.") from e

        total = sum(r.worked_hours or 0.0 for r in records)
        return WeeklySummary(
            week_start=monday.date(),
            total_hours=round_hours(total),
            record_count=len(records),
            records=records,
        )

    def refresh_home(self, employee_id: Optional[int]) -> HomeState:
        """Current attendance and weekly summary, fetched concurrently."""
        employee_id = require_id(employee_id, NO_EMPLOYEE_MESSAGE)

        with ThreadPoolExecutor(max_workers=2) as pool:
            current = pool.submit(self.get_current_attendance, employee_id)
            weekly = pool.submit(self.get_weekly_summary, employee_id)
            return HomeState(current=current.result(), weekly=weekly.result())


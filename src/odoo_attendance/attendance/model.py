from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công.

    ``check_out_time`` is ``None`` while the record is open; ``worked_hours``
    is computed by the server and only meaningful once closed.
    """

    attendance_id: int
    employee_id: Optional[int]
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime] = None
    worked_hours: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class DateFilter:
    """Inclusive bounds on check-in. A bare ``date`` end covers the whole day."""

    start: Optional[Union[date, datetime]] = None
    end: Optional[Union[date, datetime]] = None


@dataclass(frozen=True)
class WeeklySummary:
    week_start: date
    total_hours: float
    record_count: int
    records: list[AttendanceRecord] = field(default_factory=list)


@dataclass(frozen=True)
class HomeState:
    """Read-model for the home screen: open record (if any) plus this week's totals."""

    current: Optional[AttendanceRecord]
    weekly: WeeklySummary

    @property
    def is_checked_in(self) -> bool:
        return self.current is not None

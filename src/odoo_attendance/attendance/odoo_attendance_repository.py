from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import from_server_datetime, to_server_datetime
from ..core.constants import MODEL_ATTENDANCE
from ..rpc.client import OdooRpcClient
from ..users.odoo_employee_repository import split_many2one
from .model import AttendanceRecord

RECORD_FIELDS = ["id", "employee_id", "check_in", "check_out", "worked_hours"]


class OdooAttendanceRepository:
    """``hr.attendance`` over JSON-RPC. Timestamps travel as naive ``YYYY-MM-DD HH:MM:SS``."""

    def __init__(self, rpc: OdooRpcClient):
        self._rpc = rpc

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        rows = self._rpc.search_read(
            MODEL_ATTENDANCE,
            [
                ["employee_id", "=", int(employee_id)],
                ["check_out", "=", False],
            ],
            RECORD_FIELDS,
            limit=1,
            order="check_in desc",
        )
        return self._row_to_record(rows[0]) if rows else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        rows = self._rpc.read(MODEL_ATTENDANCE, [int(attendance_id)], RECORD_FIELDS)
        return self._row_to_record(rows[0]) if rows else None

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
        newest_first: bool = True,
    ) -> Sequence[AttendanceRecord]:
        domain: list = [["employee_id", "=", int(employee_id)]]
        if start is not None:
            domain.append(["check_in", ">=", to_server_datetime(start)])
        if end is not None:
            domain.append(["check_in", "<=", to_server_datetime(end)])

        rows = self._rpc.search_read(
            MODEL_ATTENDANCE,
            domain,
            RECORD_FIELDS,
            limit=limit,
            order="check_in desc" if newest_first else "check_in asc",
        )
        return [self._row_to_record(r) for r in rows]

    def create_checkin(self, *, employee_id: int, check_in_time: datetime) -> int:
        new_id = self._rpc.create(
            MODEL_ATTENDANCE,
            {
                "employee_id": int(employee_id),
                "check_in": to_server_datetime(check_in_time),
            },
        )
        return int(new_id)

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime) -> bool:
        return self._rpc.write(
            MODEL_ATTENDANCE,
            [int(attendance_id)],
            {"check_out": to_server_datetime(check_out_time)},
        )

    def _row_to_record(self, row: dict) -> AttendanceRecord:
        employee_id, _ = split_many2one(row.get("employee_id"))
        worked = row.get("worked_hours")
        return AttendanceRecord(
            attendance_id=int(row["id"]),
            employee_id=employee_id,
            check_in_time=from_server_datetime(row.get("check_in")),
            check_out_time=from_server_datetime(row.get("check_out")),
            worked_hours=None if worked is None or worked is False else float(worked),
        )

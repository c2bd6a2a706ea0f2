from __future__ import annotations

from typing import Optional

from ..core.constants import MODEL_EMPLOYEE, MODEL_USERS
from ..rpc.client import OdooRpcClient
from .model import Employee, RemoteUser


def split_many2one(value) -> tuple[Optional[int], Optional[str]]:
    """``[id, display_name]`` or ``False`` -> ``(id, name)``."""
    if isinstance(value, (list, tuple)) and value:
        return int(value[0]), (str(value[1]) if len(value) > 1 else None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value, None
    return None, None


class OdooEmployeeRepository:
    def __init__(self, rpc: OdooRpcClient):
        self._rpc = rpc

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        rows = self._rpc.search_read(
            MODEL_EMPLOYEE,
            [["user_id", "=", int(user_id)]],
            ["id", "name", "department_id", "job_id"],
            limit=1,
        )
        if not rows:
            return None
        return self._row_to_employee(rows[0])

    def get_user(self, user_id: int) -> Optional[RemoteUser]:
        rows = self._rpc.search_read(
            MODEL_USERS,
            [["id", "=", int(user_id)]],
            ["id", "name", "login"],
            limit=1,
        )
        if not rows:
            return None
        row = rows[0]
        return RemoteUser(user_id=int(row["id"]), name=str(row.get("name") or ""), login=row.get("login") or None)

    def _row_to_employee(self, row: dict) -> Employee:
        dept_id, dept_name = split_many2one(row.get("department_id"))
        job_id, job_name = split_many2one(row.get("job_id"))
        return Employee(
            employee_id=int(row["id"]),
            name=str(row.get("name") or ""),
            department_id=dept_id,
            department_name=dept_name,
            job_id=job_id,
            job_name=job_name,
        )

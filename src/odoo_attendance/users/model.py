from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Employee linked to the logged-in user.

    ``employee_id`` is ``None`` for a user-only account (no linked employee);
    attendance operations are then unavailable.
    """

    employee_id: Optional[int]
    name: str
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    job_id: Optional[int] = None
    job_name: Optional[str] = None
    is_user_only: bool = False


@dataclass(frozen=True)
class RemoteUser:
    user_id: int
    name: str
    login: Optional[str] = None

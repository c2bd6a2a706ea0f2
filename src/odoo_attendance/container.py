from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.odoo_attendance_repository import OdooAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TIMEOUT_SECONDS
from .core.exceptions import ValidationError
from .rpc.client import OdooRpcClient
from .rpc.transport import JsonRpcTransport, Transport
from .session.store import EncryptedFileSessionStore, InMemorySessionStore, SessionStore
from .users.odoo_employee_repository import OdooEmployeeRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    rpc: OdooRpcClient
    session_store: SessionStore

    employees_repo: OdooEmployeeRepository
    attendance_repo: OdooAttendanceRepository

    auth_service: AuthService
    attendance_service: AttendanceService


def build_session_store(settings: dict) -> SessionStore:
    backend = str(settings.get("SESSION_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemorySessionStore()
    if backend == "file":
        key = settings.get("SESSION_ENCRYPTION_KEY")
        if not key:
            raise ValidationError("SESSION_ENCRYPTION_KEY must be set for the file session store")
        return EncryptedFileSessionStore(settings["SESSION_DIR"], key)
    raise ValidationError(f"Unknown SESSION_BACKEND: {backend}")


def build_container(*, settings: dict, transport: Optional[Transport] = None, store: Optional[SessionStore] = None) -> Container:
    transport = transport or JsonRpcTransport(timeout=float(settings.get("RPC_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)))
    rpc = OdooRpcClient(transport)
    session_store = store or build_session_store(settings)

    employees_repo = OdooEmployeeRepository(rpc)
    attendance_repo = OdooAttendanceRepository(rpc)

    auth_service = AuthService(rpc, employees_repo, session_store)
    attendance_service = AttendanceService(attendance_repo)

    return Container(
        rpc=rpc,
        session_store=session_store,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        attendance_service=attendance_service,
    )

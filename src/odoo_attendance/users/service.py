from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import AuthState
from ..core.exceptions import DomainError, RpcError, ServiceError, ValidationError
from ..rpc.client import OdooRpcClient
from ..session.model import SessionRecord
from ..session.store import SessionStore
from .model import Employee
from .repository import EmployeeRepository


@dataclass(frozen=True)
class AuthenticatedUser:
    """What the UI keeps after login or session restore."""

    uid: int
    employee: Employee


class AuthService:
    """Use case: login, restore a stored session, logout.

    States: UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED. The service is
    the only caller of the RPC client's mutators; callers serialize
    login/restore/logout themselves.
    """

    def __init__(self, rpc: OdooRpcClient, employees: EmployeeRepository, store: SessionStore):
        self._rpc = rpc
        self._employees = employees
        self._store = store
        self._state = AuthState.UNAUTHENTICATED
        self._current: Optional[AuthenticatedUser] = None
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def current(self) -> Optional[AuthenticatedUser]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._state == AuthState.AUTHENTICATED

    def _set_unauthenticated(self) -> None:
        self._state = AuthState.UNAUTHENTICATED
        self._current = None

    def login(self, url: str, db: str, email: str, password: str) -> AuthenticatedUser:
        url = require_non_empty(url, "Server URL")
        db = require_non_empty(db, "Database")
        email = require_non_empty(email, "Email")
        if not password:
            raise ValidationError("Password is required")

        self._state = AuthState.AUTHENTICATING
        self._current = None
        try:
            self._rpc.configure(url, db)
            uid = self._rpc.authenticate(db, email, password)
            employee = self.get_employee_by_user_id(uid, fallback_name=email)
        except Exception:
            self._rpc.logout()
            self._set_unauthenticated()
            raise

        record = SessionRecord(
            url=self._rpc.context.url,
            db=db,
            uid=uid,
            password=password,
            employee_id=employee.employee_id,
            employee_name=employee.name or email,
        )
        if not self._store.save(record):
            self._logger.warning("Session for uid=%s could not be persisted; it will not survive a restart", uid)

        self._current = AuthenticatedUser(uid=uid, employee=employee)
        self._state = AuthState.AUTHENTICATED
        self._logger.info("Logged in uid=%s employee_id=%s", uid, employee.employee_id)
        return self._current

    def get_employee_by_user_id(self, user_id: int, *, fallback_name: str = "") -> Employee:
        """Employee linked to ``user_id``; a user-only Employee when none is linked."""
        try:
            employee = self._employees.get_by_user_id(user_id)
            if employee:
                return employee

            user = self._employees.get_user(user_id)
        except RpcError as e:
            self._logger.error("Error fetching employee for uid=%s: %s", user_id, e)
            raise ServiceError("Could not retrieve employee information.") from e

        name = user.name if user and user.name else fallback_name
        self._logger.info("uid=%s has no linked employee; continuing as user-only account", user_id)
        return Employee(employee_id=None, name=name, is_user_only=True)

    def restore_session(self) -> Optional[SessionRecord]:
        """Stored session if it is still accepted by the server, else ``None``."""
        session = self._store.load()
        if not session or not session.is_complete:
            self._set_unauthenticated()
            return None

        self._state = AuthState.AUTHENTICATING
        self._rpc.configure(session.url, session.db, session.uid, session.password)

        try:
            user = self._employees.get_user(int(session.uid))
        except (DomainError, RpcError) as e:
            self._logger.warning("Stored session for uid=%s rejected: %s", session.uid, e)
            user = None

        if not user:
            self._store.clear()
            self._rpc.logout()
            self._set_unauthenticated()
            return None

        employee = Employee(
            employee_id=session.employee_id,
            name=session.employee_name or user.name,
            is_user_only=session.employee_id is None,
        )
        self._current = AuthenticatedUser(uid=int(session.uid), employee=employee)
        self._state = AuthState.AUTHENTICATED
        self._logger.info("Session restored for uid=%s", session.uid)
        return session

    def logout(self) -> None:
        self._rpc.logout()
        if not self._store.clear():
            self._logger.warning("Stored session could not be removed")
        self._set_unauthenticated()
        self._logger.info("Logged out")

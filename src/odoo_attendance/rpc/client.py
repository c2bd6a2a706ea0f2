"""Generic gateway to the remote object model.

The client knows nothing about attendance or employees; feature
repositories build on ``search_read``/``read``/``create``/``write``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

from ..core.constants import DEFAULT_TIMEOUT_SECONDS, RPC_ENDPOINT
from ..core.enums import RemoteOperation
from ..core.exceptions import InvalidCredentials, NotAuthenticated, NotConfigured
from .context import ConnectionContext
from .transport import JsonRpcTransport, Transport

Domain = Sequence[Sequence[Any]]


def normalize_url(url: str) -> str:
    """Strip a single trailing slash."""
    url = (url or "").strip()
    return url[:-1] if url.endswith("/") else url


class OdooRpcClient:
    def __init__(self, transport: Optional[Transport] = None, *, context: Optional[ConnectionContext] = None):
        self._transport = transport or JsonRpcTransport(timeout=DEFAULT_TIMEOUT_SECONDS)
        self._context = context or ConnectionContext()
        self._logger = logging.getLogger(__name__)

    @property
    def context(self) -> ConnectionContext:
        return self._context

    def configure(self, url: str, db: str, uid: Optional[int] = None, password: Optional[str] = None) -> None:
        self._context.url = normalize_url(url)
        self._context.db = db
        self._context.uid = uid
        self._context.password = password

    def _call(self, service: str, method: str, args: list) -> Any:
        if not self._context.url:
            raise NotConfigured("API not configured. Call configure() first.")

        endpoint = f"{self._context.url}{RPC_ENDPOINT}"
        return self._transport.call(endpoint, {"service": service, "method": method, "args": args})

    def authenticate(self, db: str, login: str, password: str) -> int:
        uid = self._call("common", "authenticate", [db, login, password, {}])
        if not uid:
            self._logger.warning("authentication rejected for db=%s", db)
            raise InvalidCredentials("Invalid credentials. Please check your email and password.")

        self._context.db = db
        self._context.uid = int(uid)
        self._context.password = password
        self._logger.info("authenticated uid=%s on %s", uid, self._context.url)
        return int(uid)

    def execute(
        self,
        model: str,
        method: Union[RemoteOperation, str],
        args: Optional[list] = None,
        kwargs: Optional[dict] = None,
    ) -> Any:
        """Escape hatch: run any ``model.method`` through ``execute_kw``."""
        if not self._context.has_credentials:
            raise NotAuthenticated("Not authenticated. Please log in first.")

        method_name = method.value if isinstance(method, RemoteOperation) else str(method)
        return self._call(
            "object",
            "execute_kw",
            [
                self._context.db,
                self._context.uid,
                self._context.password,
                model,
                method_name,
                list(args or []),
                dict(kwargs or {}),
            ],
        )

    def search_read(
        self,
        model: str,
        domain: Optional[Domain] = None,
        fields: Optional[Sequence[str]] = None,
        *,
        limit: Optional[int] = None,
        order: Optional[str] = None,
    ) -> list[dict]:
        """Records matching all ``[field, operator, value]`` conditions (implicit AND)."""
        kwargs: dict = {"fields": list(fields or [])}
        if limit is not None:
            kwargs["limit"] = int(limit)
        if order:
            kwargs["order"] = order

        rows = self.execute(model, RemoteOperation.SEARCH_READ, [[list(c) for c in (domain or [])]], kwargs)
        return list(rows or [])

    def read(self, model: str, ids: Sequence[int], fields: Optional[Sequence[str]] = None) -> list[dict]:
        rows = self.execute(model, RemoteOperation.READ, [list(ids)], {"fields": list(fields or [])})
        return list(rows or [])

    def create(self, model: str, values: dict) -> int:
        return self.execute(model, RemoteOperation.CREATE, [values])

    def write(self, model: str, ids: Sequence[int], values: dict) -> bool:
        return bool(self.execute(model, RemoteOperation.WRITE, [list(ids), values]))

    def is_authenticated(self) -> bool:
        return bool(self._context.url and self._context.has_credentials)

    def logout(self) -> None:
        """Forget the identity; address and database stay for the next login."""
        self._context.uid = None
        self._context.password = None

from __future__ import annotations

from enum import Enum


class AuthState(str, Enum):
    """Trạng thái phiên đăng nhập của client."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATING = "AUTHENTICATING"
    AUTHENTICATED = "AUTHENTICATED"


class RemoteOperation(str, Enum):
    """Supported ORM methods on the remote object service."""

    SEARCH_READ = "search_read"
    READ = "read"
    CREATE = "create"
    WRITE = "write"

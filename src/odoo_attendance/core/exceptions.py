from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    The message is meant to be shown to the user verbatim.
    """


class ValidationError(DomainError):
    """Raised when input data is invalid or a required identifier is missing."""


class AuthenticationError(DomainError):
    """Base for login/credential problems."""


class InvalidCredentials(AuthenticationError):
    """Raised when the server rejects the login/password pair."""


class NotAuthenticated(AuthenticationError):
    """Raised when a remote operation is attempted without credentials."""


class AlreadyCheckedIn(DomainError):
    """Raised when the employee still has an open attendance record."""


class ConflictError(DomainError):
    """Raised when a record is not in the state the caller expected."""


class ServiceError(DomainError):
    """A remote failure re-signaled with a user-facing message."""


class RpcError(Exception):
    """Base for transport and protocol failures."""


class NotConfigured(RpcError):
    """Raised when the client has no server address yet."""


class RpcTimeout(RpcError):
    """Raised when a call exceeds the configured timeout."""


class NetworkError(RpcError):
    """Raised when the server cannot be reached."""


class TransportError(RpcError):
    """Raised on a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = int(status_code)
        self.reason = reason
        super().__init__(f"HTTP error: {self.status_code} {reason}".rstrip())


class RemoteError(RpcError):
    """Raised when the server answers with a JSON-RPC error object."""

    def __init__(self, message: str, *, data: Optional[dict] = None):
        self.data = data or {}
        super().__init__(message)

from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.exceptions import (
    AlreadyCheckedIn,
    AuthenticationError,
    ConflictError,
    DomainError,
    NotConfigured,
    RemoteError,
    RpcError,
    RpcTimeout,
    ServiceError,
)

logger = logging.getLogger(__name__)


def status_for(error: Exception) -> int:
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, (AlreadyCheckedIn, ConflictError)):
        return 409
    if isinstance(error, RpcTimeout):
        return 504
    if isinstance(error, NotConfigured):
        return 400
    if isinstance(error, (ServiceError, RemoteError, RpcError)):
        return 502
    return 400


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return fail(str(e), status_for(e))

    @app.errorhandler(RpcError)
    def _rpc_error(e: RpcError):
        logger.error("Unhandled remote failure: %s", e)
        return fail(str(e), status_for(e))

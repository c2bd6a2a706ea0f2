"""JSON-RPC transport.

One POST per call, a fixed wall-clock deadline, and every failure mapped onto
the ``RpcError`` hierarchy. The transport keeps no state between calls.

The POST runs on a worker thread and the caller waits for it at most
``timeout`` seconds, whatever the server does in between (slow headers or a
body trickled byte by byte). When the deadline passes the call fails with
``RpcTimeout``; the worker is told to abort, closes the response at its next
chunk and its result is discarded.
"""

from __future__ import annotations

import json
import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Protocol

import requests

from ..core.constants import DEFAULT_TIMEOUT_SECONDS, MAX_REQUEST_ID, RPC_PROTOCOL_VERSION
from ..core.exceptions import NetworkError, RemoteError, RpcTimeout, TransportError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class Transport(Protocol):
    def call(self, endpoint: str, params: dict) -> Any:
        raise NotImplementedError


class _Aborted(Exception):
    """Worker noticed the caller gave up on the call."""


def build_envelope(params: dict) -> dict:
    return {
        "jsonrpc": RPC_PROTOCOL_VERSION,
        "method": "call",
        "params": params,
        "id": random.randrange(MAX_REQUEST_ID),
    }


def extract_error_message(error) -> str:
    """Prefer the nested ``data.message`` over the top-level message."""
    if not isinstance(error, dict):
        return str(error)
    data = error.get("data") or {}
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return str(error.get("message") or "Unknown Odoo error")


class JsonRpcTransport:
    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self._timeout = float(timeout)

    @property
    def timeout(self) -> float:
        return self._timeout

    def _post(self, endpoint: str, payload: dict, abort: threading.Event) -> tuple[int, str, bytes]:
        response = requests.post(
            endpoint,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
            stream=True,
        )
        try:
            if abort.is_set():
                raise _Aborted()
            if not response.ok:
                return response.status_code, response.reason or "", b""

            chunks = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if abort.is_set():
                    raise _Aborted()
                chunks.append(chunk)
            return response.status_code, response.reason or "", b"".join(chunks)
        finally:
            response.close()

    def call(self, endpoint: str, params: dict) -> Any:
        payload = build_envelope(params)
        logger.debug("rpc call id=%s service=%s method=%s", payload["id"], params.get("service"), params.get("method"))

        abort = threading.Event()
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="jsonrpc")
        try:
            future = pool.submit(self._post, endpoint, payload, abort)
            status_code, reason, content = future.result(timeout=self._timeout)
        except FutureTimeout as e:
            abort.set()
            logger.error("rpc call exceeded %ss deadline: %s", self._timeout, endpoint)
            raise RpcTimeout("Request timeout. Please check your connection.") from e
        except requests.Timeout as e:
            logger.error("rpc call timed out after %ss: %s", self._timeout, endpoint)
            raise RpcTimeout("Request timeout. Please check your connection.") from e
        except requests.ConnectionError as e:
            logger.error("rpc call could not reach %s: %s", endpoint, e)
            raise NetworkError("Network error. Please check your internet connection and server URL.") from e
        except requests.RequestException as e:
            # Malformed URL, bad scheme, broken chunked body, redirect loop...
            logger.error("rpc call to %s failed: %s", endpoint, e)
            raise NetworkError("Network error. Please check your internet connection and server URL.") from e
        finally:
            pool.shutdown(wait=False)

        if not 200 <= status_code < 400:
            logger.error("rpc call failed with HTTP %s", status_code)
            raise TransportError(status_code, reason)

        try:
            body = json.loads(content.decode("utf-8"))
        except ValueError as e:
            raise RemoteError("Invalid response from server.") from e

        if not isinstance(body, dict):
            raise RemoteError("Invalid response from server.")

        error = body.get("error")
        if error:
            message = extract_error_message(error)
            logger.error("rpc call returned remote error: %s", message)
            data = error.get("data") if isinstance(error, dict) else None
            raise RemoteError(message, data=data if isinstance(data, dict) else None)

        return body.get("result")

"""Session store adapters.

The store holds one serialized ``SessionRecord`` under a fixed key. Each
operation is atomic on its own; failures are reported through the return
value (``None``/``False``) and logged, never raised.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol, Union

from cryptography.fernet import Fernet, InvalidToken

from ..core.constants import SESSION_KEY
from .model import SessionRecord

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def save(self, record: SessionRecord) -> bool:
        raise NotImplementedError

    def load(self) -> Optional[SessionRecord]:
        raise NotImplementedError

    def clear(self) -> bool:
        raise NotImplementedError


def has_session(store: SessionStore) -> bool:
    record = store.load()
    return record is not None and record.uid is not None


def _decode(blob: Union[str, bytes]) -> Optional[SessionRecord]:
    data = json.loads(blob)
    if not isinstance(data, dict):
        return None
    return SessionRecord.from_dict(data)


class InMemorySessionStore:
    """Process-local store. Keeps the serialized blob, like a real backend would."""

    def __init__(self, key: str = SESSION_KEY):
        self._key = key
        self._items: dict[str, str] = {}

    def save(self, record: SessionRecord) -> bool:
        self._items[self._key] = json.dumps(record.to_dict())
        return True

    def load(self) -> Optional[SessionRecord]:
        blob = self._items.get(self._key)
        if not blob:
            return None
        try:
            return _decode(blob)
        except ValueError as e:
            logger.warning("Discarding unreadable session: %s", e)
            return None

    def clear(self) -> bool:
        self._items.pop(self._key, None)
        return True


class EncryptedFileSessionStore:
    """Session blob encrypted at rest with Fernet, one file per logical key."""

    def __init__(self, directory: Union[str, Path], encryption_key: Union[str, bytes], *, key: str = SESSION_KEY):
        if isinstance(encryption_key, str):
            encryption_key = encryption_key.encode()
        self._fernet = Fernet(encryption_key)
        self._path = Path(directory) / f"{key}.bin"

    @property
    def path(self) -> Path:
        return self._path

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode()

    def save(self, record: SessionRecord) -> bool:
        try:
            token = self._fernet.encrypt(json.dumps(record.to_dict()).encode("utf-8"))
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_bytes(token)
            os.replace(tmp, self._path)
            return True
        except OSError as e:
            logger.error("Error saving session: %s", e)
            return False

    def load(self) -> Optional[SessionRecord]:
        if not self._path.exists():
            return None
        try:
            blob = self._fernet.decrypt(self._path.read_bytes())
            return _decode(blob.decode("utf-8"))
        except InvalidToken:
            logger.warning("Session file %s cannot be decrypted with the configured key", self._path)
            return None
        except (OSError, ValueError) as e:
            logger.warning("Error reading session: %s", e)
            return None

    def clear(self) -> bool:
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Error clearing session: %s", e)
            return False
        return True

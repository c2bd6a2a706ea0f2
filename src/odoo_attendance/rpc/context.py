from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ConnectionContext:
    """Server address and identity used for every remote call.

    Only ``OdooRpcClient.configure/authenticate/logout`` mutate it.
    """

    url: Optional[str] = None
    db: Optional[str] = None
    uid: Optional[int] = None
    password: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.uid and self.password)

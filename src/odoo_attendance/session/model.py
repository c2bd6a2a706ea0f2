from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionRecord:
    """Persisted login: enough to reconfigure the RPC client at startup."""

    url: Optional[str]
    db: Optional[str]
    uid: Optional[int]
    password: Optional[str]
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.url and self.uid and self.password)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SessionRecord":
        return cls(
            url=data.get("url"),
            db=data.get("db"),
            uid=data.get("uid"),
            password=data.get("password"),
            employee_id=data.get("employee_id"),
            employee_name=data.get("employee_name"),
        )

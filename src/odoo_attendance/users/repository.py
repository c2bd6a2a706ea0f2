from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee, RemoteUser


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee/User.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp RPC client.
    """

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_user(self, user_id: int) -> Optional[RemoteUser]:
        raise NotImplementedError

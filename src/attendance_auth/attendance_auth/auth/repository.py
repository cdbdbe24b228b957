from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AuthUser


class AuthUserRepository(Protocol):
    """Storage for the ``auth_users`` projection, keyed by employee code."""

    def get(self, employee_id: str) -> Optional[AuthUser]:
        raise NotImplementedError

    def get_by_employee_uuid(self, employee_uuid: str) -> Optional[AuthUser]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AuthUser]:
        raise NotImplementedError

    def upsert(self, row: AuthUser) -> None:
        """Insert or overwrite every column of the row, atomically."""

        raise NotImplementedError

    def delete_by_employee_uuid(self, employee_uuid: str) -> bool:
        raise NotImplementedError

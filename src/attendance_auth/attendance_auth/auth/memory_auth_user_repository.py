from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory import InMemoryDatabase
from .model import AuthUser
from .repository import AuthUserRepository


class InMemoryAuthUserRepository(AuthUserRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict:
        return self._db.tables["auth_users"]

    def get(self, employee_id: str) -> Optional[AuthUser]:
        return self._rows.get(employee_id)

    def get_by_employee_uuid(self, employee_uuid: str) -> Optional[AuthUser]:
        return next((r for r in self._rows.values() if r.employee_uuid == employee_uuid), None)

    def list_all(self) -> Sequence[AuthUser]:
        return sorted(self._rows.values(), key=lambda r: r.employee_id)

    def upsert(self, row: AuthUser) -> None:
        with self._db.transaction():
            self._rows[row.employee_id] = row

    def delete_by_employee_uuid(self, employee_uuid: str) -> bool:
        with self._db.transaction():
            row = self.get_by_employee_uuid(employee_uuid)
            if row is None:
                return False
            del self._rows[row.employee_id]
            return True

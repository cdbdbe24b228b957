from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import CatalogKind
from ..core.exceptions import DuplicateCatalogNameError, ReferencedRowError
from ..database.memory import InMemoryDatabase
from .model import CatalogEntry
from .repository import CatalogRepository

# (table, column, constraint) pairs that restrict deleting a catalog row.
_REFERENCES = {
    CatalogKind.POSITIONS: ("employees", "position_id", "fk_employees_position"),
    CatalogKind.EMPLOYEE_STATUS: ("employees", "status_id", "fk_employees_status"),
    CatalogKind.ATTENDANCE_STATUS: ("attendance", "status_id", "fk_attendance_status"),
}


class InMemoryCatalogRepository(CatalogRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _rows(self, kind: CatalogKind) -> dict:
        return self._db.tables[CatalogKind(kind).value]

    def _check_unique(self, kind: CatalogKind, name: str, *, exclude_id: Optional[int] = None) -> None:
        for entry in self._rows(kind).values():
            if entry.name == name and entry.id != exclude_id:
                raise DuplicateCatalogNameError(
                    f"Duplicate entry '{name}' in {kind.value}",
                    constraint=f"uq_{kind.value}_name",
                )

    def get(self, kind: CatalogKind, entry_id: int) -> Optional[CatalogEntry]:
        return self._rows(kind).get(int(entry_id))

    def get_by_name(self, kind: CatalogKind, name: str) -> Optional[CatalogEntry]:
        return next((e for e in self._rows(kind).values() if e.name == name), None)

    def list_all(self, kind: CatalogKind) -> Sequence[CatalogEntry]:
        return sorted(self._rows(kind).values(), key=lambda e: e.id)

    def create(self, kind: CatalogKind, name: str) -> int:
        with self._db.transaction():
            self._check_unique(kind, name)
            entry_id = self._db.next_id(kind.value)
            self._rows(kind)[entry_id] = CatalogEntry(id=entry_id, name=name)
            return entry_id

    def rename(self, kind: CatalogKind, entry_id: int, name: str) -> bool:
        with self._db.transaction():
            rows = self._rows(kind)
            if int(entry_id) not in rows:
                return False
            self._check_unique(kind, name, exclude_id=int(entry_id))
            rows[int(entry_id)] = CatalogEntry(id=int(entry_id), name=name)
            return True

    def delete(self, kind: CatalogKind, entry_id: int) -> bool:
        table, column, constraint = _REFERENCES[CatalogKind(kind)]
        with self._db.transaction():
            if any(getattr(r, column) == int(entry_id) for r in self._db.tables[table].values()):
                raise ReferencedRowError(
                    f"{kind.value} {entry_id} is still referenced by {table}",
                    constraint=constraint,
                )
            return self._rows(kind).pop(int(entry_id), None) is not None

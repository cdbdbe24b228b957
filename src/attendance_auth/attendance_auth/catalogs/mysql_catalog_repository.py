from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import CatalogKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CatalogEntry
from .repository import CatalogRepository


class MySQLCatalogRepository(CatalogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _table(kind: CatalogKind) -> str:
        # Table names come from the enum only, never from user input.
        return CatalogKind(kind).value

    def get(self, kind: CatalogKind, entry_id: int) -> Optional[CatalogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT id, name FROM {self._table(kind)} WHERE id=%s", (int(entry_id),))
            r = fetchone(cur)
            return CatalogEntry(id=int(r["id"]), name=r["name"]) if r else None

    def get_by_name(self, kind: CatalogKind, name: str) -> Optional[CatalogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT id, name FROM {self._table(kind)} WHERE name=%s", (name,))
            r = fetchone(cur)
            return CatalogEntry(id=int(r["id"]), name=r["name"]) if r else None

    def list_all(self, kind: CatalogKind) -> Sequence[CatalogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT id, name FROM {self._table(kind)} ORDER BY id")
            return [CatalogEntry(id=int(r["id"]), name=r["name"]) for r in fetchall(cur)]

    def create(self, kind: CatalogKind, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO {self._table(kind)}(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def rename(self, kind: CatalogKind, entry_id: int, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE {self._table(kind)} SET name=%s WHERE id=%s", (name, int(entry_id)))
            return cur.rowcount > 0

    def delete(self, kind: CatalogKind, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table(kind)} WHERE id=%s", (int(entry_id),))
            return cur.rowcount > 0

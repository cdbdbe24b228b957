from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_ATTENDANCE_STATUSES, DEFAULT_EMPLOYEE_STATUSES, DEFAULT_POSITIONS
from ..core.enums import CatalogKind
from ..core.exceptions import NotFoundError
from .model import CatalogEntry
from .repository import CatalogRepository

logger = logging.getLogger(__name__)

_DEFAULTS = {
    CatalogKind.POSITIONS: DEFAULT_POSITIONS,
    CatalogKind.EMPLOYEE_STATUS: DEFAULT_EMPLOYEE_STATUSES,
    CatalogKind.ATTENDANCE_STATUS: DEFAULT_ATTENDANCE_STATUSES,
}


class CatalogService:
    """Use case: maintain lookup values used as foreign-key targets.

    Renames do not refresh ``auth_users``; already-synced rows keep the old
    name until the next employee write or an explicit rebuild.
    """

    def __init__(self, catalogs: CatalogRepository):
        self._catalogs = catalogs

    def get(self, kind: CatalogKind, entry_id: int) -> CatalogEntry:
        entry = self._catalogs.get(kind, entry_id)
        if not entry:
            raise NotFoundError(f"{kind.value} {entry_id} not found")
        return entry

    def list_all(self, kind: CatalogKind) -> Sequence[CatalogEntry]:
        return self._catalogs.list_all(kind)

    def add(self, kind: CatalogKind, name: str) -> CatalogEntry:
        name = require_non_empty(name, "name")
        entry_id = self._catalogs.create(kind, name)
        logger.info("catalog %s: added %r (id=%s)", kind.value, name, entry_id)
        return CatalogEntry(id=entry_id, name=name)

    def ensure(self, kind: CatalogKind, name: str) -> CatalogEntry:
        existing = self._catalogs.get_by_name(kind, name)
        return existing or self.add(kind, name)

    def ensure_defaults(self) -> None:
        for kind, names in _DEFAULTS.items():
            for name in names:
                self.ensure(kind, name)

    def rename(self, kind: CatalogKind, entry_id: int, name: str) -> CatalogEntry:
        name = require_non_empty(name, "name")
        if not self._catalogs.rename(kind, entry_id, name):
            raise NotFoundError(f"{kind.value} {entry_id} not found")
        logger.info("catalog %s: renamed id=%s to %r (auth_users not resynced)", kind.value, entry_id, name)
        return CatalogEntry(id=int(entry_id), name=name)

    def remove(self, kind: CatalogKind, entry_id: int) -> None:
        if not self._catalogs.delete(kind, entry_id):
            raise NotFoundError(f"{kind.value} {entry_id} not found")

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import CatalogKind
from .model import CatalogEntry


class CatalogRepository(Protocol):
    """One repository for the three catalog tables; they share a shape."""

    def get(self, kind: CatalogKind, entry_id: int) -> Optional[CatalogEntry]:
        raise NotImplementedError

    def get_by_name(self, kind: CatalogKind, name: str) -> Optional[CatalogEntry]:
        raise NotImplementedError

    def list_all(self, kind: CatalogKind) -> Sequence[CatalogEntry]:
        raise NotImplementedError

    def create(self, kind: CatalogKind, name: str) -> int:
        """Insert a new value. Raises DuplicateCatalogNameError on a taken name."""

        raise NotImplementedError

    def rename(self, kind: CatalogKind, entry_id: int, name: str) -> bool:
        raise NotImplementedError

    def delete(self, kind: CatalogKind, entry_id: int) -> bool:
        """Raises ReferencedRowError while employees/attendance still point at it."""

        raise NotImplementedError

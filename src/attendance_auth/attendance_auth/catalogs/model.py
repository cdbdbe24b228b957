from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    """Small code -> label pair (position, employee status, attendance status)."""

    id: int
    name: str

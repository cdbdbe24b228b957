from __future__ import annotations

from enum import Enum


class CatalogKind(str, Enum):
    """Catalog tables; the value is the table name."""

    POSITIONS = "positions"
    EMPLOYEE_STATUS = "employee_status"
    ATTENDANCE_STATUS = "attendance_status"


class StorageBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"

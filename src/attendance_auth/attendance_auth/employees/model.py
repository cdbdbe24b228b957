from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: current employment state of one person.

    ``id`` is the internal UUID, ``employee_id`` the human-readable code
    (e.g. "EMP001") that employees type at login.
    """

    id: str
    person_id: str
    employee_id: str
    position_id: int
    status_id: int
    hire_date: date
    is_biometric_enabled: bool
    security_image_identifier: Optional[str]
    created_at: datetime
    updated_at: datetime

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AuthUser:
    """Read-model for login: one denormalized row per employee.

    Every field is derived from employees + persons + positions +
    employee_status as of ``last_synced_at``. Only ``AuthUserSync`` writes it.
    """

    employee_id: str
    employee_uuid: str
    person_uuid: str
    full_name: str
    birth_date: date
    security_image_identifier: Optional[str]
    status_name: str
    position_name: str
    is_biometric_enabled: bool
    last_synced_at: datetime

    @property
    def enrollment_required(self) -> bool:
        return self.security_image_identifier is None


@dataclass(frozen=True)
class LoginChallenge:
    """What the login flow learns after identifying an employee code."""

    employee_id: str
    full_name: str
    position_name: str
    is_biometric_enabled: bool
    enrollment_required: bool

from __future__ import annotations

import hmac
import logging
from datetime import date

from ..core.constants import ACTIVE_STATUS_NAME
from ..core.exceptions import AuthenticationError, EnrollmentRequiredError
from .model import AuthUser, LoginChallenge
from .repository import AuthUserRepository

logger = logging.getLogger(__name__)


def _challenge(row: AuthUser) -> LoginChallenge:
    return LoginChallenge(
        employee_id=row.employee_id,
        full_name=row.full_name,
        position_name=row.position_name,
        is_biometric_enabled=row.is_biometric_enabled,
        enrollment_required=row.enrollment_required,
    )


class AuthService:
    """Use case: step-wise login (employee code -> birth date -> security image).

    Reads only the ``auth_users`` projection; never joins source tables.
    """

    def __init__(self, auth_users: AuthUserRepository, *, active_status_name: str = ACTIVE_STATUS_NAME):
        self._auth_users = auth_users
        self._active_status_name = active_status_name

    def _active_user(self, employee_id: str) -> AuthUser:
        row = self._auth_users.get((employee_id or "").strip())
        if not row or row.status_name != self._active_status_name:
            logger.info("login rejected for employee_id=%r", employee_id)
            raise AuthenticationError("Unknown or inactive employee")
        return row

    def identify(self, employee_id: str) -> LoginChallenge:
        return _challenge(self._active_user(employee_id))

    def verify_birth_date(self, employee_id: str, birth_date: date) -> LoginChallenge:
        row = self._active_user(employee_id)
        if row.birth_date != birth_date:
            raise AuthenticationError("Identity could not be verified")
        return _challenge(row)

    def verify_security_image(self, employee_id: str, image_identifier: str) -> LoginChallenge:
        row = self._active_user(employee_id)
        if row.security_image_identifier is None:
            raise EnrollmentRequiredError("Security image not enrolled")
        if not hmac.compare_digest(row.security_image_identifier.encode(), (image_identifier or "").encode()):
            raise AuthenticationError("Identity could not be verified")
        return _challenge(row)

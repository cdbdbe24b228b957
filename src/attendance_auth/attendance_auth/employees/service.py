from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..auth.repository import AuthUserRepository
from ..auth.sync import AuthUserSync
from ..catalogs.repository import CatalogRepository
from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_non_empty
from ..core.enums import CatalogKind
from ..core.exceptions import (
    AlreadyEnrolledError,
    MissingReferenceError,
    NotFoundError,
    PersonAlreadyLinkedError,
    ValidationError,
)
from ..database.transaction import TransactionManager
from ..persons.repository import PersonRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

# employee_id (the login code) and person_id are fixed once created.
_MUTABLE_FIELDS = frozenset(
    {"position_id", "status_id", "hire_date", "is_biometric_enabled", "security_image_identifier"}
)


class EmployeeService:
    """Use case: create/update/delete employees.

    Every write runs in one transaction together with ``AuthUserSync.sync``;
    if the projection cannot be rebuilt the employee write rolls back too.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        persons: PersonRepository,
        catalogs: CatalogRepository,
        attendance: AttendanceRepository,
        auth_users: AuthUserRepository,
        sync: AuthUserSync,
        tx: TransactionManager,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._employees = employees
        self._persons = persons
        self._catalogs = catalogs
        self._attendance = attendance
        self._auth_users = auth_users
        self._sync = sync
        self._tx = tx
        self._clock = clock

    def _require_catalog(self, kind: CatalogKind, entry_id: int, constraint: str) -> None:
        if self._catalogs.get(kind, int(entry_id)) is None:
            raise MissingReferenceError(f"{kind.value} {entry_id} does not exist", constraint=constraint)

    def get_employee(self, employee_uuid: str) -> Employee:
        employee = self._employees.get_by_id(employee_uuid)
        if not employee:
            raise NotFoundError(f"Employee {employee_uuid} not found")
        return employee

    def get_by_employee_id(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_employee_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def create_employee(
        self,
        *,
        person_id: str,
        employee_id: str,
        position_id: int,
        status_id: int,
        hire_date: date,
    ) -> Employee:
        employee_id = require_non_empty(employee_id, "employee_id")
        if not isinstance(hire_date, date):
            raise ValidationError("hire_date is required")

        with self._tx.transaction():
            if not self._persons.get_by_id(person_id):
                raise NotFoundError(f"Person {person_id} not found")
            if self._employees.get_by_person_id(person_id):
                raise PersonAlreadyLinkedError(f"Person {person_id} is already linked to an employee")
            self._require_catalog(CatalogKind.POSITIONS, position_id, "fk_employees_position")
            self._require_catalog(CatalogKind.EMPLOYEE_STATUS, status_id, "fk_employees_status")

            now = self._clock()
            employee = Employee(
                id=str(uuid.uuid4()),
                person_id=person_id,
                employee_id=employee_id,
                position_id=int(position_id),
                status_id=int(status_id),
                hire_date=hire_date,
                is_biometric_enabled=False,
                security_image_identifier=None,
                created_at=now,
                updated_at=now,
            )
            self._employees.create(employee)
            self._sync.sync(employee)

        logger.info("employee created employee_id=%s", employee.employee_id)
        return employee

    def update_employee(self, employee_uuid: str, **changes) -> Employee:
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update employee fields: {', '.join(sorted(unknown))}")
        if "is_biometric_enabled" in changes and not isinstance(changes["is_biometric_enabled"], bool):
            raise ValidationError("is_biometric_enabled must be a boolean")
        if "hire_date" in changes and not isinstance(changes["hire_date"], date):
            raise ValidationError("hire_date is required")
        if "security_image_identifier" in changes:
            changes["security_image_identifier"] = optional_text(
                changes["security_image_identifier"], "security_image_identifier"
            )

        with self._tx.transaction():
            current = self._employees.get_by_id(employee_uuid, for_update=True)
            if not current:
                raise NotFoundError(f"Employee {employee_uuid} not found")
            if "position_id" in changes:
                changes["position_id"] = int(changes["position_id"])
                self._require_catalog(CatalogKind.POSITIONS, changes["position_id"], "fk_employees_position")
            if "status_id" in changes:
                changes["status_id"] = int(changes["status_id"])
                self._require_catalog(CatalogKind.EMPLOYEE_STATUS, changes["status_id"], "fk_employees_status")

            updated = dataclasses.replace(current, updated_at=self._clock(), **changes)
            self._employees.update(updated)
            self._sync.sync(updated)

        logger.info("employee updated employee_id=%s fields=%s", updated.employee_id, sorted(changes))
        return updated

    def enroll_security_image(self, employee_id: str, image_identifier: str) -> Employee:
        """First-login enrollment: store the chosen image on the employee row.

        Only allowed while no image is enrolled, checked on the locked row.
        """

        image_identifier = require_non_empty(image_identifier, "security_image_identifier")
        with self._tx.transaction():
            employee = self.get_by_employee_id(employee_id)
            locked = self._employees.get_by_id(employee.id, for_update=True)
            if locked is None:
                raise NotFoundError(f"Employee {employee_id} not found")
            if locked.security_image_identifier is not None:
                raise AlreadyEnrolledError(f"Employee {employee_id} already enrolled a security image")
            return self.update_employee(locked.id, security_image_identifier=image_identifier)

    def set_biometric(self, employee_id: str, enabled: bool) -> Employee:
        employee = self.get_by_employee_id(employee_id)
        return self.update_employee(employee.id, is_biometric_enabled=bool(enabled))

    def delete_employee(self, employee_uuid: str) -> None:
        """Delete the employee, its attendance history and its auth_users row."""

        with self._tx.transaction():
            employee: Optional[Employee] = self._employees.get_by_id(employee_uuid, for_update=True)
            if not employee:
                raise NotFoundError(f"Employee {employee_uuid} not found")
            self._attendance.delete_for_employee(employee_uuid)
            self._employees.delete(employee_uuid)
            self._auth_users.delete_by_employee_uuid(employee_uuid)
        logger.info("employee deleted employee_id=%s", employee.employee_id)

"""Write-through maintenance of the ``auth_users`` projection.

``AuthUserSync.sync`` is called by ``EmployeeService`` after every insert or
update of an employee, inside the same transaction. If any lookup fails the
error propagates and the employee write rolls back with it, so a committed
employee row always has an up-to-date projection row.

Person edits and catalog renames do not pass through here. ``rebuild_all``
is the operator-invoked repair for that staleness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from ..catalogs.repository import CatalogRepository
from ..common.datetime_utils import now_utc
from ..core.enums import CatalogKind
from ..core.exceptions import ProjectionSyncError
from ..database.transaction import TransactionManager
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..persons.repository import PersonRepository
from .model import AuthUser
from .repository import AuthUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RebuildReport:
    synced: int
    pruned: int
    failed: tuple[str, ...] = ()


class AuthUserSync:
    def __init__(
        self,
        employees: EmployeeRepository,
        persons: PersonRepository,
        catalogs: CatalogRepository,
        auth_users: AuthUserRepository,
        tx: TransactionManager,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._employees = employees
        self._persons = persons
        self._catalogs = catalogs
        self._auth_users = auth_users
        self._tx = tx
        self._clock = clock

    def build(self, employee: Employee) -> AuthUser:
        """Resolve the joined state for ``employee`` without writing anything."""

        person = self._persons.get_by_id(employee.person_id)
        if person is None:
            raise ProjectionSyncError(f"{employee.employee_id}: person {employee.person_id} not found")

        position = self._catalogs.get(CatalogKind.POSITIONS, employee.position_id)
        if position is None:
            raise ProjectionSyncError(f"{employee.employee_id}: position {employee.position_id} not found")

        status = self._catalogs.get(CatalogKind.EMPLOYEE_STATUS, employee.status_id)
        if status is None:
            raise ProjectionSyncError(f"{employee.employee_id}: employee status {employee.status_id} not found")

        return AuthUser(
            employee_id=employee.employee_id,
            employee_uuid=employee.id,
            person_uuid=person.id,
            full_name=person.full_name,
            birth_date=person.birth_date,
            security_image_identifier=employee.security_image_identifier,
            status_name=status.name,
            position_name=position.name,
            is_biometric_enabled=bool(employee.is_biometric_enabled),
            last_synced_at=self._clock(),
        )

    def sync(self, employee: Employee) -> AuthUser:
        """Recompute and upsert the projection row for ``employee``.

        Joins the caller's transaction when one is open.
        """

        with self._tx.transaction():
            row = self.build(employee)
            self._auth_users.upsert(row)
        logger.debug("auth_users synced employee_id=%s", row.employee_id)
        return row

    def rebuild_all(self) -> RebuildReport:
        """Recompute every projection row and drop rows whose employee is gone.

        Each employee is synced in its own transaction; a corrupt employee is
        reported in ``failed`` and does not block the others.
        """

        synced = 0
        failed: list[str] = []
        for employee in self._employees.list_all():
            try:
                with self._tx.transaction():
                    current = self._employees.get_by_id(employee.id, for_update=True)
                    if current is None:
                        continue
                    self.sync(current)
                synced += 1
            except ProjectionSyncError as exc:
                logger.error("rebuild: %s", exc)
                failed.append(employee.employee_id)

        pruned = 0
        with self._tx.transaction():
            known = {e.id for e in self._employees.list_all()}
            for row in self._auth_users.list_all():
                if row.employee_uuid not in known and self._auth_users.delete_by_employee_uuid(row.employee_uuid):
                    pruned += 1

        report = RebuildReport(synced=synced, pruned=pruned, failed=tuple(failed))
        logger.info("auth_users rebuild: synced=%s pruned=%s failed=%s", synced, pruned, len(failed))
        return report

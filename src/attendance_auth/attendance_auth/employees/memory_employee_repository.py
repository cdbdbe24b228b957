from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import DuplicateEmployeeCodeError, MissingReferenceError, PersonAlreadyLinkedError
from ..database.memory import InMemoryDatabase
from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict:
        return self._db.tables["employees"]

    def _check_constraints(self, employee: Employee) -> None:
        tables = self._db.tables
        if employee.person_id not in tables["persons"]:
            raise MissingReferenceError(f"person {employee.person_id} does not exist", constraint="fk_employees_person")
        if employee.position_id not in tables["positions"]:
            raise MissingReferenceError(
                f"position {employee.position_id} does not exist", constraint="fk_employees_position"
            )
        if employee.status_id not in tables["employee_status"]:
            raise MissingReferenceError(
                f"employee status {employee.status_id} does not exist", constraint="fk_employees_status"
            )
        for other in self._rows.values():
            if other.id == employee.id:
                continue
            if other.employee_id == employee.employee_id:
                raise DuplicateEmployeeCodeError(f"Duplicate entry '{employee.employee_id}' for employee_id")
            if other.person_id == employee.person_id:
                raise PersonAlreadyLinkedError(f"person {employee.person_id} is already linked to an employee")

    def get_by_id(self, employee_uuid: str, *, for_update: bool = False) -> Optional[Employee]:
        # The store lock already serializes writers; for_update is a no-op here.
        return self._rows.get(employee_uuid)

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self._rows.values() if e.employee_id == employee_id), None)

    def get_by_person_id(self, person_id: str) -> Optional[Employee]:
        return next((e for e in self._rows.values() if e.person_id == person_id), None)

    def list_all(self) -> Sequence[Employee]:
        return sorted(self._rows.values(), key=lambda e: e.employee_id)

    def create(self, employee: Employee) -> None:
        with self._db.transaction():
            self._check_constraints(employee)
            self._rows[employee.id] = employee

    def update(self, employee: Employee) -> bool:
        with self._db.transaction():
            if employee.id not in self._rows:
                return False
            self._check_constraints(employee)
            self._rows[employee.id] = employee
            return True

    def delete(self, employee_uuid: str) -> bool:
        with self._db.transaction():
            if self._rows.pop(employee_uuid, None) is None:
                return False
            attendance = self._db.tables["attendance"]
            for key in [k for k, r in attendance.items() if r.employee_uuid == employee_uuid]:
                del attendance[key]
            return True

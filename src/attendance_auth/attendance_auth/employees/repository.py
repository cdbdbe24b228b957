from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Writes here never touch ``auth_users``; ``EmployeeService`` pairs each
    write with ``AuthUserSync.sync`` inside one transaction.
    """

    def get_by_id(self, employee_uuid: str, *, for_update: bool = False) -> Optional[Employee]:
        """``for_update`` takes the row lock so concurrent updates serialize."""

        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_person_id(self, person_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, employee: Employee) -> None:
        raise NotImplementedError

    def update(self, employee: Employee) -> bool:
        raise NotImplementedError

    def delete(self, employee_uuid: str) -> bool:
        """Attendance rows cascade with the employee."""

        raise NotImplementedError

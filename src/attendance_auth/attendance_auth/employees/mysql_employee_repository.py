from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import as_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    id, person_id, employee_id, position_id, status_id, hire_date,
    is_biometric_enabled, security_image_identifier, created_at, updated_at
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        id=str(r["id"]),
        person_id=str(r["person_id"]),
        employee_id=r["employee_id"],
        position_id=int(r["position_id"]),
        status_id=int(r["status_id"]),
        hire_date=r["hire_date"],
        is_biometric_enabled=bool(r["is_biometric_enabled"]),
        security_image_identifier=r.get("security_image_identifier"),
        created_at=as_utc(r["created_at"]),
        updated_at=as_utc(r["updated_at"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple, *, for_update: bool = False) -> Optional[Employee]:
        lock = " FOR UPDATE" if for_update else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}{lock}", params)
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_id(self, employee_uuid: str, *, for_update: bool = False) -> Optional[Employee]:
        return self._get_one("id=%s", (employee_uuid,), for_update=for_update)

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return self._get_one("employee_id=%s", (employee_id,))

    def get_by_person_id(self, person_id: str) -> Optional[Employee]:
        return self._get_one("person_id=%s", (person_id,))

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id")
            return [_to_employee(r) for r in fetchall(cur)]

    def create(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    id, person_id, employee_id, position_id, status_id, hire_date,
                    is_biometric_enabled, security_image_identifier, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.id,
                    employee.person_id,
                    employee.employee_id,
                    int(employee.position_id),
                    int(employee.status_id),
                    employee.hire_date,
                    1 if employee.is_biometric_enabled else 0,
                    employee.security_image_identifier,
                    employee.created_at,
                    employee.updated_at,
                ),
            )

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET position_id=%s, status_id=%s, hire_date=%s,
                    is_biometric_enabled=%s, security_image_identifier=%s, updated_at=%s
                WHERE id=%s
                """,
                (
                    int(employee.position_id),
                    int(employee.status_id),
                    employee.hire_date,
                    1 if employee.is_biometric_enabled else 0,
                    employee.security_image_identifier,
                    employee.updated_at,
                    employee.id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, employee_uuid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (employee_uuid,))
            return cur.rowcount > 0

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.memory_auth_user_repository import InMemoryAuthUserRepository
from .auth.mysql_auth_user_repository import MySQLAuthUserRepository
from .auth.repository import AuthUserRepository
from .auth.service import AuthService
from .auth.sync import AuthUserSync
from .catalogs.memory_catalog_repository import InMemoryCatalogRepository
from .catalogs.mysql_catalog_repository import MySQLCatalogRepository
from .catalogs.repository import CatalogRepository
from .catalogs.service import CatalogService
from .common.datetime_utils import now_utc
from .core.constants import ACTIVE_STATUS_NAME
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import InMemoryDatabase
from .database.transaction import TransactionManager
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .persons.memory_person_repository import InMemoryPersonRepository
from .persons.mysql_person_repository import MySQLPersonRepository
from .persons.repository import PersonRepository
from .persons.service import PersonService


@dataclass(frozen=True)
class Container:
    tx: TransactionManager

    catalogs_repo: CatalogRepository
    persons_repo: PersonRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    auth_users_repo: AuthUserRepository

    auth_sync: AuthUserSync
    catalog_service: CatalogService
    person_service: PersonService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    auth_service: AuthService


def _assemble(
    *,
    tx: TransactionManager,
    catalogs_repo: CatalogRepository,
    persons_repo: PersonRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    auth_users_repo: AuthUserRepository,
    clock: Callable[[], datetime],
    active_status_name: str,
) -> Container:
    auth_sync = AuthUserSync(employees_repo, persons_repo, catalogs_repo, auth_users_repo, tx, clock=clock)

    return Container(
        tx=tx,
        catalogs_repo=catalogs_repo,
        persons_repo=persons_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        auth_users_repo=auth_users_repo,
        auth_sync=auth_sync,
        catalog_service=CatalogService(catalogs_repo),
        person_service=PersonService(persons_repo, tx, clock=clock),
        employee_service=EmployeeService(
            employees_repo,
            persons_repo,
            catalogs_repo,
            attendance_repo,
            auth_users_repo,
            auth_sync,
            tx,
            clock=clock,
        ),
        attendance_service=AttendanceService(attendance_repo, employees_repo, tx, clock=clock),
        auth_service=AuthService(auth_users_repo, active_status_name=active_status_name),
    )


def build_container(
    *,
    db_config: dict,
    clock: Callable[[], datetime] = now_utc,
    active_status_name: str = ACTIVE_STATUS_NAME,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return _assemble(
        tx=conn,
        catalogs_repo=MySQLCatalogRepository(conn),
        persons_repo=MySQLPersonRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        auth_users_repo=MySQLAuthUserRepository(conn),
        clock=clock,
        active_status_name=active_status_name,
    )


def build_memory_container(
    *,
    db: Optional[InMemoryDatabase] = None,
    clock: Callable[[], datetime] = now_utc,
    active_status_name: str = ACTIVE_STATUS_NAME,
) -> Container:
    db = db or InMemoryDatabase()
    return _assemble(
        tx=db,
        catalogs_repo=InMemoryCatalogRepository(db),
        persons_repo=InMemoryPersonRepository(db),
        employees_repo=InMemoryEmployeeRepository(db),
        attendance_repo=InMemoryAttendanceRepository(db),
        auth_users_repo=InMemoryAuthUserRepository(db),
        clock=clock,
        active_status_name=active_status_name,
    )

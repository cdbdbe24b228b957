"""Example: drive the service layer directly (no Flask), in memory.

Shows the write-through projection: every employee write refreshes auth_users,
a position rename does not until the next employee write or a rebuild.
"""

from datetime import date

from src.attendance_auth.attendance_auth.container import build_memory_container
from src.attendance_auth.attendance_auth.core.enums import CatalogKind


def main():
    container = build_memory_container()
    container.catalog_service.ensure_defaults()

    trimmer = container.catalog_service.ensure(CatalogKind.POSITIONS, "Trimmer")
    active = container.catalog_service.ensure(CatalogKind.EMPLOYEE_STATUS, "Active")

    person = container.person_service.create_person(full_name="Jane Doe", birth_date=date(1990, 1, 1))
    container.employee_service.create_employee(
        person_id=person.id,
        employee_id="EMP001",
        position_id=trimmer.id,
        status_id=active.id,
        hire_date=date(2024, 3, 1),
    )
    print(container.auth_users_repo.get("EMP001"))

    container.catalog_service.rename(CatalogKind.POSITIONS, trimmer.id, "Harvester")
    print(container.auth_users_repo.get("EMP001").position_name)  # still "Trimmer"

    print(container.auth_sync.rebuild_all())
    print(container.auth_users_repo.get("EMP001").position_name)  # "Harvester"


if __name__ == "__main__":
    main()

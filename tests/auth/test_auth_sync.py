from __future__ import annotations

import dataclasses
from datetime import date

import pytest

from src.attendance_auth.attendance_auth.auth.sync import AuthUserSync
from src.attendance_auth.attendance_auth.core.enums import CatalogKind
from src.attendance_auth.attendance_auth.core.exceptions import ProjectionSyncError
from src.attendance_auth.attendance_auth.employees.service import EmployeeService


def _projection(container, employee_id: str):
    return container.auth_users_repo.get(employee_id)


def test_new_employee_gets_projection_row(container, jane, emp001, clock):
    row = _projection(container, "EMP001")

    assert row is not None
    assert row.employee_uuid == emp001.id
    assert row.person_uuid == jane.id
    assert row.full_name == "Jane Doe"
    assert row.birth_date == date(1990, 1, 1)
    assert row.status_name == "Active"
    assert row.position_name == "Trimmer"
    assert row.is_biometric_enabled is False
    assert row.security_image_identifier is None
    assert row.enrollment_required is True
    assert row.last_synced_at < clock.now


def test_exactly_one_projection_row_per_employee(container, catalogs):
    for n in range(3):
        person = container.person_service.create_person(full_name=f"Worker {n}", birth_date=date(1985, 5, n + 1))
        employee = container.employee_service.create_employee(
            person_id=person.id,
            employee_id=f"EMP10{n}",
            position_id=catalogs.trimmer,
            status_id=catalogs.active,
            hire_date=date(2025, 1, 1),
        )
        container.employee_service.update_employee(employee.id, position_id=catalogs.field_manager)
        container.employee_service.update_employee(employee.id, is_biometric_enabled=True)

    employees = container.employees_repo.list_all()
    rows = container.auth_users_repo.list_all()
    assert sorted(e.employee_id for e in employees) == [r.employee_id for r in rows]
    assert {e.id for e in employees} == {r.employee_uuid for r in rows}


def test_update_round_trips_into_projection(container, emp001, catalogs):
    container.employee_service.update_employee(
        emp001.id,
        position_id=catalogs.field_manager,
        status_id=catalogs.inactive,
        is_biometric_enabled=True,
    )

    row = _projection(container, "EMP001")
    assert row.position_name == "Field Manager"
    assert row.status_name == "Inactive"
    assert row.is_biometric_enabled is True


def test_security_image_enrollment_only_changes_image_and_timestamp(container, emp001):
    before = _projection(container, "EMP001")

    container.employee_service.enroll_security_image("EMP001", "img_42")

    after = _projection(container, "EMP001")
    assert after.security_image_identifier == "img_42"
    assert after.enrollment_required is False
    assert after.last_synced_at > before.last_synced_at
    assert dataclasses.replace(after, security_image_identifier=None, last_synced_at=before.last_synced_at) == before


def test_repeated_update_is_idempotent_except_sync_time(container, emp001, catalogs):
    container.employee_service.update_employee(emp001.id, position_id=catalogs.field_manager)
    first = _projection(container, "EMP001")
    container.employee_service.update_employee(emp001.id, position_id=catalogs.field_manager)
    second = _projection(container, "EMP001")

    assert second.last_synced_at > first.last_synced_at
    assert dataclasses.replace(second, last_synced_at=first.last_synced_at) == first


class _PositionsGone:
    """Catalog lookups as the sync sees them once a position row went missing."""

    def __init__(self, inner):
        self._inner = inner

    def get(self, kind, entry_id):
        if kind is CatalogKind.POSITIONS:
            return None
        return self._inner.get(kind, entry_id)


def test_missing_catalog_row_aborts_employee_update(container, emp001, monkeypatch):
    before_employee = container.employees_repo.get_by_id(emp001.id)
    before_row = _projection(container, "EMP001")

    monkeypatch.setattr(container.auth_sync, "_catalogs", _PositionsGone(container.catalogs_repo))

    with pytest.raises(ProjectionSyncError):
        container.employee_service.update_employee(emp001.id, is_biometric_enabled=True)

    assert container.employees_repo.get_by_id(emp001.id) == before_employee
    assert _projection(container, "EMP001") == before_row


def test_failed_sync_on_create_leaves_no_employee(container, jane, catalogs, clock):
    class _NoPersons:
        def get_by_id(self, person_id):
            return None

    broken_sync = AuthUserSync(
        container.employees_repo,
        _NoPersons(),
        container.catalogs_repo,
        container.auth_users_repo,
        container.tx,
        clock=clock,
    )
    service = EmployeeService(
        container.employees_repo,
        container.persons_repo,
        container.catalogs_repo,
        container.attendance_repo,
        container.auth_users_repo,
        broken_sync,
        container.tx,
        clock=clock,
    )

    with pytest.raises(ProjectionSyncError):
        service.create_employee(
            person_id=jane.id,
            employee_id="EMP002",
            position_id=catalogs.trimmer,
            status_id=catalogs.active,
            hire_date=date(2025, 6, 1),
        )

    assert container.employees_repo.get_by_employee_id("EMP002") is None
    assert _projection(container, "EMP002") is None


def test_catalog_rename_leaves_projection_stale_until_next_write(container, emp001, catalogs):
    container.catalog_service.rename(CatalogKind.POSITIONS, catalogs.trimmer, "Harvester")

    assert _projection(container, "EMP001").position_name == "Trimmer"

    container.employee_service.update_employee(emp001.id, is_biometric_enabled=True)

    assert _projection(container, "EMP001").position_name == "Harvester"


def test_rebuild_all_refreshes_stale_rows(container, jane, emp001, catalogs):
    container.catalog_service.rename(CatalogKind.POSITIONS, catalogs.trimmer, "Harvester")
    container.person_service.update_person(jane.id, full_name="Jane Smith")
    stale = _projection(container, "EMP001")
    assert (stale.position_name, stale.full_name) == ("Trimmer", "Jane Doe")

    report = container.auth_sync.rebuild_all()

    row = _projection(container, "EMP001")
    assert (row.position_name, row.full_name) == ("Harvester", "Jane Smith")
    assert report.synced == 1
    assert report.pruned == 0
    assert report.failed == ()


def test_rebuild_all_prunes_orphans_and_reports_failures(container, db, emp001, catalogs):
    person = container.person_service.create_person(full_name="John Roe", birth_date=date(1979, 7, 7))
    other = container.employee_service.create_employee(
        person_id=person.id,
        employee_id="EMP002",
        position_id=catalogs.field_manager,
        status_id=catalogs.active,
        hire_date=date(2023, 9, 1),
    )
    orphan = dataclasses.replace(_projection(container, "EMP002"), employee_id="EMP999", employee_uuid="gone")
    db.tables["auth_users"]["EMP999"] = orphan
    del db.tables["positions"][catalogs.trimmer]

    report = container.auth_sync.rebuild_all()

    assert report.failed == ("EMP001",)
    assert report.synced == 1
    assert report.pruned == 1
    assert _projection(container, "EMP999") is None
    assert _projection(container, "EMP002").employee_uuid == other.id
    # the failed employee keeps its last good row
    assert _projection(container, "EMP001").position_name == "Trimmer"


def test_delete_employee_removes_projection_and_attendance(container, emp001, catalogs, fixed_now):
    container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)

    container.employee_service.delete_employee(emp001.id)

    assert container.employees_repo.get_by_id(emp001.id) is None
    assert _projection(container, "EMP001") is None
    assert container.attendance_service.history(emp001.id) == []

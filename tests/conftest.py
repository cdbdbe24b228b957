from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

import pytest

from src.attendance_auth.attendance_auth.container import build_memory_container
from src.attendance_auth.attendance_auth.core.enums import CatalogKind
from src.attendance_auth.attendance_auth.database.memory import InMemoryDatabase


class TickingClock:
    """Returns a strictly increasing time on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + self.step
        return value


@dataclass(frozen=True)
class CatalogIds:
    trimmer: int
    field_manager: int
    active: int
    inactive: int
    present: int
    absent: int


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def container(db, clock):
    c = build_memory_container(db=db, clock=clock)
    c.catalog_service.ensure_defaults()
    return c


@pytest.fixture
def catalogs(container) -> CatalogIds:
    def _id(kind: CatalogKind, name: str) -> int:
        return container.catalogs_repo.get_by_name(kind, name).id

    return CatalogIds(
        trimmer=_id(CatalogKind.POSITIONS, "Trimmer"),
        field_manager=_id(CatalogKind.POSITIONS, "Field Manager"),
        active=_id(CatalogKind.EMPLOYEE_STATUS, "Active"),
        inactive=_id(CatalogKind.EMPLOYEE_STATUS, "Inactive"),
        present=_id(CatalogKind.ATTENDANCE_STATUS, "Present"),
        absent=_id(CatalogKind.ATTENDANCE_STATUS, "Absent"),
    )


@pytest.fixture
def jane(container):
    return container.person_service.create_person(
        full_name="Jane Doe",
        birth_date=date(1990, 1, 1),
        phone_number="+15551230001",
    )


@pytest.fixture
def emp001(container, jane, catalogs):
    return container.employee_service.create_employee(
        person_id=jane.id,
        employee_id="EMP001",
        position_id=catalogs.trimmer,
        status_id=catalogs.active,
        hire_date=date(2024, 3, 1),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.attendance_auth.attendance_auth.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()

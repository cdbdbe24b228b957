from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.attendance_auth.attendance_auth.core.exceptions import (
    DuplicateAttendanceError,
    MissingReferenceError,
    NotFoundError,
    UniqueViolation,
    ValidationError,
)


def test_check_in_creates_record_for_today(container, emp001, catalogs, fixed_now):
    record = container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)

    assert record.employee_uuid == emp001.id
    assert record.attendance_date == fixed_now.date()
    assert record.status_id == catalogs.present
    assert record.check_in == fixed_now
    assert record.check_out is None


def test_second_check_in_same_day_is_a_duplicate(container, emp001, catalogs, fixed_now):
    container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)

    with pytest.raises(DuplicateAttendanceError) as excinfo:
        container.attendance_service.check_in(
            emp001.id, status_id=catalogs.present, now=fixed_now + timedelta(hours=2)
        )

    assert isinstance(excinfo.value, UniqueViolation)
    assert excinfo.value.constraint == "uq_attendance_employee_date"
    assert len(container.attendance_service.history(emp001.id)) == 1


def test_check_in_next_day_is_allowed(container, emp001, catalogs, fixed_now):
    container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)
    container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now + timedelta(days=1))

    history = container.attendance_service.history(emp001.id)
    assert [r.attendance_date for r in history] == [date(2026, 2, 3), date(2026, 2, 2)]


def test_check_in_uses_clock_when_now_is_omitted(container, emp001, catalogs, clock):
    expected = clock.now
    record = container.attendance_service.check_in(emp001.id, status_id=catalogs.present)

    assert record.check_in == expected


def test_check_in_unknown_employee(container, catalogs, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.check_in("missing", status_id=catalogs.present, now=fixed_now)


def test_check_in_unknown_status(container, emp001, fixed_now):
    with pytest.raises(MissingReferenceError) as excinfo:
        container.attendance_service.check_in(emp001.id, status_id=77, now=fixed_now)
    assert excinfo.value.constraint == "fk_attendance_status"


def test_check_out_updates_same_record(container, emp001, catalogs, fixed_now):
    checked_in = container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)
    later = fixed_now + timedelta(hours=8)

    record = container.attendance_service.check_out(emp001.id, now=later)

    assert record.attendance_id == checked_in.attendance_id
    assert record.check_out == later


def test_check_out_without_check_in(container, emp001, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.check_out(emp001.id, now=fixed_now)


def test_check_out_twice(container, emp001, catalogs, fixed_now):
    container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)
    container.attendance_service.check_out(emp001.id, now=fixed_now + timedelta(hours=8))

    with pytest.raises(ValidationError):
        container.attendance_service.check_out(emp001.id, now=fixed_now + timedelta(hours=9))


def test_check_out_before_check_in(container, emp001, catalogs, fixed_now):
    container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)

    with pytest.raises(ValidationError):
        container.attendance_service.check_out(emp001.id, now=fixed_now - timedelta(minutes=5))


def test_record_day_without_check_in_blocks_check_in(container, emp001, catalogs):
    day = date(2026, 2, 4)
    record = container.attendance_service.record_day(emp001.id, attendance_date=day, status_id=catalogs.absent)
    assert record.check_in is None

    with pytest.raises(DuplicateAttendanceError):
        container.attendance_service.check_in(
            emp001.id,
            status_id=catalogs.present,
            now=datetime(2026, 2, 4, 7, 0, tzinfo=timezone.utc),
        )
    with pytest.raises(NotFoundError):
        container.attendance_service.check_out(emp001.id, now=datetime(2026, 2, 4, 17, 0, tzinfo=timezone.utc))


def test_set_status_is_caller_supplied(container, emp001, catalogs, fixed_now):
    container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now)

    record = container.attendance_service.set_status(
        emp001.id, attendance_date=fixed_now.date(), status_id=catalogs.absent
    )

    assert record.status_id == catalogs.absent


def test_set_status_missing_record(container, emp001, catalogs):
    with pytest.raises(NotFoundError):
        container.attendance_service.set_status(emp001.id, attendance_date=date(2026, 1, 1), status_id=catalogs.absent)


def test_history_limit(container, emp001, catalogs, fixed_now):
    for n in range(5):
        container.attendance_service.check_in(emp001.id, status_id=catalogs.present, now=fixed_now + timedelta(days=n))

    history = container.attendance_service.history(emp001.id, limit=2)

    assert [r.attendance_date for r in history] == [date(2026, 2, 6), date(2026, 2, 5)]

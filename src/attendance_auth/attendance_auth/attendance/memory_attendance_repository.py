from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.exceptions import DuplicateAttendanceError, MissingReferenceError
from ..database.memory import InMemoryDatabase
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict:
        return self._db.tables["attendance"]

    def _check_status(self, status_id: int) -> None:
        if int(status_id) not in self._db.tables["attendance_status"]:
            raise MissingReferenceError(
                f"attendance status {status_id} does not exist", constraint="fk_attendance_status"
            )

    def get_for_employee_and_date(self, employee_uuid: str, attendance_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self._rows.values() if r.employee_uuid == employee_uuid and r.attendance_date == attendance_date),
            None,
        )

    def list_recent_for_employee(self, employee_uuid: str, limit: int) -> Sequence[AttendanceRecord]:
        items = [r for r in self._rows.values() if r.employee_uuid == employee_uuid]
        items.sort(key=lambda r: r.attendance_date, reverse=True)
        return items[: int(limit)]

    def create(
        self,
        *,
        employee_uuid: str,
        attendance_date: date,
        status_id: int,
        check_in: Optional[datetime] = None,
    ) -> int:
        with self._db.transaction():
            if employee_uuid not in self._db.tables["employees"]:
                raise MissingReferenceError(
                    f"employee {employee_uuid} does not exist", constraint="fk_attendance_employee"
                )
            self._check_status(status_id)
            if self.get_for_employee_and_date(employee_uuid, attendance_date) is not None:
                raise DuplicateAttendanceError(f"Duplicate entry '{employee_uuid}-{attendance_date}' for attendance")

            attendance_id = self._db.next_id("attendance")
            self._rows[attendance_id] = AttendanceRecord(
                attendance_id=attendance_id,
                employee_uuid=employee_uuid,
                attendance_date=attendance_date,
                status_id=int(status_id),
                check_in=check_in,
                check_out=None,
            )
            return attendance_id

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        with self._db.transaction():
            rec = self._rows.get(int(attendance_id))
            if rec is None:
                return False
            self._rows[rec.attendance_id] = dataclasses.replace(rec, check_out=check_out)
            return True

    def update_status(self, *, attendance_id: int, status_id: int) -> bool:
        with self._db.transaction():
            rec = self._rows.get(int(attendance_id))
            if rec is None:
                return False
            self._check_status(status_id)
            self._rows[rec.attendance_id] = dataclasses.replace(rec, status_id=int(status_id))
            return True

    def delete_for_employee(self, employee_uuid: str) -> int:
        with self._db.transaction():
            keys = [k for k, r in self._rows.items() if r.employee_uuid == employee_uuid]
            for key in keys:
                del self._rows[key]
            return len(keys)

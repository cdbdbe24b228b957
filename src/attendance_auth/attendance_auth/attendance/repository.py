from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_uuid: str, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_recent_for_employee(self, employee_uuid: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_uuid: str,
        attendance_date: date,
        status_id: int,
        check_in: Optional[datetime] = None,
    ) -> int:
        """Insert the day's record.

        Raises DuplicateAttendanceError when (employee, date) already has one.
        """

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status_id: int) -> bool:
        raise NotImplementedError

    def delete_for_employee(self, employee_uuid: str) -> int:
        raise NotImplementedError

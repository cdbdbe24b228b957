from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..database.transaction import TransactionManager
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: daily check-in / check-out.

    The status of a record is supplied by the caller; no lateness or absence
    policy is computed here. A second check-in on the same day surfaces as
    DuplicateAttendanceError so the caller can switch to an update.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        tx: TransactionManager,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance
        self._employees = employees
        self._tx = tx
        self._clock = clock

    def _require_employee(self, employee_uuid: str) -> None:
        if not self._employees.get_by_id(employee_uuid):
            raise NotFoundError(f"Employee {employee_uuid} not found")

    def _require_record(self, employee_uuid: str, attendance_date: date) -> AttendanceRecord:
        record = self._attendance.get_for_employee_and_date(employee_uuid, attendance_date)
        if not record:
            raise NotFoundError(f"No attendance record for {attendance_date.isoformat()}")
        return record

    def check_in(self, employee_uuid: str, *, status_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        with self._tx.transaction():
            self._require_employee(employee_uuid)
            self._attendance.create(
                employee_uuid=employee_uuid,
                attendance_date=now.date(),
                status_id=int(status_id),
                check_in=now,
            )
            record = self._require_record(employee_uuid, now.date())
        logger.info("check-in employee=%s date=%s", employee_uuid, record.attendance_date)
        return record

    def record_day(self, employee_uuid: str, *, attendance_date: date, status_id: int) -> AttendanceRecord:
        """Create a record without a check-in (e.g. an absence entered by a scheduler)."""

        with self._tx.transaction():
            self._require_employee(employee_uuid)
            self._attendance.create(employee_uuid=employee_uuid, attendance_date=attendance_date, status_id=int(status_id))
            return self._require_record(employee_uuid, attendance_date)

    def check_out(self, employee_uuid: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        with self._tx.transaction():
            record = self._attendance.get_for_employee_and_date(employee_uuid, now.date())
            if not record or record.check_in is None:
                raise NotFoundError("No check-in recorded today")
            if record.check_out is not None:
                raise ValidationError("Already checked out today")
            if now < record.check_in:
                raise ValidationError("Check-out cannot be earlier than check-in")

            self._attendance.update_checkout(attendance_id=record.attendance_id, check_out=now)
            record = self._require_record(employee_uuid, now.date())
        logger.info("check-out employee=%s date=%s", employee_uuid, record.attendance_date)
        return record

    def set_status(self, employee_uuid: str, *, attendance_date: date, status_id: int) -> AttendanceRecord:
        with self._tx.transaction():
            record = self._require_record(employee_uuid, attendance_date)
            self._attendance.update_status(attendance_id=record.attendance_id, status_id=int(status_id))
            return self._require_record(employee_uuid, attendance_date)

    def history(self, employee_uuid: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_recent_for_employee(employee_uuid, limit)

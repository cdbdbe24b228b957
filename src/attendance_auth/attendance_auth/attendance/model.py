from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day.

    ``employee_uuid`` is stored in the ``attendance.employee_id`` column and
    points at ``employees.id``, not at the human-readable code.
    """

    attendance_id: int
    employee_uuid: str
    attendance_date: date
    status_id: int
    check_in: Optional[datetime]
    check_out: Optional[datetime]

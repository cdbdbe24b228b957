from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import as_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        employee_uuid=str(r["employee_id"]),
        attendance_date=r["attendance_date"],
        status_id=int(r["status_id"]),
        check_in=as_utc(r.get("check_in")),
        check_out=as_utc(r.get("check_out")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_uuid: str, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, attendance_date, status_id, check_in, check_out
                FROM attendance
                WHERE employee_id=%s AND attendance_date=%s
                """,
                (employee_uuid, attendance_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_recent_for_employee(self, employee_uuid: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, attendance_date, status_id, check_in, check_out
                FROM attendance
                WHERE employee_id=%s
                ORDER BY attendance_date DESC
                LIMIT %s
                """,
                (employee_uuid, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_uuid: str,
        attendance_date: date,
        status_id: int,
        check_in: Optional[datetime] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, attendance_date, status_id, check_in)
                VALUES(%s,%s,%s,%s)
                """,
                (employee_uuid, attendance_date, int(status_id), as_utc(check_in)),
            )
            return int(cur.lastrowid)

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE attendance SET check_out=%s WHERE id=%s", (as_utc(check_out), int(attendance_id)))
            return cur.rowcount > 0

    def update_status(self, *, attendance_id: int, status_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE attendance SET status_id=%s WHERE id=%s", (int(status_id), int(attendance_id)))
            return cur.rowcount > 0

    def delete_for_employee(self, employee_uuid: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE employee_id=%s", (employee_uuid,))
            return int(cur.rowcount)

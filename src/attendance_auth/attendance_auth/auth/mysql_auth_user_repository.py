from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import as_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AuthUser
from .repository import AuthUserRepository

_COLUMNS = """
    employee_id, employee_uuid, person_uuid, full_name, birth_date,
    security_image_identifier, status_name, position_name,
    is_biometric_enabled, last_synced_at
"""


def _to_auth_user(r: dict) -> AuthUser:
    return AuthUser(
        employee_id=r["employee_id"],
        employee_uuid=str(r["employee_uuid"]),
        person_uuid=str(r["person_uuid"]),
        full_name=r["full_name"],
        birth_date=r["birth_date"],
        security_image_identifier=r.get("security_image_identifier"),
        status_name=r["status_name"],
        position_name=r["position_name"],
        is_biometric_enabled=bool(r["is_biometric_enabled"]),
        last_synced_at=as_utc(r["last_synced_at"]),
    )


class MySQLAuthUserRepository(AuthUserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: str) -> Optional[AuthUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM auth_users WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_auth_user(r) if r else None

    def get_by_employee_uuid(self, employee_uuid: str) -> Optional[AuthUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM auth_users WHERE employee_uuid=%s", (employee_uuid,))
            r = fetchone(cur)
            return _to_auth_user(r) if r else None

    def list_all(self) -> Sequence[AuthUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM auth_users ORDER BY employee_id")
            return [_to_auth_user(r) for r in fetchall(cur)]

    def upsert(self, row: AuthUser) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO auth_users(
                    employee_id, employee_uuid, person_uuid, full_name, birth_date,
                    security_image_identifier, status_name, position_name,
                    is_biometric_enabled, last_synced_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    employee_uuid=VALUES(employee_uuid),
                    person_uuid=VALUES(person_uuid),
                    full_name=VALUES(full_name),
                    birth_date=VALUES(birth_date),
                    security_image_identifier=VALUES(security_image_identifier),
                    status_name=VALUES(status_name),
                    position_name=VALUES(position_name),
                    is_biometric_enabled=VALUES(is_biometric_enabled),
                    last_synced_at=VALUES(last_synced_at)
                """,
                (
                    row.employee_id,
                    row.employee_uuid,
                    row.person_uuid,
                    row.full_name,
                    row.birth_date,
                    row.security_image_identifier,
                    row.status_name,
                    row.position_name,
                    1 if row.is_biometric_enabled else 0,
                    row.last_synced_at,
                ),
            )

    def delete_by_employee_uuid(self, employee_uuid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM auth_users WHERE employee_uuid=%s", (employee_uuid,))
            return cur.rowcount > 0

from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import as_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Person
from .repository import PersonRepository

_COLUMNS = "id, full_name, birth_date, phone_number, avatar_url, created_at, updated_at"


def _to_person(r: dict) -> Person:
    return Person(
        id=str(r["id"]),
        full_name=r["full_name"],
        birth_date=r["birth_date"],
        phone_number=r.get("phone_number"),
        avatar_url=r.get("avatar_url"),
        created_at=as_utc(r["created_at"]),
        updated_at=as_utc(r["updated_at"]),
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, person_id: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM persons WHERE id=%s", (person_id,))
            r = fetchone(cur)
            return _to_person(r) if r else None

    def create(self, person: Person) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO persons(id, full_name, birth_date, phone_number, avatar_url, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    person.id,
                    person.full_name,
                    person.birth_date,
                    person.phone_number,
                    person.avatar_url,
                    person.created_at,
                    person.updated_at,
                ),
            )

    def update(self, person: Person) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE persons
                SET full_name=%s, birth_date=%s, phone_number=%s, avatar_url=%s, updated_at=%s
                WHERE id=%s
                """,
                (
                    person.full_name,
                    person.birth_date,
                    person.phone_number,
                    person.avatar_url,
                    person.updated_at,
                    person.id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, person_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM persons WHERE id=%s", (person_id,))
            return cur.rowcount > 0

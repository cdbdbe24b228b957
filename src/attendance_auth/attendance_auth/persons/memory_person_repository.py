from __future__ import annotations

from typing import Optional

from ..core.exceptions import DuplicatePhoneNumberError, ReferencedRowError
from ..database.memory import InMemoryDatabase
from .model import Person
from .repository import PersonRepository


class InMemoryPersonRepository(PersonRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    @property
    def _rows(self) -> dict:
        return self._db.tables["persons"]

    def _check_phone(self, person: Person) -> None:
        if person.phone_number is None:
            return
        for other in self._rows.values():
            if other.phone_number == person.phone_number and other.id != person.id:
                raise DuplicatePhoneNumberError(f"Duplicate entry '{person.phone_number}' for phone_number")

    def get_by_id(self, person_id: str) -> Optional[Person]:
        return self._rows.get(person_id)

    def create(self, person: Person) -> None:
        with self._db.transaction():
            self._check_phone(person)
            self._rows[person.id] = person

    def update(self, person: Person) -> bool:
        with self._db.transaction():
            if person.id not in self._rows:
                return False
            self._check_phone(person)
            self._rows[person.id] = person
            return True

    def delete(self, person_id: str) -> bool:
        with self._db.transaction():
            if any(e.person_id == person_id for e in self._db.tables["employees"].values()):
                raise ReferencedRowError(
                    f"person {person_id} is still linked to an employee",
                    constraint="fk_employees_person",
                )
            return self._rows.pop(person_id, None) is not None

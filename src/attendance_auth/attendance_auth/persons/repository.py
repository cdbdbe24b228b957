from __future__ import annotations

from typing import Optional, Protocol

from .model import Person


class PersonRepository(Protocol):
    def get_by_id(self, person_id: str) -> Optional[Person]:
        raise NotImplementedError

    def create(self, person: Person) -> None:
        """Raises DuplicatePhoneNumberError when the phone is taken."""

        raise NotImplementedError

    def update(self, person: Person) -> bool:
        raise NotImplementedError

    def delete(self, person_id: str) -> bool:
        """Raises ReferencedRowError while an employee is linked."""

        raise NotImplementedError

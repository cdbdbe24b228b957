from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import optional_e164, optional_text, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..database.transaction import TransactionManager
from .model import Person
from .repository import PersonRepository

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = frozenset({"full_name", "birth_date", "phone_number", "avatar_url"})


class PersonService:
    """Use case: manage demographic records.

    Edits here do not resync ``auth_users``. A renamed person keeps the old
    ``full_name`` in the projection until the next employee write or an
    explicit rebuild.
    """

    def __init__(
        self,
        persons: PersonRepository,
        tx: TransactionManager,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._persons = persons
        self._tx = tx
        self._clock = clock

    def get_person(self, person_id: str) -> Person:
        person = self._persons.get_by_id(person_id)
        if not person:
            raise NotFoundError(f"Person {person_id} not found")
        return person

    def create_person(
        self,
        *,
        full_name: str,
        birth_date: date,
        phone_number: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Person:
        if not isinstance(birth_date, date):
            raise ValidationError("birth_date is required")
        now = self._clock()
        person = Person(
            id=str(uuid.uuid4()),
            full_name=require_non_empty(full_name, "full_name"),
            birth_date=birth_date,
            phone_number=optional_e164(phone_number),
            avatar_url=optional_text(avatar_url, "avatar_url"),
            created_at=now,
            updated_at=now,
        )
        with self._tx.transaction():
            self._persons.create(person)
        logger.info("person created id=%s", person.id)
        return person

    def update_person(self, person_id: str, **changes) -> Person:
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update person fields: {', '.join(sorted(unknown))}")

        if "full_name" in changes:
            changes["full_name"] = require_non_empty(changes["full_name"], "full_name")
        if "phone_number" in changes:
            changes["phone_number"] = optional_e164(changes["phone_number"])
        if "avatar_url" in changes:
            changes["avatar_url"] = optional_text(changes["avatar_url"], "avatar_url")
        if "birth_date" in changes and not isinstance(changes["birth_date"], date):
            raise ValidationError("birth_date is required")

        with self._tx.transaction():
            current = self.get_person(person_id)
            updated = dataclasses.replace(current, updated_at=self._clock(), **changes)
            self._persons.update(updated)
        return updated

    def delete_person(self, person_id: str) -> None:
        with self._tx.transaction():
            if not self._persons.delete(person_id):
                raise NotFoundError(f"Person {person_id} not found")

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Person:
    """Demographic record; lives independently of any employment."""

    id: str
    full_name: str
    birth_date: date
    phone_number: Optional[str]
    avatar_url: Optional[str]
    created_at: datetime
    updated_at: datetime

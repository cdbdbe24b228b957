from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_E164 = re.compile(r"^\+[1-9]\d{7,14}$")


def _require_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not _require_str(value, field_name).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def optional_e164(value: Optional[str], field_name: str = "phone_number") -> Optional[str]:
    """Phone numbers are stored in E.164 form (+15551234567) or not at all."""
    if value is None or not _require_str(value, field_name).strip():
        return None
    value = value.strip()
    if not _E164.match(value):
        raise ValidationError(f"{field_name} must be in E.164 format (e.g. +15551234567)")
    return value


def optional_text(value: Optional[str], field_name: str = "value") -> Optional[str]:
    if value is None:
        return None
    value = _require_str(value, field_name).strip()
    return value or None

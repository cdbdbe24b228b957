from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import (
    ConstraintViolation,
    DuplicateAttendanceError,
    DuplicateCatalogNameError,
    DuplicateEmployeeCodeError,
    DuplicatePhoneNumberError,
    ForeignKeyViolation,
    MissingReferenceError,
    NotNullViolation,
    PersonAlreadyLinkedError,
    ReferencedRowError,
    UniqueViolation,
)
from .connection import DatabaseConnection

_UNIQUE_ERRORS = {
    "uq_attendance_employee_date": DuplicateAttendanceError,
    "uq_employees_employee_id": DuplicateEmployeeCodeError,
    "uq_employees_person_id": PersonAlreadyLinkedError,
    "uq_persons_phone_number": DuplicatePhoneNumberError,
    "uq_positions_name": DuplicateCatalogNameError,
    "uq_employee_status_name": DuplicateCatalogNameError,
    "uq_attendance_status_name": DuplicateCatalogNameError,
}

# MySQL 8 reports "for key 'table.constraint'", older servers omit the table.
_DUP_KEY = re.compile(r"for key '(?:[^'.]+\.)?([^']+)'")
_FK_NAME = re.compile(r"CONSTRAINT `([^`]+)`")
_NULL_COLUMN = re.compile(r"Column '([^']+)' cannot be null")


def translate_integrity_error(exc: mysql.connector.IntegrityError) -> ConstraintViolation:
    """Map a driver IntegrityError to the domain exception for its constraint."""

    msg = getattr(exc, "msg", None) or str(exc)

    if exc.errno == errorcode.ER_DUP_ENTRY:
        m = _DUP_KEY.search(msg)
        name = m.group(1) if m else None
        error_cls = _UNIQUE_ERRORS.get(name or "", UniqueViolation)
        return error_cls(msg, constraint=name)

    if exc.errno in (errorcode.ER_NO_REFERENCED_ROW_2, errorcode.ER_NO_REFERENCED_ROW):
        m = _FK_NAME.search(msg)
        return MissingReferenceError(msg, constraint=m.group(1) if m else None)

    if exc.errno in (errorcode.ER_ROW_IS_REFERENCED_2, errorcode.ER_ROW_IS_REFERENCED):
        m = _FK_NAME.search(msg)
        return ReferencedRowError(msg, constraint=m.group(1) if m else None)

    if exc.errno == errorcode.ER_BAD_NULL_ERROR:
        m = _NULL_COLUMN.search(msg)
        return NotNullViolation(msg, constraint=m.group(1) if m else None)

    return ForeignKeyViolation(msg) if "foreign key" in msg.lower() else ConstraintViolation(msg)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    pinned = conn_factory.current()
    if pinned is not None:
        # Joined transaction: commit/rollback belong to the outer block.
        cur = pinned.cursor(dictionary=dictionary)
        try:
            yield pinned, cur
        except mysql.connector.IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        conn.rollback()
        raise translate_integrity_error(exc) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])

from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced row does not exist."""


class AuthenticationError(DomainError):
    """Raised when an employee cannot be identified or verified."""


class EnrollmentRequiredError(AuthenticationError):
    """Raised when a security image check is attempted before enrollment."""


class AlreadyEnrolledError(DomainError):
    """Raised when first-login enrollment is attempted a second time."""


class ConstraintViolation(DomainError):
    """A write rejected by a storage constraint.

    ``constraint`` carries the constraint name (e.g. ``uq_attendance_employee_date``)
    so callers can present an actionable message.
    """

    default_constraint: Optional[str] = None

    def __init__(self, message: str, *, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint or self.default_constraint


class UniqueViolation(ConstraintViolation):
    pass


class ForeignKeyViolation(ConstraintViolation):
    pass


class NotNullViolation(ConstraintViolation):
    pass


class DuplicateAttendanceError(UniqueViolation):
    """A second attendance record for the same (employee, date)."""

    default_constraint = "uq_attendance_employee_date"


class DuplicateEmployeeCodeError(UniqueViolation):
    default_constraint = "uq_employees_employee_id"


class PersonAlreadyLinkedError(UniqueViolation):
    default_constraint = "uq_employees_person_id"


class DuplicatePhoneNumberError(UniqueViolation):
    default_constraint = "uq_persons_phone_number"


class DuplicateCatalogNameError(UniqueViolation):
    pass


class MissingReferenceError(ForeignKeyViolation):
    """Insert/update points at a row that does not exist."""


class ReferencedRowError(ForeignKeyViolation):
    """Delete rejected because other rows still reference the target."""


class ProjectionSyncError(DomainError):
    """The auth projection could not be rebuilt from the source tables.

    Indicates pre-existing data corruption; the triggering write must abort.
    """

"""Shared helpers for the Flask JSON controllers."""

from __future__ import annotations

import dataclasses
import hmac
import logging
from datetime import date, datetime
from functools import wraps
from typing import Any

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import BadRequest, Forbidden, HTTPException

from ..core.exceptions import (
    AlreadyEnrolledError,
    AuthenticationError,
    ConstraintViolation,
    EnrollmentRequiredError,
    NotFoundError,
    ProjectionSyncError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def serialize(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: serialize(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object body")
    return data


def require_field(data: dict, name: str) -> Any:
    value = data.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{name} is required")
    return value


def require_date(data: dict, name: str) -> date:
    value = require_field(data, name)
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD") from None


def require_int(data: dict, name: str) -> int:
    value = require_field(data, name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None


def admin_required(view):
    """Guard write endpoints with ADMIN_API_TOKEN when one is configured."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        token = current_app.config.get("ADMIN_API_TOKEN")
        if token:
            supplied = request.headers.get("X-Admin-Token", "")
            if not hmac.compare_digest(str(token).encode(), supplied.encode()):
                raise Forbidden("Admin token required")
        return view(*args, **kwargs)

    return wrapper


def _error(message: str, status: int, **extra):
    payload = {"success": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(EnrollmentRequiredError)
    def _enrollment(e: EnrollmentRequiredError):
        return _error(str(e), 403, enrollment_required=True)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return _error(str(e), 401)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(AlreadyEnrolledError)
    def _already_enrolled(e: AlreadyEnrolledError):
        return _error(str(e), 409)

    @app.errorhandler(ConstraintViolation)
    def _constraint(e: ConstraintViolation):
        return _error(str(e), 409, constraint=e.constraint, kind=type(e).__name__)

    @app.errorhandler(ProjectionSyncError)
    def _sync_failed(e: ProjectionSyncError):
        logger.exception("auth_users sync failed; write rolled back")
        return _error("Employee data is inconsistent; the change was not saved", 500)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, require_date, require_field, serialize
from ..container import Container


def register(app: Flask, container: Container) -> None:
    """Login endpoints; every read goes through the auth_users projection."""

    @app.route("/api/auth/identify", methods=["POST"], endpoint="auth_identify")
    def auth_identify():
        data = json_body()
        challenge = container.auth_service.identify(str(require_field(data, "employee_id")))
        return jsonify({"success": True, "challenge": serialize(challenge)})

    @app.route("/api/auth/verify-birth-date", methods=["POST"], endpoint="auth_verify_birth_date")
    def auth_verify_birth_date():
        data = json_body()
        challenge = container.auth_service.verify_birth_date(
            str(require_field(data, "employee_id")),
            require_date(data, "birth_date"),
        )
        return jsonify({"success": True, "challenge": serialize(challenge)})

    @app.route("/api/auth/verify-security-image", methods=["POST"], endpoint="auth_verify_security_image")
    def auth_verify_security_image():
        data = json_body()
        challenge = container.auth_service.verify_security_image(
            str(require_field(data, "employee_id")),
            str(require_field(data, "security_image_identifier")),
        )
        return jsonify({"success": True, "challenge": serialize(challenge)})

    @app.route("/api/auth/enroll", methods=["POST"], endpoint="auth_enroll")
    def auth_enroll():
        data = json_body()
        employee_id = str(require_field(data, "employee_id"))
        # Enrollment is only open to employees who passed the birth-date step.
        container.auth_service.verify_birth_date(employee_id, require_date(data, "birth_date"))
        container.employee_service.enroll_security_image(employee_id, require_field(data, "security_image_identifier"))
        return jsonify({"success": True, "challenge": serialize(container.auth_service.identify(employee_id))})

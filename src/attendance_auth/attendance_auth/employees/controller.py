from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, json_body, require_date, require_field, require_int, serialize
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["POST"], endpoint="employee_create")
    @admin_required
    def employee_create():
        data = json_body()
        employee = container.employee_service.create_employee(
            person_id=str(require_field(data, "person_id")),
            employee_id=str(require_field(data, "employee_id")),
            position_id=require_int(data, "position_id"),
            status_id=require_int(data, "status_id"),
            hire_date=require_date(data, "hire_date"),
        )
        return jsonify({"success": True, "employee": serialize(employee)}), 201

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="employee_get")
    @admin_required
    def employee_get(employee_id: str):
        employee = container.employee_service.get_by_employee_id(employee_id)
        return jsonify({"success": True, "employee": serialize(employee)})

    @app.route("/api/employees/<employee_id>", methods=["PATCH"], endpoint="employee_update")
    @admin_required
    def employee_update(employee_id: str):
        data = json_body()
        changes: dict = {}
        if "position_id" in data:
            changes["position_id"] = require_int(data, "position_id")
        if "status_id" in data:
            changes["status_id"] = require_int(data, "status_id")
        if "hire_date" in data:
            changes["hire_date"] = require_date(data, "hire_date")
        if "is_biometric_enabled" in data:
            changes["is_biometric_enabled"] = data["is_biometric_enabled"]
        if "security_image_identifier" in data:
            changes["security_image_identifier"] = data["security_image_identifier"]
        if not changes:
            raise ValidationError("Nothing to update")

        current = container.employee_service.get_by_employee_id(employee_id)
        employee = container.employee_service.update_employee(current.id, **changes)
        return jsonify({"success": True, "employee": serialize(employee)})

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="employee_delete")
    @admin_required
    def employee_delete(employee_id: str):
        current = container.employee_service.get_by_employee_id(employee_id)
        container.employee_service.delete_employee(current.id)
        return jsonify({"success": True})

    @app.route("/api/admin/auth-users/rebuild", methods=["POST"], endpoint="auth_users_rebuild")
    @admin_required
    def auth_users_rebuild():
        report = container.auth_sync.rebuild_all()
        return jsonify({"success": not report.failed, "report": serialize(report)})

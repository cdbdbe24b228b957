from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, require_date, require_field, require_int, serialize
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT


def register(app: Flask, container: Container) -> None:
    def _employee_uuid(employee_id: str) -> str:
        return container.employee_service.get_by_employee_id(employee_id).id

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    def attendance_checkin():
        data = json_body()
        record = container.attendance_service.check_in(
            _employee_uuid(str(require_field(data, "employee_id"))),
            status_id=require_int(data, "status_id"),
        )
        return jsonify({"success": True, "record": serialize(record)}), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    def attendance_checkout():
        data = json_body()
        record = container.attendance_service.check_out(_employee_uuid(str(require_field(data, "employee_id"))))
        return jsonify({"success": True, "record": serialize(record)})

    @app.route("/api/attendance/status", methods=["POST"], endpoint="attendance_status")
    def attendance_status():
        data = json_body()
        record = container.attendance_service.set_status(
            _employee_uuid(str(require_field(data, "employee_id"))),
            attendance_date=require_date(data, "attendance_date"),
            status_id=require_int(data, "status_id"),
        )
        return jsonify({"success": True, "record": serialize(record)})

    @app.route("/api/attendance/<employee_id>", methods=["GET"], endpoint="attendance_history")
    def attendance_history(employee_id: str):
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)
        records = container.attendance_service.history(_employee_uuid(employee_id), limit=limit)
        return jsonify({"success": True, "items": serialize(list(records))})

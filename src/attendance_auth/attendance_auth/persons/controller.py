from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, json_body, require_date, require_field, serialize
from ..container import Container
from ..core.exceptions import ValidationError

_UPDATABLE = ("full_name", "birth_date", "phone_number", "avatar_url")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/persons", methods=["POST"], endpoint="person_create")
    @admin_required
    def person_create():
        data = json_body()
        person = container.person_service.create_person(
            full_name=require_field(data, "full_name"),
            birth_date=require_date(data, "birth_date"),
            phone_number=data.get("phone_number"),
            avatar_url=data.get("avatar_url"),
        )
        return jsonify({"success": True, "person": serialize(person)}), 201

    @app.route("/api/persons/<person_id>", methods=["GET"], endpoint="person_get")
    @admin_required
    def person_get(person_id: str):
        return jsonify({"success": True, "person": serialize(container.person_service.get_person(person_id))})

    @app.route("/api/persons/<person_id>", methods=["PATCH"], endpoint="person_update")
    @admin_required
    def person_update(person_id: str):
        data = json_body()
        changes = {k: data[k] for k in _UPDATABLE if k in data}
        if not changes:
            raise ValidationError("Nothing to update")
        if "birth_date" in changes:
            changes["birth_date"] = require_date(data, "birth_date")
        person = container.person_service.update_person(person_id, **changes)
        return jsonify({"success": True, "person": serialize(person)})

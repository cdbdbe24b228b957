from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import NotFound

from ..common.http import admin_required, json_body, require_field, serialize
from ..container import Container
from ..core.enums import CatalogKind


def _kind(value: str) -> CatalogKind:
    try:
        return CatalogKind(value)
    except ValueError:
        raise NotFound(f"Unknown catalog: {value}") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/catalogs/<kind>", methods=["GET"], endpoint="catalog_list")
    def catalog_list(kind: str):
        entries = container.catalog_service.list_all(_kind(kind))
        return jsonify({"success": True, "items": serialize(list(entries))})

    @app.route("/api/catalogs/<kind>", methods=["POST"], endpoint="catalog_add")
    @admin_required
    def catalog_add(kind: str):
        data = json_body()
        entry = container.catalog_service.add(_kind(kind), str(require_field(data, "name")))
        return jsonify({"success": True, "item": serialize(entry)}), 201

    @app.route("/api/catalogs/<kind>/<int:entry_id>", methods=["PATCH"], endpoint="catalog_rename")
    @admin_required
    def catalog_rename(kind: str, entry_id: int):
        data = json_body()
        entry = container.catalog_service.rename(_kind(kind), entry_id, str(require_field(data, "name")))
        return jsonify({"success": True, "item": serialize(entry)})

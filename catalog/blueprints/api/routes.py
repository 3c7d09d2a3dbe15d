# catalog/blueprints/api/routes.py
from __future__ import annotations
from flask import Blueprint, jsonify, request, current_app

from catalog.db import Database
from catalog.errors import CategoryNotFound
from catalog.models.category import NAME_MAX_LENGTH
from catalog.services.category_store import CategoryStore
from catalog.services.path_materializer import PathMaterializer
from catalog.services.path_renderer import render_all, render_one

api_bp = Blueprint("api", __name__)

# obere Grenze für INTEGER-Spalten (SQLite / Postgres BIGINT)
MAX_ID = 2**63 - 1

# -----------------------
# Helpers
# -----------------------
def _store() -> CategoryStore:
    database: Database = current_app.extensions["catalog_db"]
    return CategoryStore(database)

def _serialize(c) -> dict:
    return {"id": c.id, "name": c.name, "parent_id": c.parent_id}

# -----------------------
# Kategorien (lesen)
# -----------------------
@api_bp.get("/categories/flat")
def api_categories_flat():
    """Flache Liste für Dropdowns: [{category_id, name}] – name ist der volle Pfad."""
    rows = _store().list_all()
    return jsonify([{"category_id": cid, "name": path} for cid, path in render_all(rows)])

@api_bp.get("/categories")
def api_list_categories():
    rows = sorted(_store().list_all(), key=lambda c: c.id)
    return jsonify({"ok": True, "categories": [_serialize(c) for c in rows]})

@api_bp.get("/categories/<int:category_id>/path")
def api_category_path(category_id: int):
    path = render_one(category_id, _store().list_all())
    return jsonify({"ok": True, "category_id": category_id, "path": path})

# -----------------------
# Kategorien (schreiben)
# -----------------------
@api_bp.post("/categories")
def api_create_category():
    data = request.get_json(silent=True) or {}
    name = data.get("name")
    name = name.strip() if isinstance(name, str) else ""
    parent_id = data.get("parent_id")
    if not name:
        return jsonify({"ok": False, "error": "name required"}), 400
    if "|" in name:
        return jsonify({"ok": False, "error": "name must not contain '|'"}), 400
    if len(name) > NAME_MAX_LENGTH:
        return jsonify({"ok": False, "error": f"name longer than {NAME_MAX_LENGTH} characters"}), 400
    if parent_id is not None and (not isinstance(parent_id, int) or isinstance(parent_id, bool)):
        return jsonify({"ok": False, "error": "parent_id must be int or null"}), 400
    if parent_id is not None and not 0 < parent_id <= MAX_ID:
        return jsonify({"ok": False, "error": "parent_id out of range"}), 400

    store = _store()
    if parent_id is not None and store.get(parent_id) is None:
        raise CategoryNotFound(parent_id)
    c = store.create(name, parent_id)
    return jsonify({"ok": True, "category": _serialize(c)}), 201

@api_bp.post("/categories/materialize")
def api_materialize_category():
    data = request.get_json(silent=True) or {}
    raw = data.get("path")
    if not isinstance(raw, str):
        return jsonify({"ok": False, "error": "payload 'path' must be a string"}), 400
    category_id = PathMaterializer(_store()).materialize(raw)
    return jsonify({"ok": True, "category_id": category_id})

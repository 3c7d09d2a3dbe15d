from __future__ import annotations
import logging
from typing import Any, Dict, Optional
from flask import Flask, jsonify

from catalog.config import Config, setup_logging
from catalog.db import Database
from catalog.errors import CategoryNotFound, ConstraintViolation, InvalidPath, StoreUnavailable
from catalog.blueprints import register_blueprints
from catalog.cli import register_cli

logger = logging.getLogger(__name__)


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)

    # Config (.env) -> app.config, danach Overrides (Tests)
    app.config.update(Config.as_dict())
    if overrides:
        app.config.update(overrides)

    setup_logging(app.config["LOG_LEVEL"])

    # DB einmal pro App erzeugen; Services bekommen sie explizit übergeben
    database = Database(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))
    database.init_schema()
    app.extensions["catalog_db"] = database

    register_blueprints(app)
    register_cli(app)

    # Fehler -> JSON
    @app.errorhandler(InvalidPath)
    def invalid_path(e: InvalidPath):
        return jsonify({"ok": False, "error": str(e)}), 400

    @app.errorhandler(CategoryNotFound)
    def category_not_found(e: CategoryNotFound):
        return jsonify({"ok": False, "error": str(e)}), 404

    @app.errorhandler(ConstraintViolation)
    def constraint_violation(e: ConstraintViolation):
        return jsonify({"ok": False, "error": str(e)}), 409

    @app.errorhandler(StoreUnavailable)
    def store_unavailable(e: StoreUnavailable):
        logger.error("Datenbank nicht verfügbar", exc_info=e)
        resp = jsonify({"ok": False, "error": "category store unavailable, retry later"})
        resp.status_code = 503
        resp.headers["Retry-After"] = "5"
        return resp

    return app

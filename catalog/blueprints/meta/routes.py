from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

meta_bp = Blueprint("meta", __name__, url_prefix="")

@meta_bp.get("/health")
def health():
    # Schnellcheck inkl. Datenbank-Ping
    database = current_app.extensions["catalog_db"]
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except DBAPIError:
        current_app.logger.exception("Health-Check: Datenbank nicht erreichbar")
        return jsonify({"status": "degraded", "database": "unavailable"}), 503
    return jsonify({"status": "ok", "database": "ok"}), 200

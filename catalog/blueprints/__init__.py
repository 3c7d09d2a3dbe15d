from flask import Flask

from catalog.blueprints.meta.routes import meta_bp
from catalog.blueprints.api.routes import api_bp


def register_blueprints(app: Flask) -> None:
    app.register_blueprint(meta_bp)                   # /health
    app.register_blueprint(api_bp, url_prefix="/api")

# backend/product_api/__init__.py
import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import AuthSettings, Config
from .extensions import db
from .repository import UnexpectedStoreError


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    # Overrides must land before db.init_app, which builds the engine
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # Loaded once; services receive it explicitly
    app.extensions["auth_settings"] = AuthSettings.from_config(app.config)

    # Initialize extensions
    db.init_app(app)

    # Import models so metadata is complete before create_all
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.products import products_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)

    @app.errorhandler(UnexpectedStoreError)
    def handle_store_error(e):
        app.logger.exception("Unexpected store failure")
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        messages = {404: "Not found", 405: "Method not allowed"}
        return jsonify({"error": messages.get(e.code, e.name)}), e.code

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app

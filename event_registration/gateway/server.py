"""
API gateway: combines the auth and events blueprints under one prefix.
This is the entrypoint for local development.
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from flask import Flask, Response, current_app, jsonify
from flask_cors import CORS

from event_registration.config import Config
from event_registration.database.db_connection import get_db, init_db
from event_registration.gateway.errors import register_error_handlers
from event_registration.auth_service.routes import auth_bp
from event_registration.events_service.routes import events_bp


def create_app(config_overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config_overrides (Mapping, optional): Values applied on top of Config
            (tests pass TESTING and DB_CONNECT_ON_STARTUP here).

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Basic console logging during API requests
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="[%(levelname)s] %(asctime)s - %(message)s",
    )

    # Cross-origin requests are allowed from any origin
    CORS(app)

    init_db(app)
    register_error_handlers(app)

    prefix = app.config["API_PREFIX"]

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route(f"{prefix}/test", methods=["GET"])
    def test() -> Tuple[Response, int]:
        """
        Simple 'API is up' check. Does not touch the database.
        """
        return jsonify({"message": "API is working correctly"}), 200

    @app.route(f"{prefix}/health", methods=["GET"])
    def health() -> Tuple[Response, int]:
        """
        Health check endpoint: runs a trivial query on a pooled connection.
        """
        try:
            with get_db() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1;")
        except Exception as e:
            logging.error(f"Health check failed: {e}")
            body = {"status": "unavailable"}
            if current_app.config.get("EXPOSE_ERROR_DETAILS"):
                body["error"] = str(e)
            return jsonify(body), 503
        return jsonify({"status": "ok"}), 200

    # --- REGISTER BLUEPRINTS ---
    app.register_blueprint(auth_bp, url_prefix=prefix)
    app.register_blueprint(events_bp, url_prefix=prefix)
    logging.info(f"Blueprints registered under {prefix}.")

    return app


if __name__ == "__main__":
    app = create_app()
    port = app.config["PORT"]
    logging.info(f"Server running on port {port}")
    app.run(host="0.0.0.0", port=port, debug=app.config["APP_ENV"] == "development")

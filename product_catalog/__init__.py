import logging
import os
from flask import Flask, jsonify
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

load_dotenv()


def create_app(config_name=None, storage=None):
    flask_app = Flask(__name__)

    from product_catalog.json_provider import DecimalJSONProvider

    flask_app.json = DecimalJSONProvider(flask_app)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV")
        if not config_name:
            # Default to production on managed platforms to avoid accidental
            # debug mode/weak defaults when env selection is omitted.
            if os.environ.get("PORT"):
                config_name = "production"
            else:
                config_name = "development"

    from product_catalog.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)
    flask_app.logger.setLevel(
        getattr(logging, str(flask_app.config["LOG_LEVEL"]).upper(), logging.INFO)
    )

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Product store and its object storage client
    from product_catalog.extensions import init_catalog

    init_catalog(flask_app, storage=storage)

    # Register blueprints
    from product_catalog.blueprints.api import api_bp

    flask_app.register_blueprint(api_bp, url_prefix="/api/products")

    # Register CLI commands
    from product_catalog.cli import register_cli

    register_cli(flask_app)

    @flask_app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify(error=e.description), e.code

    @flask_app.errorhandler(Exception)
    def unhandled_error(e):
        flask_app.logger.exception("Unhandled error")
        return jsonify(error="Internal server error"), 500

    # Health check
    @flask_app.route("/health")
    def health():
        from product_catalog.extensions import get_storage

        checks = {"status": "ok"}
        try:
            get_storage().check()
            checks["storage"] = "ok"
        except Exception:
            flask_app.logger.exception("Health check storage probe failed")
            checks["storage"] = "error"
            checks["status"] = "degraded"
        status_code = 200 if checks["status"] == "ok" else 503
        return checks, status_code

    return flask_app

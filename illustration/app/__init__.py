"""Application factory and app-wide configuration."""

from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from illustration.app.api.routes import api_bp
from illustration.core.mortality import DEFAULT_TABLE_PATH

DEFAULT_CONFIG = {
    "CORS_ORIGINS": ["http://localhost:5173"],
    "MORTALITY_TABLE_PATH": str(DEFAULT_TABLE_PATH),
}


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance.

    Settings resolve in order: defaults, ``ILLUSTRATION_*`` environment
    variables, then the explicit ``config`` mapping.
    """
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env("ILLUSTRATION")
    if config:
        app.config.update(config)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app

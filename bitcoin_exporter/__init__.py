"""Application factory for the bitcoin exchange-rate exporter."""

from __future__ import annotations

from flask import Flask
from flask_smorest import Api

from config import get_config, normalize_provider
from .cli import register_cli
from .logging import init_request_logging, setup_logging


def create_app(config_name: str | None = None, **overrides) -> Flask:
    """Application factory adhering to the Flask app factory pattern.

    Keyword overrides are applied to the config before any extension is
    initialised, e.g. ``create_app("development", TICKER_PROVIDER="mock")``.
    """

    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.config.update(overrides)
    app.config["TICKER_PROVIDER"] = normalize_provider(app.config.get("TICKER_PROVIDER"))

    setup_logging(app)
    init_request_logging(app)

    _configure_api(app)
    api = _register_extensions(app)
    _register_blueprints(app, api)

    register_cli(app)
    return app


def _configure_api(app: Flask) -> None:
    app.config.setdefault("API_TITLE", "Bitcoin Exporter API")
    app.config.setdefault("API_VERSION", "v1")
    app.config.setdefault("OPENAPI_VERSION", "3.0.3")
    app.config.setdefault("OPENAPI_URL_PREFIX", "/docs")
    app.config.setdefault("OPENAPI_SWAGGER_UI_PATH", "/")
    app.config.setdefault(
        "OPENAPI_SWAGGER_UI_URL",
        "https://cdn.jsdelivr.net/npm/swagger-ui-dist/",
    )


def _register_extensions(app: Flask) -> Api:
    from .services import init_collector

    init_collector(app)

    api = Api(app)
    app.extensions["smorest_api"] = api
    return api


def _register_blueprints(app: Flask, api: Api) -> None:
    """Register Flask blueprints."""

    from .health import blp as health_blp
    from .metrics import bp as metrics_bp

    api.register_blueprint(health_blp, url_prefix="/health")
    app.register_blueprint(metrics_bp, url_prefix="/metrics")

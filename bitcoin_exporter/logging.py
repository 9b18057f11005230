"""Logging helpers and structured JSON formatter for the bitcoin exporter."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"

LOGGING_CONFIG_FLAG = "_logging_configured"
REQUEST_LOGGING_CONFIG_FLAG = "_request_logging_configured"

# LogRecord attributes that are never copied into the JSON payload.
RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JSONLogFormatter(logging.Formatter):
    """Render log records as single-line JSON documents, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info

        for key, value in record.__dict__.items():
            if key in RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value

        return json.dumps(_json_safe(payload), separators=(",", ":"))


def setup_logging(app: Flask) -> None:
    """Install a single stream handler on the root logger using the app's log settings."""

    if app.config.get(LOGGING_CONFIG_FLAG):
        return

    level = _resolve_level(app.config.get("LOG_LEVEL", "INFO"))
    handler = logging.StreamHandler()
    handler.setLevel(level)
    if _to_bool(app.config.get("LOG_JSON_ENABLED", False)):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                app.config.get("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
            )
        )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # werkzeug and the Flask app logger propagate to the root handler
    werkzeug_logger = logging.getLogger("werkzeug")
    werkzeug_logger.handlers = []
    werkzeug_logger.setLevel(level)
    app.logger.handlers = []
    app.logger.setLevel(level)
    app.logger.propagate = True

    app.config[LOGGING_CONFIG_FLAG] = True


def init_request_logging(app: Flask) -> None:
    """Tag every request with a correlation ID and log its outcome."""

    if app.config.get(REQUEST_LOGGING_CONFIG_FLAG):
        return

    @app.before_request
    def _start_request():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        app.logger.info(
            "Request handled",
            extra=_request_log_extra(event="request.completed", status=response.status_code),
        )
        g.request_logged = True
        return response

    @app.teardown_request
    def _log_failure(exc: BaseException | None):
        if exc is None or getattr(g, "request_logged", False):
            return
        app.logger.error(
            "Request failed",
            extra=_request_log_extra(
                event="request.failed",
                status=getattr(exc, "code", 500) or 500,
                error=str(exc),
            ),
        )

    app.config[REQUEST_LOGGING_CONFIG_FLAG] = True


def scrape_log_extra(
    *,
    provider: str,
    event: str,
    status: str,
    duration_ms: float | None,
    currencies: int | None = None,
    error_kind: str | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    """Build the structured fields attached to a scrape outcome log line."""

    payload: dict[str, Any] = {
        "event": event,
        "provider": provider,
        "status": status,
        "duration_ms": round(duration_ms, 3) if duration_ms is not None else None,
        "currencies": currencies,
        "request_id": _current_request_id(),
        "stale": status != "success",
        "error_kind": error_kind,
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def _request_log_extra(*, event: str, status: int, error: str | None = None) -> dict[str, Any]:
    start = getattr(g, "request_start", None)
    duration_ms = (time.perf_counter() - start) * 1000 if isinstance(start, float) else None
    payload: dict[str, Any] = {
        "event": event,
        "route": request.url_rule.rule if request.url_rule else request.path,
        "method": request.method,
        "status": status,
        "duration_ms": round(duration_ms, 3) if duration_ms is not None else None,
        "request_id": getattr(g, "request_id", None),
        "client_ip": request.remote_addr,
        "source": "http",
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def _current_request_id() -> str | None:
    if not has_request_context():
        return None
    return getattr(g, "request_id", None)


def _json_safe(value: Any) -> Any:
    if isinstance(value, str | int | float | bool) or value is None:
        return value
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, list | tuple | set):
        return [_json_safe(item) for item in value]
    return str(value)


def _resolve_level(level_name: Any) -> int:
    if isinstance(level_name, int):
        return level_name
    if not level_name:
        return logging.INFO
    level = logging.getLevelName(str(level_name).upper())
    return level if isinstance(level, int) else logging.INFO


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on"}

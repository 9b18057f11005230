"""Application configuration classes."""

from __future__ import annotations

import os

PROVIDER_ALIASES = {"blockchain_info": "blockchain"}

DEFAULT_LISTEN_ADDRESS = ":8080"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _parse_timeout(value: str) -> float | None:
    stripped = value.strip().lower()
    if stripped in {"", "0", "none"}:
        return None
    timeout = float(stripped)
    if timeout < 0:
        raise ValueError(f"REQUEST_TIMEOUT_SECONDS must not be negative, got {value!r}")
    return timeout or None


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "bitcoin-exporter"
    LISTEN_ADDRESS = _get_env("LISTEN_ADDRESS", DEFAULT_LISTEN_ADDRESS)
    TICKER_PROVIDER = _get_env("TICKER_PROVIDER", "blockchain")
    TICKER_API_URL = _get_env("TICKER_API_URL", "https://blockchain.info/ticker")
    REQUEST_TIMEOUT_SECONDS = _parse_timeout(_get_env("REQUEST_TIMEOUT_SECONDS", "10"))
    METRICS_NAMESPACE = _get_env("METRICS_NAMESPACE", "bitcoin")
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    return config_cls


def parse_listen_address(address: str | None) -> tuple[str, int]:
    """Split a ``host:port`` listen address into a bindable pair.

    An empty host (``":8080"``) binds every interface. Bracketed IPv6 hosts
    such as ``"[::1]:9100"`` are accepted.

    Raises:
        ValueError: If the address has no port or the port is out of range.
    """

    raw = (address or DEFAULT_LISTEN_ADDRESS).strip()
    host, sep, port_text = raw.rpartition(":")
    if not sep or not port_text:
        raise ValueError(f"Listen address '{raw}' must be in host:port form")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    try:
        port = int(port_text)
    except ValueError as exc:
        raise ValueError(f"Invalid port in listen address '{raw}'") from exc
    if not 0 <= port <= 65535:
        raise ValueError(f"Port out of range in listen address '{raw}'")

    return (host or "0.0.0.0", port)


def normalize_provider(value: str | None) -> str:
    """Lower-case a provider name and resolve aliases such as ``blockchain_info``."""

    if not value:
        return ""
    normalized = value.strip().lower()
    return PROVIDER_ALIASES.get(normalized, normalized)

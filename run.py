"""Entry point for running the bitcoin exchange-rate exporter."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv
from werkzeug.serving import make_server


def _prepare_environment() -> None:
    """Load environment variables from a local .env file if available."""

    project_root = os.path.abspath(os.path.dirname(__file__))
    env_file = os.path.join(project_root, ".env")
    if os.path.exists(env_file):
        load_dotenv(env_file)


# config reads the environment at import time
_prepare_environment()

from bitcoin_exporter import create_app  # noqa: E402
from config import DEFAULT_LISTEN_ADDRESS, parse_listen_address  # noqa: E402

logger = logging.getLogger("bitcoin_exporter.run")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Expose bitcoin exchange rates as Prometheus metrics.")
    parser.add_argument(
        "--listen-address",
        default=None,
        help=f"The address to listen on for HTTP requests (default: LISTEN_ADDRESS or {DEFAULT_LISTEN_ADDRESS}).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Create the Flask app and serve it until interrupted."""

    args = _parse_args(argv)

    app = create_app(config_name=os.getenv("APP_ENV"))
    address = args.listen_address or app.config.get("LISTEN_ADDRESS", DEFAULT_LISTEN_ADDRESS)

    try:
        host, port = parse_listen_address(address)
        server = make_server(host, port, app, threaded=True)
    except (OSError, ValueError) as exc:
        logger.critical("Cannot listen on %s: %s", address, exc)
        sys.exit(1)

    logger.info("Listening on http://%s:%d/metrics", host, server.server_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    main()

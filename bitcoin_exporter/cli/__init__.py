"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .scrape import scrape


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(scrape)

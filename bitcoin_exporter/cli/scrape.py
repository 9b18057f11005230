"""CLI command for running a single ticker scrape."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext
from prometheus_client import generate_latest


@click.command("scrape")
@click.option(
    "--fail-on-down",
    is_flag=True,
    default=False,
    help="Exit with status 1 when the ticker could not be scraped.",
)
@with_appcontext
def scrape(fail_on_down: bool) -> None:
    """Scrape the ticker once and print the metrics exposition."""

    registry = current_app.extensions["metrics_registry"]
    collector = current_app.extensions["exporter_collector"]

    click.echo(generate_latest(registry).decode("utf-8"), nl=False)

    if fail_on_down and not collector.status().up:
        raise click.exceptions.Exit(1)

"""Route handler for the Prometheus scrape endpoint."""

from __future__ import annotations

from flask import Response, current_app, request
from prometheus_client import CollectorRegistry
from prometheus_client.exposition import choose_encoder

from . import bp


@bp.get("")
def metrics() -> Response:
    """Render every registered collector in the format negotiated by the poller."""

    registry: CollectorRegistry = current_app.extensions["metrics_registry"]
    encoder, content_type = choose_encoder(request.headers.get("Accept", ""))
    return Response(encoder(registry), status=200, headers={"Content-Type": content_type})

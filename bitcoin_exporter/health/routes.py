"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from bitcoin_exporter.schemas import HealthScrapeSchema, HealthStatusSchema
from bitcoin_exporter.services.collector import ExporterCollector
from bitcoin_exporter.utils.datetime import isoformat_or_none

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "bitcoin-exporter"),
        }


@blp.route("/scrape")
class HealthScrape(MethodView):
    @blp.response(200, HealthScrapeSchema())
    def get(self):
        """Report the outcome of the most recent ticker scrape without triggering one."""

        collector: ExporterCollector = current_app.extensions["exporter_collector"]
        status = collector.status()
        provider = getattr(collector.provider, "name", collector.provider.__class__.__name__)

        if not status.initialized:
            return {
                "status": "uninitialized",
                "provider": provider,
                "up": None,
                "total_scrapes": status.total_scrapes,
                "currencies": status.currencies,
                "last_success_at": None,
                "last_failure_at": None,
                "last_error_kind": None,
            }

        return {
            "status": "up" if status.up else "down",
            "provider": provider,
            "up": status.up,
            "total_scrapes": status.total_scrapes,
            "currencies": status.currencies,
            "last_success_at": isoformat_or_none(status.last_success_at),
            "last_failure_at": isoformat_or_none(status.last_failure_at),
            "last_error_kind": status.last_error_kind,
        }

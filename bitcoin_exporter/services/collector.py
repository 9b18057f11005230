"""Prometheus collector exposing the bitcoin exchange-rate ticker.

The collector owns all scrape state: the availability flag, the successful
scrape counter and the per ``(currency, class)`` exchange rates. Every call to
:meth:`ExporterCollector.collect` performs one synchronous fetch under an
exclusive lock and returns a snapshot built before the lock is released, so
concurrent polls are serialized and never observe a half-applied scrape.

Fetch failures never propagate to the caller; they are logged and reported
through the ``up`` gauge while the previous rates stay exposed.

Exposed series, for the default ``bitcoin`` namespace::

    bitcoin_up
    bitcoin_exporter_total_scrapes_total
    bitcoin_exchange_rate{currency="USD",class="ltp|ask|bid"}

The counter family is named ``bitcoin_exporter_total_scrapes``, but
prometheus_client always appends ``_total`` to counter samples, so queries
must use ``bitcoin_exporter_total_scrapes_total``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from time import perf_counter
from typing import Dict, List, Mapping, Optional, Tuple

from prometheus_client import CollectorRegistry
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from bitcoin_exporter.logging import scrape_log_extra
from bitcoin_exporter.providers import BaseTickerProvider, FetchError, PriceRecord
from bitcoin_exporter.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "bitcoin"
LABEL_NAMES = ("currency", "class")

UP_HELP = "Was the last scrape of Blockchain Exchange Rates API successful"
TOTAL_SCRAPES_HELP = "Current total Blockchain Exchange Rates API scrapes"
EXCHANGE_RATE_HELP = "Exchange rate retrieved by Blockchain Exchange Rates API"

RateKey = Tuple[str, str]


@dataclass(frozen=True)
class ScrapeStatus:
    """Point-in-time view of the collector state used for health reporting."""

    up: bool
    total_scrapes: int
    currencies: int
    last_success_at: Optional[datetime]
    last_failure_at: Optional[datetime]
    last_error_kind: Optional[str]

    @property
    def initialized(self) -> bool:
        return self.last_success_at is not None or self.last_failure_at is not None


class ExporterCollector:
    """Fetch-on-collect exporter for a single ticker provider."""

    def __init__(self, provider: BaseTickerProvider, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._provider = provider
        self._namespace = namespace or DEFAULT_NAMESPACE
        self._lock = threading.Lock()

        self._up = 0.0
        self._total_scrapes = 0
        self._rates: Dict[RateKey, float] = {}
        self._last_success_at: Optional[datetime] = None
        self._last_failure_at: Optional[datetime] = None
        self._last_error_kind: Optional[str] = None

    @property
    def provider(self) -> BaseTickerProvider:
        return self._provider

    def describe(self) -> List[Metric]:
        """Return the metric schema without samples; never fetches or locks."""

        return self._families(up=None, total_scrapes=None, rates={})

    def collect(self) -> List[Metric]:
        """Scrape the ticker once and return a consistent snapshot of every metric.

        Blocks for the duration of the fetch. Concurrent callers wait on the
        collector lock and then perform their own scrape.
        """

        with self._lock:
            self._scrape()
            return self._families(
                up=self._up,
                total_scrapes=self._total_scrapes,
                rates=self._rates,
            )

    def status(self) -> ScrapeStatus:
        with self._lock:
            return ScrapeStatus(
                up=self._up == 1.0,
                total_scrapes=self._total_scrapes,
                currencies=len({currency for currency, _ in self._rates}),
                last_success_at=self._last_success_at,
                last_failure_at=self._last_failure_at,
                last_error_kind=self._last_error_kind,
            )

    def _scrape(self) -> None:
        provider_name = getattr(self._provider, "name", self._provider.__class__.__name__)
        start = perf_counter()
        try:
            records = self._provider.fetch()
        except FetchError as exc:
            duration = (perf_counter() - start) * 1000
            self._up = 0.0
            self._last_failure_at = utc_now()
            self._last_error_kind = exc.kind.value
            logger.warning(
                "Ticker scrape failed: %s",
                exc,
                extra=scrape_log_extra(
                    provider=provider_name,
                    event="ticker.scrape",
                    status="error",
                    duration_ms=duration,
                    error_kind=exc.kind.value,
                    error=exc.message,
                ),
            )
            return

        duration = (perf_counter() - start) * 1000
        self._up = 1.0
        self._total_scrapes += 1
        self._last_success_at = utc_now()
        self._last_error_kind = None
        self._apply(records)
        logger.debug(
            "Ticker scrape succeeded",
            extra=scrape_log_extra(
                provider=provider_name,
                event="ticker.scrape",
                status="success",
                duration_ms=duration,
                currencies=len(records),
            ),
        )

    def _apply(self, records: Mapping[str, PriceRecord]) -> None:
        for currency, record in records.items():
            for price_class, value in record.by_class().items():
                self._rates[(currency, price_class)] = value

    def _families(
        self,
        *,
        up: Optional[float],
        total_scrapes: Optional[int],
        rates: Mapping[RateKey, float],
    ) -> List[Metric]:
        up_family = GaugeMetricFamily(self._metric_name("up"), UP_HELP)
        if up is not None:
            up_family.add_metric([], up)

        scrapes_family = CounterMetricFamily(
            self._metric_name("exporter_total_scrapes"), TOTAL_SCRAPES_HELP
        )
        if total_scrapes is not None:
            scrapes_family.add_metric([], total_scrapes)

        rate_family = GaugeMetricFamily(
            self._metric_name("exchange_rate"), EXCHANGE_RATE_HELP, labels=LABEL_NAMES
        )
        for (currency, price_class), value in sorted(rates.items()):
            rate_family.add_metric([currency, price_class], value)

        return [up_family, scrapes_family, rate_family]

    def _metric_name(self, name: str) -> str:
        return f"{self._namespace}_{name}"


def create_collector(
    provider: BaseTickerProvider, namespace: str = DEFAULT_NAMESPACE
) -> ExporterCollector:
    return ExporterCollector(provider=provider, namespace=namespace)


def init_collector(app) -> ExporterCollector:
    """Create the app-owned collector and register it on a dedicated registry."""

    from bitcoin_exporter.providers.registry import init_provider

    provider = init_provider(app)
    collector = create_collector(provider, namespace=app.config.get("METRICS_NAMESPACE"))

    registry = CollectorRegistry(auto_describe=False)
    registry.register(collector)

    app.extensions["exporter_collector"] = collector
    app.extensions["metrics_registry"] = registry
    return collector

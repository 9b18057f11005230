"""Helper factories for building ticker payloads, providers and sample lookups in tests."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from bitcoin_exporter.providers.base import BaseTickerProvider, FetchError
from bitcoin_exporter.providers.schemas import PriceRecord

TICKER_URL = "https://blockchain.info/ticker"


def make_ticker_payload(prices: Mapping[str, tuple[float, float, float]]) -> dict[str, Any]:
    """Build a blockchain.info style payload from ``{currency: (last, buy, sell)}``."""

    return {
        currency: {"15m": last, "last": last, "buy": buy, "sell": sell, "symbol": currency}
        for currency, (last, buy, sell) in prices.items()
    }


def make_records(prices: Mapping[str, tuple[float, float, float]]) -> dict[str, PriceRecord]:
    return {
        currency: PriceRecord(last=last, ask=ask, bid=bid)
        for currency, (last, ask, bid) in prices.items()
    }


class SequencedProvider(BaseTickerProvider):
    """Provider replaying a queue of price maps or FetchErrors, one per fetch."""

    def __init__(
        self,
        results: Iterable[Mapping[str, PriceRecord] | FetchError],
        name: str = "sequenced",
    ) -> None:
        self.results = list(results)
        self.name = name
        self.calls = 0

    def fetch(self) -> dict[str, PriceRecord]:
        self.calls += 1
        if not self.results:
            raise AssertionError("SequencedProvider exhausted")
        result = self.results.pop(0)
        if isinstance(result, FetchError):
            raise result
        return dict(result)


def sample_value(families, name: str, labels: Mapping[str, str] | None = None) -> float | None:
    """Return the value of the sample matching name and labels, if any."""

    wanted = dict(labels or {})
    for family in families:
        for sample in family.samples:
            if sample.name == name and sample.labels == wanted:
                return sample.value
    return None


def rate_samples(families, name: str = "bitcoin_exchange_rate") -> dict[tuple[str, str], float]:
    """Collect exchange-rate samples keyed by (currency, class)."""

    return {
        (sample.labels["currency"], sample.labels["class"]): sample.value
        for family in families
        for sample in family.samples
        if sample.name == name
    }

"""Mock provider implementation for testing and local development."""

from __future__ import annotations

from typing import Dict

from .base import BaseTickerProvider
from .schemas import PriceRecord


class MockTickerProvider(BaseTickerProvider):
    """Deterministic provider returning synthetic ticker data."""

    name = "mock"

    def fetch(self) -> Dict[str, PriceRecord]:
        return {
            "EUR": PriceRecord(last=46210.5, ask=46220.0, bid=46200.0),
            "GBP": PriceRecord(last=39875.25, ask=39880.0, bid=39870.5),
            "USD": PriceRecord(last=50000.1, ask=50010.0, bid=49990.0),
        }

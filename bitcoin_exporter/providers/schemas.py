"""Dataclasses describing normalized ticker payloads."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

# Remote field name for each price class exposed on the exchange-rate gauge.
PRICE_FIELDS: Dict[str, str] = {
    "ltp": "last",
    "ask": "buy",
    "bid": "sell",
}


class PayloadShapeError(ValueError):
    """Raised when a decoded ticker document does not have the expected shape."""


def _normalize_code(code: Any) -> str:
    if not isinstance(code, str):
        raise PayloadShapeError(f"Currency code must be a string: {code!r}")
    normalized = code.strip().upper()
    if not normalized:
        raise PayloadShapeError("Currency code cannot be empty")
    if not normalized.isascii():
        raise PayloadShapeError(f"Currency code must be ASCII: {code!r}")
    return normalized


def _coerce_price(currency: str, field: str, value: Any) -> float:
    # bool is an int subclass but never a valid price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadShapeError(f"Field '{field}' for {currency} must be numeric, got {value!r}")
    try:
        price = float(value)
    except OverflowError as exc:
        raise PayloadShapeError(f"Field '{field}' for {currency} is out of range") from exc
    # NaN and Infinity are not JSON, but the decoder lets them through
    if not math.isfinite(price):
        raise PayloadShapeError(f"Field '{field}' for {currency} must be finite, got {value!r}")
    return price


@dataclass(frozen=True)
class PriceRecord:
    """Last traded, ask and bid prices for a single currency."""

    last: float
    ask: float
    bid: float

    @classmethod
    def from_payload(cls, currency: str, entry: Any) -> PriceRecord:
        if not isinstance(entry, Mapping):
            raise PayloadShapeError(f"Ticker entry for {currency} must be an object")
        values: Dict[str, float] = {}
        for price_class, field in PRICE_FIELDS.items():
            if field not in entry:
                raise PayloadShapeError(f"Ticker entry for {currency} missing '{field}' field")
            values[price_class] = _coerce_price(currency, field, entry[field])
        return cls(last=values["ltp"], ask=values["ask"], bid=values["bid"])

    def by_class(self) -> Dict[str, float]:
        """Return the prices keyed by exchange-rate class label."""

        return {"ltp": self.last, "ask": self.ask, "bid": self.bid}


def parse_ticker(payload: Any) -> Dict[str, PriceRecord]:
    """Decode a ticker document into price records keyed by currency code."""

    if not isinstance(payload, Mapping):
        raise PayloadShapeError("Ticker payload must be a JSON object")

    records: Dict[str, PriceRecord] = {}
    for code, entry in payload.items():
        currency = _normalize_code(code)
        if currency in records:
            raise PayloadShapeError(f"Duplicate currency code {currency} in ticker payload")
        records[currency] = PriceRecord.from_payload(currency, entry)
    return records

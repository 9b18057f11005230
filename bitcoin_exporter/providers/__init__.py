"""Provider interfaces and data structures for ticker sources."""

from .base import BaseTickerProvider, FetchError, FetchErrorKind, ProviderError
from .blockchain_provider import BlockchainTickerProvider
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError, HTTPPayloadError
from .schemas import PayloadShapeError, PriceRecord, parse_ticker

__all__ = [
    "BaseTickerProvider",
    "BlockchainTickerProvider",
    "FetchError",
    "FetchErrorKind",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "HTTPPayloadError",
    "PayloadShapeError",
    "PriceRecord",
    "ProviderError",
    "parse_ticker",
]

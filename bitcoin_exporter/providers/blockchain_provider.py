"""Blockchain.com exchange-rate ticker provider."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from .base import BaseTickerProvider, FetchError, FetchErrorKind
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError, HTTPPayloadError
from .schemas import PayloadShapeError, PriceRecord, parse_ticker

DEFAULT_TICKER_URL = "https://blockchain.info/ticker"


class BlockchainTickerProvider(BaseTickerProvider):
    """Provider that fetches the bitcoin price ticker from blockchain.info."""

    name = "blockchain"

    def __init__(self, client: HTTPClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> BlockchainTickerProvider:
        url_value = config.get("TICKER_API_URL")
        if not isinstance(url_value, str) or not url_value.strip():
            url = DEFAULT_TICKER_URL
        else:
            url = url_value.strip()
        timeout_value = config.get("REQUEST_TIMEOUT_SECONDS")
        timeout = float(timeout_value) if timeout_value else None
        return cls(HTTPClient(HTTPClientConfig(url=url, timeout=timeout)))

    def fetch(self) -> Dict[str, PriceRecord]:
        try:
            payload = self._client.get_json()
        except HTTPClientError as exc:
            raise FetchError(FetchErrorKind.TRANSPORT, f"send HTTP request: {exc}") from exc
        except HTTPPayloadError as exc:
            raise FetchError(FetchErrorKind.DECODE, f"decode HTTP response as JSON: {exc}") from exc

        try:
            return parse_ticker(payload)
        except PayloadShapeError as exc:
            raise FetchError(FetchErrorKind.DECODE, f"decode HTTP response as JSON: {exc}") from exc

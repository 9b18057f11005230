from __future__ import annotations

import pytest
import requests
import responses

from bitcoin_exporter.providers.base import FetchError, FetchErrorKind
from bitcoin_exporter.providers.blockchain_provider import (
    DEFAULT_TICKER_URL,
    BlockchainTickerProvider,
)
from bitcoin_exporter.providers.schemas import PriceRecord
from tests.fixtures import load_json


@pytest.fixture()
def provider():
    return BlockchainTickerProvider.from_config({"TICKER_API_URL": DEFAULT_TICKER_URL})


@responses.activate
def test_fetch_decodes_ticker_fixture(provider):
    responses.add(responses.GET, DEFAULT_TICKER_URL, json=load_json("ticker.json"), status=200)

    records = provider.fetch()

    assert set(records) == {"USD", "EUR", "JPY"}
    assert records["USD"] == PriceRecord(last=50000.1, ask=50010.0, bid=49990.0)
    assert len(responses.calls) == 1
    request = responses.calls[0].request
    assert request.url == DEFAULT_TICKER_URL
    assert request.body is None


@responses.activate
def test_fetch_maps_http_error_to_transport(provider):
    responses.add(responses.GET, DEFAULT_TICKER_URL, status=503)

    with pytest.raises(FetchError) as exc_info:
        provider.fetch()

    assert exc_info.value.kind is FetchErrorKind.TRANSPORT
    assert len(responses.calls) == 1


@responses.activate
def test_fetch_maps_connection_failure_to_transport(provider):
    responses.add(
        responses.GET,
        DEFAULT_TICKER_URL,
        body=requests.exceptions.ConnectionError("Name or service not known"),
    )

    with pytest.raises(FetchError) as exc_info:
        provider.fetch()

    assert exc_info.value.kind is FetchErrorKind.TRANSPORT
    assert "send HTTP request" in str(exc_info.value)


@responses.activate
def test_fetch_maps_timeout_to_transport(provider):
    responses.add(responses.GET, DEFAULT_TICKER_URL, body=requests.exceptions.ReadTimeout("slow"))

    with pytest.raises(FetchError) as exc_info:
        provider.fetch()

    assert exc_info.value.kind is FetchErrorKind.TRANSPORT


@responses.activate
def test_fetch_maps_malformed_json_to_decode(provider):
    responses.add(
        responses.GET,
        DEFAULT_TICKER_URL,
        body="{not json",
        status=200,
        content_type="application/json",
    )

    with pytest.raises(FetchError) as exc_info:
        provider.fetch()

    assert exc_info.value.kind is FetchErrorKind.DECODE
    assert "decode HTTP response as JSON" in str(exc_info.value)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"USD": "50000"},
        {"USD": {"last": 1.0, "buy": 2.0}},
        {"USD": {"last": "1.0", "buy": 2.0, "sell": 3.0}},
        {"USD": {"last": True, "buy": 2.0, "sell": 3.0}},
    ],
)
@responses.activate
def test_fetch_maps_unexpected_shape_to_decode(provider, payload):
    responses.add(responses.GET, DEFAULT_TICKER_URL, json=payload, status=200)

    with pytest.raises(FetchError) as exc_info:
        provider.fetch()

    assert exc_info.value.kind is FetchErrorKind.DECODE


@pytest.mark.parametrize(
    "body",
    [
        '{"USD": {"last": NaN, "buy": 1, "sell": 1}}',
        '{"USD": {"last": 1, "buy": Infinity, "sell": 1}}',
        '{"USD": {"last": 1, "buy": 1, "sell": -Infinity}}',
        '{"USD": {"last": 1e400, "buy": 1, "sell": 1}}',
        '{"USD": {"last": 1' + "0" * 400 + ', "buy": 1, "sell": 1}}',
        '{"usd": {"last": 1, "buy": 1, "sell": 1}, "USD": {"last": 2, "buy": 2, "sell": 2}}',
    ],
)
@responses.activate
def test_fetch_maps_unrepresentable_prices_to_decode(provider, body):
    responses.add(
        responses.GET,
        DEFAULT_TICKER_URL,
        body=body,
        status=200,
        content_type="application/json",
    )

    with pytest.raises(FetchError) as exc_info:
        provider.fetch()

    assert exc_info.value.kind is FetchErrorKind.DECODE


def test_from_config_uses_defaults_for_blank_values():
    provider = BlockchainTickerProvider.from_config(
        {"TICKER_API_URL": "  ", "REQUEST_TIMEOUT_SECONDS": None}
    )

    assert provider._client.url == DEFAULT_TICKER_URL  # type: ignore[attr-defined]
    assert provider._client._config.timeout is None  # type: ignore[attr-defined]


def test_from_config_applies_timeout():
    provider = BlockchainTickerProvider.from_config(
        {"TICKER_API_URL": "https://ticker.example/api", "REQUEST_TIMEOUT_SECONDS": 3}
    )

    assert provider._client.url == "https://ticker.example/api"  # type: ignore[attr-defined]
    assert provider._client._config.timeout == 3.0  # type: ignore[attr-defined]

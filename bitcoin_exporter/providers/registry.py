"""Named ticker provider factories, selected by ``TICKER_PROVIDER``."""

from __future__ import annotations

from typing import Callable, Dict

from flask import Flask

from .base import BaseTickerProvider, ProviderError
from .blockchain_provider import BlockchainTickerProvider
from .mock import MockTickerProvider

# Factories receive the app config so they never depend on an active app context.
ProviderFactory = Callable[[Dict], BaseTickerProvider]

_FACTORIES: Dict[str, ProviderFactory] = {}


def register_provider(name: str, factory: ProviderFactory) -> None:
    """Make ``factory`` selectable as ``TICKER_PROVIDER=<name>``."""

    key = name.strip().lower()
    if not key:
        raise ValueError("Provider name cannot be empty.")
    _FACTORIES[key] = factory


def build_provider(name: str, config: Dict) -> BaseTickerProvider:
    key = name.strip().lower()
    factory = _FACTORIES.get(key)
    if factory is None:
        known = ", ".join(sorted(_FACTORIES)) or "none"
        raise ProviderError(f"Unknown ticker provider '{name}' (known: {known})")
    return factory(config)


def init_provider(app: Flask) -> BaseTickerProvider:
    """Build the configured provider once and keep it on ``app.extensions``."""

    provider = app.extensions.get("ticker_provider")
    if provider is None:
        provider = build_provider(app.config["TICKER_PROVIDER"], app.config)
        app.extensions["ticker_provider"] = provider
    return provider


def reset_registry() -> None:
    """Drop test registrations and restore the built-in providers."""

    _FACTORIES.clear()
    register_provider(BlockchainTickerProvider.name, BlockchainTickerProvider.from_config)
    register_provider(MockTickerProvider.name, lambda config: MockTickerProvider())


reset_registry()

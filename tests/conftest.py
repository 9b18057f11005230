"""Shared pytest fixtures."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from bitcoin_exporter import create_app  # noqa: E402
from bitcoin_exporter.providers.registry import reset_registry  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_providers() -> Iterator[None]:
    reset_registry()
    yield
    reset_registry()


@pytest.fixture()
def app():
    """Flask application wired to the deterministic mock provider."""

    return create_app("development", TICKER_PROVIDER="mock", TESTING=True)


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return the path to bundled JSON fixtures."""

    return ROOT_DIR / "tests" / "fixtures"


@pytest.fixture()
def load_json_fixture(fixtures_dir: Path) -> Callable[[str], dict]:
    """Load a JSON fixture by filename."""

    def _loader(filename: str) -> dict:
        path = fixtures_dir / filename
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    return _loader

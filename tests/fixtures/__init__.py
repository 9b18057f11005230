"""Test fixture helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_FIXTURE_ROOT = Path(__file__).parent


def load_text(name: str) -> str:
    """Return the raw contents of a fixture file."""

    return (_FIXTURE_ROOT / name).read_text(encoding="utf-8")


def load_json(name: str) -> dict[str, Any]:
    """Load a JSON ticker fixture by filename."""

    data = json.loads(load_text(name))
    if not isinstance(data, dict):
        raise ValueError(f"Fixture '{name}' does not contain a JSON object.")
    return data

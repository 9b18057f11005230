"""Shared datetime helpers for UTC timestamps."""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime."""

    return datetime.now(UTC)


def isoformat_or_none(value: datetime | None) -> str | None:
    """Render an optional timestamp as ISO-8601, passing ``None`` through."""

    if value is None:
        return None
    return value.astimezone(UTC).isoformat()

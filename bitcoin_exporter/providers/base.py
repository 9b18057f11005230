"""Abstract interface for ticker providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict

from .schemas import PriceRecord


class ProviderError(Exception):
    """Raised when a ticker provider cannot be resolved or configured."""


class FetchErrorKind(str, Enum):
    TRANSPORT = "transport"
    DECODE = "decode"


class FetchError(Exception):
    """Raised when a single ticker fetch fails."""

    def __init__(self, kind: FetchErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class BaseTickerProvider(ABC):
    """Defines the interface all ticker providers must implement."""

    name: str

    @abstractmethod
    def fetch(self) -> Dict[str, PriceRecord]:
        """Fetch current prices keyed by currency code, raising FetchError on failure."""

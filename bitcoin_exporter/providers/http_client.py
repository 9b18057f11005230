"""Shared HTTP client wrapper issuing a single attempt per request."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response, Session
from requests.exceptions import JSONDecodeError, RequestException

logger = logging.getLogger(__name__)


class HTTPClientError(RuntimeError):
    """Raised when the HTTP request cannot be completed or returns an error status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HTTPPayloadError(ValueError):
    """Raised when a successful response body is not valid JSON."""


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client.

    ``timeout`` of ``None`` leaves the request unbounded, which is the
    ``requests`` default.
    """

    url: str
    timeout: Optional[float] = None


class HTTPClient:
    """Small HTTP client for fetching JSON documents from a fixed URL."""

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._config.url

    def get_json(self) -> Any:
        url = self._config.url
        try:
            with self._session.get(url, timeout=self._config.timeout) as response:
                return self._handle_response(response)
        except RequestException as exc:
            logger.debug("HTTP request to %s failed: %s", url, exc)
            raise HTTPClientError(f"Failed to fetch {url}: {exc}") from exc

    @staticmethod
    def _handle_response(response: Response) -> Any:
        status = response.status_code
        if status >= 500:
            raise HTTPClientError(f"Server error {status}", status_code=status)
        if status >= 400:
            raise HTTPClientError(f"Client error {status}: {response.text}", status_code=status)
        if status < 200 or status >= 300:
            raise HTTPClientError(f"Unexpected status {status}", status_code=status)

        try:
            return response.json()
        except JSONDecodeError as exc:
            raise HTTPPayloadError(f"Invalid JSON response: {exc}") from exc

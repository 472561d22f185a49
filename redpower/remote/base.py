#!/usr/bin/env python3
"""Abstract base class for BMC transports.

Provides interface for issuing single authenticated requests to a management
controller.
"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional


class TransportError(Exception):
    """Raised when a request cannot be completed.

    Covers connection failures, TLS validation failures and timeouts. HTTP
    error statuses are not transport errors.
    """


class TransportResponse(NamedTuple):
    """Raw result of a single request."""

    status_code: int
    body: bytes


class Transport(ABC):
    """Abstract base class for transports.

    Implementations send exactly one request per call, never retry and never
    interpret the response status code.
    """

    @abstractmethod
    def send(
        self, method: str, url: str, body: Optional[Any] = None
    ) -> TransportResponse:
        """Send a request and return the raw response.

        Args:
            method: HTTP method (GET or POST)
            url: Absolute request URL
            body: JSON-serializable request payload (POST only)

        Returns:
            TransportResponse with status code and body bytes

        Raises:
            TransportError: If no response could be obtained
        """

    def get(self, url: str) -> TransportResponse:
        return self.send("GET", url)

    def post(self, url: str, body: Any) -> TransportResponse:
        return self.send("POST", url, body)

    def close(self) -> None:
        """Release any resources held by the transport."""

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

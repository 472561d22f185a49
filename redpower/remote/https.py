#!/usr/bin/env python3
"""HTTPS transport for Redfish requests.

Provides a requests-based transport with HTTP basic authentication, JSON
headers, a whole-exchange timeout and a configurable certificate trust policy.
"""

import json
import logging
import threading
from typing import Any, Dict, List, Optional

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from redpower.config.config import Target
from redpower.remote.base import Transport, TransportError, TransportResponse


logger = logging.getLogger(__name__)

# Constants
CHUNK_SIZE = 8192
JSON_CONTENT_TYPE = "application/json"


class HTTPSTransport(Transport):
    """HTTPS transport for a single BMC.

    Attributes:
        target: BMC connection parameters
        session: Underlying requests session
    """

    def __init__(self, target: Target) -> None:
        """Initialize HTTPS transport.

        Args:
            target: BMC connection parameters
        """
        self.target = target
        self.session = requests.Session()
        self.session.auth = (target.user, target.password)
        self.session.verify = target.verify_tls

        if not target.verify_tls:
            urllib3.disable_warnings(InsecureRequestWarning)
            logger.warning(
                f"TLS certificate verification disabled for {target.host}"
            )

    @property
    def timeout(self) -> float:
        return self.target.timeout

    def send(
        self, method: str, url: str, body: Optional[Any] = None
    ) -> TransportResponse:
        """Send a single request to the BMC.

        The configured timeout bounds the whole exchange as wall-clock time.
        The exchange runs in a worker thread; once the timeout expires the
        caller gets a TransportError and any response already received is
        closed under the worker.

        Args:
            method: HTTP method (GET or POST)
            url: Absolute request URL
            body: JSON-serializable request payload (POST only)

        Returns:
            TransportResponse with status code and raw body

        Raises:
            TransportError: On connection, TLS or timeout failure
        """
        method = method.upper()
        headers = {"Accept": JSON_CONTENT_TYPE}
        data = None
        if method == "POST":
            headers["Content-Type"] = JSON_CONTENT_TYPE
            data = json.dumps(body if body is not None else {})

        logger.debug(f"{method} {url}")

        outcome: Dict[str, Any] = {}
        finished = threading.Event()

        def exchange() -> None:
            try:
                outcome["response"] = self._exchange(method, url, data, headers, outcome)
            except Exception as exc:  # re-raised in the calling thread
                outcome["error"] = exc
            finally:
                finished.set()

        worker = threading.Thread(
            target=exchange, name=f"redpower-{method.lower()}", daemon=True
        )
        worker.start()

        if not finished.wait(self.timeout):
            raw = outcome.get("raw")
            if raw is not None:
                raw.close()
            raise TransportError(f"{method} {url} timed out after {self.timeout}s")

        if "error" in outcome:
            raise outcome["error"]
        return outcome["response"]

    def _exchange(
        self,
        method: str,
        url: str,
        data: Optional[str],
        headers: Dict[str, str],
        outcome: Dict[str, Any],
    ) -> TransportResponse:
        """Perform the request and read the whole body."""
        try:
            response = self.session.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self.timeout,
                stream=True,
            )
        except requests.exceptions.SSLError as exc:
            raise TransportError(f"TLS validation failed for {url}: {exc}") from exc
        except requests.exceptions.Timeout as exc:
            raise TransportError(
                f"{method} {url} timed out after {self.timeout}s"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        outcome["raw"] = response
        try:
            content = self._read_body(response, method, url)
        finally:
            response.close()

        logger.debug(f"{method} {url} -> {response.status_code} ({len(content)} bytes)")
        return TransportResponse(response.status_code, content)

    @staticmethod
    def _read_body(response: requests.Response, method: str, url: str) -> bytes:
        chunks: List[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
        except (requests.exceptions.RequestException, OSError) as exc:
            raise TransportError(f"{method} {url} failed reading response: {exc}") from exc
        return b"".join(chunks)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

"""Shared HTTP helpers for catalog, release and download requests.

Wraps a ``requests`` session so callers get one exception type,
RemoteError, for transport failures, bad status codes and invalid JSON.
Retries are left to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from modctl import __version__
from modctl.core.config import DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

# Some file hosts reject requests without a browser-like agent
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    f"(KHTML, like Gecko) modctl/{__version__}"
)


class RemoteError(Exception):
    """Raised when a remote request fails."""


class HttpClient:
    """Thin wrapper around ``requests.Session``.

    Args:
        timeout: Request timeout in seconds.
        session: Optional pre-built session (used by tests).
    """

    def __init__(
        self,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    @property
    def timeout(self) -> int:
        """Request timeout in seconds."""
        return self._timeout

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        stream: bool = False,
    ) -> requests.Response:
        """Perform a GET request and check the status code.

        Args:
            url: Target URL.
            headers: Extra request headers.
            stream: Whether to stream the response body.

        Returns:
            The successful response.

        Raises:
            RemoteError: On connection errors, timeouts, or non-2xx status.
        """
        logger.debug("GET %s", url)
        try:
            response = self._session.get(
                url, headers=headers, timeout=self._timeout, stream=stream
            )
        except requests.Timeout as e:
            raise RemoteError(f"Request to {url} timed out after {self._timeout}s") from e
        except requests.RequestException as e:
            raise RemoteError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            response.close()
            raise RemoteError(f"Request to {url} failed with status {response.status_code}")

        return response

    def get_json(self, url: str, *, headers: dict[str, str] | None = None) -> Any:
        """Perform a GET request and decode the JSON body.

        Raises:
            RemoteError: If the request fails or the body is not JSON.
        """
        response = self.get(url, headers=headers)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from {url}: {e}") from e

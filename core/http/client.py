"""
HTTP Client

Provides a small HTTP client used to reach external collaborators such as
the ledger leaf-lookup service.
"""

from __future__ import annotations

import json as jsonlib
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """
    Response from an HTTP request.
    """
    status_code: int
    content: bytes
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse response as JSON."""
        return jsonlib.loads(self.content)


class HttpError(Exception):
    """Connection failure or timeout; no response was received."""

    def __init__(self, message: str, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class HttpClient:
    """
    Thin wrapper around a requests session.

    Usage:
        client = HttpClient(timeout=10.0)

        response = client.get("https://ledger.example.com/leaves/4294967295")
        if response.ok:
            data = response.json()
    """

    def __init__(self, *, timeout: float = 30.0) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
        """
        self.timeout = timeout
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Lazy-create the requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
        return self._session

    def request(
        self,
        method: str,
        url: str,
        *,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        Make an HTTP request.

        Returns:
            HttpResponse with status and content; non-2xx statuses are
            returned, not raised

        Raises:
            HttpError: On connection failures and timeouts
        """
        session = self._get_session()
        effective_timeout = timeout or self.timeout

        try:
            response = session.request(
                method=method,
                url=url,
                timeout=effective_timeout,
            )
        except requests.Timeout as e:
            logger.warning(f"{method} {url} timed out after {effective_timeout}s")
            raise HttpError(str(e), timed_out=True) from e
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise HttpError(str(e)) from e

        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )

    def get(self, url: str, *, timeout: Optional[float] = None) -> HttpResponse:
        """Make a GET request."""
        return self.request("GET", url, timeout=timeout)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

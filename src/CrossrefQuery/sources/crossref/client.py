"""Crossref API client."""

from __future__ import annotations

from typing import Any

import requests

from CrossrefQuery.core.request import CrossrefRequest
from CrossrefQuery.utils.log import log

CROSSREF_API_URL = "https://api.crossref.org"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "crossref-query/0.1"


class CrossrefApiError(RuntimeError):
    """The API answered with a non-`ok` envelope."""


class CrossrefApiClient:
    """Low-level HTTP client for the Crossref REST API.

    Issues exactly the URL a `CrossrefRequest` renders to and returns the
    `message` part of the response envelope. Retries, rate limiting and
    caching are left to the caller.
    """

    def __init__(
        self,
        *,
        base_url: str = CROSSREF_API_URL,
        mailto: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            base_url: API root without trailing slash.
            mailto: Contact address added to the User-Agent so requests are
                routed to the "polite" pool.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(_build_headers(mailto))

    def close(self) -> None:
        """Close the underlying HTTP session.
        """
        self._session.close()

    def __enter__(self) -> CrossrefApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def fetch(self, request: CrossrefRequest) -> dict[str, Any]:
        """Fetch one response for a composed request.

        Args:
            request: Composed query.

        Returns:
            The envelope's `message` mapping.

        Raises:
            requests.HTTPError: On HTTP error status.
            CrossrefApiError: If the envelope is malformed or not `ok`.
        """
        url = request.to_url(self.base_url)
        log.debug("Crossref GET %s", url)
        response = self._session.get(url, timeout=self.timeout)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise CrossrefApiError("Crossref response is not a JSON object")
        status = payload.get("status")
        if status != "ok":
            raise CrossrefApiError(f"Crossref response status: {status!r}")
        message = payload.get("message")
        if not isinstance(message, dict):
            raise CrossrefApiError("Crossref response has no message object")
        return message


def _build_headers(mailto: str | None) -> dict[str, str]:
    user_agent = USER_AGENT
    if mailto:
        user_agent = f"{user_agent} (mailto:{mailto})"
    return {
        "User-Agent": user_agent,
        "Accept": "application/json",
    }

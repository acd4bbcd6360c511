"""
HTTP transport.

This module provides the HttpTransport class, a thin wrapper around
`requests` that performs a single bounded-timeout GET.
"""

import logging
from typing import Optional, Protocol, Tuple

import requests

from feedread import config

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can GET a URL and return `(status_code, body)`."""

    def get(self, url: str) -> Tuple[int, bytes]:
        """Fetches `url`; transport failures are raised."""


class HttpTransport:
    """Fetches feed documents over HTTP."""

    def __init__(
        self, timeout: Optional[float] = None, user_agent: Optional[str] = None
    ):
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.user_agent = user_agent or config.USER_AGENT

    def get(self, url: str) -> Tuple[int, bytes]:
        """
        Issues one GET request.

        The status code is returned rather than checked so that callers can
        report it. `requests.RequestException` propagates unchanged.
        """
        logger.debug("GET %s (timeout %ss)", url, self.timeout)
        resp = requests.get(
            url, timeout=self.timeout, headers={"User-Agent": self.user_agent}
        )
        return resp.status_code, resp.content

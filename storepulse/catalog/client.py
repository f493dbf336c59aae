"""
Storefront Catalog Client

Thin HTTP client for the public storefront JSON endpoints.
One client per analysis call; it owns its own connection pool.
The request counter is safe to bump from several threads, but a
requests.Session is not guaranteed to be, so concurrent fetches
normally get a client each.
"""

import logging
import threading
from typing import Any, Dict, Optional

import requests

from ..common.config_loader import FetchSettings

logger = logging.getLogger(__name__)


class StorefrontClient:
    """
    HTTP client for public /products.json and /collections.json endpoints.

    Handles:
    - Identifying User-Agent and JSON Accept headers
    - Per-request timeout
    - Connection reuse within one analysis

    Status handling (404, 429, retries) is left to the callers, which
    each have their own policy.

    Usage:
        with StorefrontClient(settings) as client:
            response = client.get("store.example.com", "products.json",
                                  params={"limit": 250, "page": 1})
    """

    def __init__(self, settings: Optional[FetchSettings] = None):
        """
        Initialize the client.

        Args:
            settings: Fetch settings (timeout, user agent). Defaults are used if None.
        """
        self.settings = settings or FetchSettings()

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        })

        self.requests_made = 0
        self._count_lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    @staticmethod
    def build_url(hostname: str, endpoint: str) -> str:
        return f"https://{hostname}/{endpoint}"

    def get(
        self,
        hostname: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """
        GET a storefront endpoint.

        Args:
            hostname: Canonical store hostname
            endpoint: Endpoint path (e.g., "products.json")
            params: Query parameters
            timeout: Request timeout in seconds (default: settings.timeout)

        Returns:
            The response, whatever its status code

        Raises:
            requests.exceptions.RequestException: On network-level failure
        """
        url = self.build_url(hostname, endpoint)
        with self._count_lock:
            self.requests_made += 1
        logger.debug("GET %s params=%s", url, params)
        response = self.session.get(
            url,
            params=params,
            timeout=timeout if timeout is not None else self.settings.timeout,
        )
        logger.debug("HTTP %d from %s", response.status_code, url)
        return response

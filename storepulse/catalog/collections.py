"""
Collection Fetcher

Best-effort read of a store's /collections.json. Collections only enrich
the report, so every failure here degrades to an empty list.
"""

import logging
from typing import List, Optional

import requests

from ..common.config_loader import FetchSettings
from ..common.constants import COLLECTIONS_ENDPOINT
from ..models import Collection
from .client import StorefrontClient

logger = logging.getLogger(__name__)


def fetch_collections(
    hostname: str,
    client: Optional[StorefrontClient] = None,
    settings: Optional[FetchSettings] = None,
) -> List[Collection]:
    """
    Fetch a store's collections.

    Args:
        hostname: Canonical store hostname
        client: Client to use; a private one is opened and closed if None
        settings: Fetch settings (default: client settings)

    Returns:
        List of Collection; empty on any failure
    """
    if client is None:
        with StorefrontClient(settings) as own_client:
            return fetch_collections(hostname, own_client, settings)

    settings = settings or client.settings

    try:
        response = client.get(hostname, COLLECTIONS_ENDPOINT,
                              timeout=settings.collections_timeout)
    except requests.exceptions.RequestException as e:
        logger.warning("Collections request failed for %s: %s", hostname, e)
        return []

    if not 200 <= response.status_code < 300:
        logger.warning("Collections unavailable for %s (HTTP %d)",
                       hostname, response.status_code)
        return []

    try:
        data = response.json()
    except ValueError:
        logger.warning("Malformed collections response from %s", hostname)
        return []

    raw = data.get("collections") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        logger.warning("Malformed collections response from %s", hostname)
        return []

    collections = [Collection.from_json(c) for c in raw if isinstance(c, dict)]
    logger.info("Fetched %d collections", len(collections))
    return collections

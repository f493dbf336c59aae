"""
Catalog Fetcher

Pages through a store's public /products.json endpoint.

The fetch degrades instead of failing whenever it can: rate limiting past
the retry ceiling, non-2xx responses and network errors all return the
products collected so far, flagged as partial. Only a 404 (no catalog at
this hostname) is terminal regardless of progress.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, List, Optional

import requests

from ..common.config_loader import FetchSettings
from ..common.constants import PRODUCTS_ENDPOINT
from ..models import (
    AnalysisError,
    CatalogFetchResult,
    ErrorKind,
    FetchState,
    FetchStatus,
)
from .client import StorefrontClient
from .identifier import suggest_alternate_hostname

logger = logging.getLogger(__name__)

# Page-delay grows by one step every this many pages
DELAY_STEP_PAGES = 5


class CatalogFetcher:
    """
    Paginated catalog fetch for a single store.

    State transitions:
        FETCHING -> BACKING_OFF -> FETCHING      (HTTP 429 within ceiling)
        FETCHING -> BACKING_OFF -> PARTIAL_DONE  (ceiling exceeded)
        FETCHING -> PARTIAL_DONE                 (error/cancel after some pages)
        FETCHING -> FAILED                       (404, or error before any data)
        FETCHING -> DONE                         (catalog exhausted or cap reached)

    Usage:
        with StorefrontClient(settings) as client:
            fetcher = CatalogFetcher("store.example.com", client, settings)
            result = fetcher.fetch(max_products=1000)
    """

    def __init__(
        self,
        hostname: str,
        client: StorefrontClient,
        settings: Optional[FetchSettings] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.hostname = hostname
        self.client = client
        self.settings = settings or client.settings
        self.cancel_event = cancel_event
        self.state = FetchState.FETCHING

        self.products: List[Dict[str, Any]] = []
        self.pages_fetched = 0

    def _transition(self, state: FetchState) -> None:
        if state != self.state:
            logger.debug("%s: %s -> %s", self.hostname, self.state.value, state.value)
        self.state = state

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def page_delay(self, page: int) -> float:
        """Delay before requesting ``page``, growing mildly with page number."""
        steps = page // DELAY_STEP_PAGES
        return self.settings.page_delay + steps * self.settings.page_delay_step

    # ── Terminal results ──────────────────────────────────────────────────

    def _result(self, status: FetchStatus, error: Optional[AnalysisError] = None,
                **extra) -> CatalogFetchResult:
        return CatalogFetchResult(
            products=self.products,
            status=status,
            error=error,
            pages_fetched=self.pages_fetched,
            total_available=len(self.products),
            **extra,
        )

    def _abort(self, error: AnalysisError, **extra) -> CatalogFetchResult:
        """Stop paging; keep what was fetched."""
        if self.products:
            self._transition(FetchState.PARTIAL_DONE)
            logger.warning("%s (keeping %d products)", error.message, len(self.products))
            return self._result(FetchStatus.PARTIAL, error, **extra)

        self._transition(FetchState.FAILED)
        logger.error("%s", error.message)
        return self._result(FetchStatus.FAILURE, error, **extra)

    def _cancel(self, page: int) -> CatalogFetchResult:
        logger.info("Fetch of %s cancelled before page %d", self.hostname, page)
        self._transition(FetchState.PARTIAL_DONE)
        error = AnalysisError(
            ErrorKind.FETCH_FAILED,
            f"Catalog fetch cancelled after {self.pages_fetched} pages.",
        )
        return self._result(FetchStatus.PARTIAL, error, cancelled=True)

    def _not_found(self) -> CatalogFetchResult:
        self._transition(FetchState.FAILED)
        alternate = suggest_alternate_hostname(self.hostname)
        hint = f"Try: {alternate}" if alternate else None
        if alternate:
            message = (f"Store not found at {self.hostname}. This may not be a "
                       f"storefront with a public catalog, or the URL might be incorrect.")
        else:
            message = f"Store not found: {self.hostname}"
        logger.error("%s", message)
        error = AnalysisError(ErrorKind.STORE_NOT_FOUND, message, hint=hint, status_code=404)
        return self._result(FetchStatus.FAILURE, error)

    def _rate_limited(self, attempts: int) -> CatalogFetchResult:
        self._transition(FetchState.PARTIAL_DONE)
        message = (f"Rate limited {attempts} times in a row; "
                   f"stopping with {len(self.products)} products.")
        logger.warning("%s", message)
        error = AnalysisError(
            ErrorKind.RATE_LIMITED,
            message,
            hint="Retry later for a complete catalog.",
            status_code=429,
        )
        return self._result(FetchStatus.PARTIAL, error)

    # ── Main loop ─────────────────────────────────────────────────────────

    def fetch(self, max_products: Optional[int] = None) -> CatalogFetchResult:
        """
        Fetch catalog pages until exhausted, capped, or stopped by an error.

        Args:
            max_products: Stop once this many products are collected (None/0 = all)

        Returns:
            CatalogFetchResult (never raises for HTTP or network errors)
        """
        page_size = self.settings.page_size
        page = 1
        consecutive_429s = 0
        self._transition(FetchState.FETCHING)

        while True:
            if max_products and len(self.products) >= max_products:
                break
            if self._cancelled():
                return self._cancel(page)

            try:
                response = self.client.get(
                    self.hostname,
                    PRODUCTS_ENDPOINT,
                    params={"limit": page_size, "page": page},
                )
            except requests.exceptions.Timeout:
                return self._abort(AnalysisError(
                    ErrorKind.FETCH_FAILED,
                    f"Request timeout on page {page} of {self.hostname}.",
                ))
            except requests.exceptions.RequestException as e:
                return self._abort(AnalysisError(
                    ErrorKind.FETCH_FAILED,
                    f"Request failed on page {page} of {self.hostname}: {e}",
                ))

            status = response.status_code

            if status == 404:
                return self._not_found()

            if status == 429:
                consecutive_429s += 1
                if consecutive_429s > self.settings.max_retries:
                    return self._rate_limited(consecutive_429s)

                wait = 2 ** consecutive_429s
                self._transition(FetchState.BACKING_OFF)
                logger.warning("HTTP 429 on page %d, retry %d/%d in %ds...",
                               page, consecutive_429s, self.settings.max_retries, wait)
                time.sleep(wait)
                if self._cancelled():
                    return self._cancel(page)
                self._transition(FetchState.FETCHING)
                continue

            if not 200 <= status < 300:
                return self._abort(AnalysisError(
                    ErrorKind.FETCH_FAILED,
                    f"HTTP {status} on page {page} of {self.hostname}.",
                    status_code=status,
                ))

            consecutive_429s = 0

            try:
                data = response.json()
            except ValueError:
                data = None
            batch = (data.get("products") or []) if isinstance(data, dict) else None
            if not isinstance(batch, list):
                return self._abort(AnalysisError(
                    ErrorKind.FETCH_FAILED,
                    f"Malformed catalog response on page {page} of {self.hostname}.",
                    status_code=status,
                ))

            if not batch:
                break

            self.products.extend(batch)
            self.pages_fetched += 1
            logger.info("Fetched page %d: %d products (total: %d)",
                        page, len(batch), len(self.products))

            if len(batch) < page_size:
                break
            if max_products and len(self.products) >= max_products:
                break

            page += 1
            time.sleep(self.page_delay(page))

        return self._finish(max_products)

    def _finish(self, max_products: Optional[int]) -> CatalogFetchResult:
        self._transition(FetchState.DONE)
        total = len(self.products)

        if max_products and total > max_products:
            self.products = self.products[:max_products]
            logger.info("Analysis limited to %d products (fetched: %d)", max_products, total)
            return CatalogFetchResult(
                products=self.products,
                status=FetchStatus.SUCCESS,
                pages_fetched=self.pages_fetched,
                truncated=True,
                total_available=total,
                not_fetched=total - max_products,
            )

        return self._result(FetchStatus.SUCCESS)


def fetch_all_products(
    hostname: str,
    max_products: Optional[int] = None,
    client: Optional[StorefrontClient] = None,
    settings: Optional[FetchSettings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> CatalogFetchResult:
    """
    Fetch every product page for a store.

    Args:
        hostname: Canonical store hostname
        max_products: Product cap (None/0 = no cap)
        client: Client to use; a private one is opened and closed if None
        settings: Fetch settings (default: client settings)
        cancel_event: Checked between requests; set it to stop early

    Returns:
        CatalogFetchResult
    """
    if client is None:
        with StorefrontClient(settings) as own_client:
            return CatalogFetcher(hostname, own_client, settings, cancel_event).fetch(max_products)
    return CatalogFetcher(hostname, client, settings, cancel_event).fetch(max_products)

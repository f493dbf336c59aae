"""
Store Analyzer

Runs one analysis end to end: identifier -> catalog + collections ->
normalized records -> statistics -> classification -> AnalysisResult.

Each call builds its own clients and accumulators; nothing is shared
between calls.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from contextlib import ExitStack
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..catalog import (
    StorefrontClient,
    fetch_all_products,
    fetch_collections,
    normalize_store_identifier,
)
from ..common.config_loader import (
    ClassificationThresholds,
    FetchSettings,
    load_fetch_settings,
    load_thresholds,
)
from ..common.constants import CURRENCY_SYMBOL
from ..models import (
    AnalysisResult,
    CatalogFetchResult,
    Collection,
    FetchStatus,
    PriceStatistics,
)
from .classification import (
    Classification,
    classify,
    format_amount,
    humanize_label,
    round_half_up,
)
from .normalizer import normalize_products
from .statistics import compute_statistics

logger = logging.getLogger(__name__)


def _fetch_catalog(
    hostname: str,
    max_products: Optional[int],
    client: Optional[StorefrontClient],
    settings: FetchSettings,
    cancel_event: Optional[threading.Event],
) -> Tuple[CatalogFetchResult, List[Collection]]:
    """Fetch products and collections concurrently."""
    with ExitStack() as stack:
        if client is None:
            catalog_client = stack.enter_context(StorefrontClient(settings))
            collections_client = stack.enter_context(StorefrontClient(settings))
        else:
            catalog_client = collections_client = client

        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="storepulse-fetch")
        try:
            catalog_future = executor.submit(
                fetch_all_products, hostname, max_products, catalog_client, settings, cancel_event,
            )
            collections_future = executor.submit(
                fetch_collections, hostname, collections_client, settings,
            )

            fetch_result = catalog_future.result()
            try:
                collections = collections_future.result(timeout=settings.collections_timeout)
            except FutureTimeoutError:
                logger.warning("Collections fetch for %s did not finish; continuing without", hostname)
                collections = []
        finally:
            executor.shutdown(wait=False)

    return fetch_result, collections


def _usable_products(fetch_result: CatalogFetchResult) -> List[Dict[str, Any]]:
    """Return products worth analyzing, or raise the fetch error."""
    if fetch_result.status == FetchStatus.FAILURE:
        raise fetch_result.error
    if fetch_result.is_partial and not fetch_result.products:
        raise fetch_result.error
    return fetch_result.products


def _data_quality_warnings(fetch_result: CatalogFetchResult, max_products: Optional[int]) -> List[str]:
    warnings = []
    if fetch_result.is_partial:
        warnings.append(
            f"Analysis based on incomplete catalog ({len(fetch_result.products)} products): "
            f"{fetch_result.message}"
        )
    if fetch_result.truncated:
        warnings.append(
            f"Analysis limited to {max_products} products "
            f"({fetch_result.not_fetched} more were available but not analyzed)"
        )
    return warnings


def build_report(stats: PriceStatistics, labels: Classification,
                 collections_count: int) -> Dict[str, Dict[str, Any]]:
    """
    Assemble the overview, pricing and product blocks.

    Returns:
        Dict with "overview", "pricing_strategy" and "product_strategy" keys
    """
    overview = {
        "total_products": stats.product_count,
        "total_variants": stats.variant_count,
        "total_collections": collections_count,
        "products_on_sale": stats.products_on_sale,
        "sale_percentage": round_half_up(stats.sale_percentage, 1),
        "product_range": (f"{CURRENCY_SYMBOL}{format_amount(stats.min)} - "
                          f"{CURRENCY_SYMBOL}{format_amount(stats.max)}"),
        "brand_positioning": labels.pricing_strategy.capitalize(),
        "catalog_strategy": humanize_label(labels.catalog_strategy),
        "pricing_consistency": humanize_label(labels.pricing_consistency),
        "promotional_strategy": humanize_label(labels.promotional_strategy),
    }

    pricing_strategy = {
        "strategy_type": labels.pricing_strategy,
        "average_price": round_half_up(stats.mean, 2),
        "median_price": round_half_up(stats.median, 2),
        "min_price": round_half_up(stats.min, 2),
        "max_price": round_half_up(stats.max, 2),
        "std_deviation": round_half_up(stats.std_dev, 2),
        "price_distribution": labels.price_distribution,
        "insights": labels.pricing_insights,
    }

    product_strategy = {
        "variant_strategy": labels.variant_strategy,
        "average_variants_per_product": round_half_up(labels.average_variants, 1),
        "total_collections": collections_count,
        "insights": labels.product_insights,
    }

    return {
        "overview": overview,
        "pricing_strategy": pricing_strategy,
        "product_strategy": product_strategy,
    }


def analyze(
    store_identifier: str,
    max_products: Optional[int] = None,
    *,
    client: Optional[StorefrontClient] = None,
    settings: Optional[FetchSettings] = None,
    thresholds: Optional[ClassificationThresholds] = None,
    cancel_event: Optional[threading.Event] = None,
    now: Optional[datetime] = None,
) -> AnalysisResult:
    """
    Analyze a store's public catalog.

    Args:
        store_identifier: Store URL or domain in any common format
        max_products: Product cap (default: settings.max_products; 0 = no cap)
        client: Client for all requests (default: one private client per fetch).
            Products and collections are fetched on separate threads, so an
            injected client is called from both at once and must tolerate it.
        settings: Fetch settings (default: client settings or config/analysis.yaml)
        thresholds: Classification thresholds (default: config/analysis.yaml)
        cancel_event: Set from another thread to stop paging early
        now: Analysis timestamp (default: current UTC time)

    Returns:
        AnalysisResult

    Raises:
        AnalysisError: INVALID_IDENTIFIER, STORE_NOT_FOUND, RATE_LIMITED or
            FETCH_FAILED when no products could be fetched, NO_VALID_DATA
            when the catalog has no usable prices
    """
    hostname = normalize_store_identifier(store_identifier)

    if settings is None:
        settings = client.settings if client is not None else load_fetch_settings()
    if thresholds is None:
        thresholds = load_thresholds()
    if max_products is None:
        max_products = settings.max_products

    logger.info("Starting analysis of %s (max products: %s)", hostname, max_products or "all")

    fetch_result, collections = _fetch_catalog(hostname, max_products, client, settings, cancel_event)
    raw_products = _usable_products(fetch_result)
    warnings = _data_quality_warnings(fetch_result, max_products)
    for warning in warnings:
        logger.warning("%s", warning)

    logger.info("Fetched %d products and %d collections", len(raw_products), len(collections))

    products = normalize_products(raw_products, hostname)
    stats = compute_statistics(products)
    labels = classify(stats, len(collections), thresholds)
    report = build_report(stats, labels, len(collections))

    logger.info("Analysis of %s complete: %s pricing, %s catalog",
                hostname, labels.pricing_strategy, labels.catalog_strategy)

    return AnalysisResult(
        store=hostname,
        analyzed_at=now or datetime.now(timezone.utc),
        overview=report["overview"],
        pricing_strategy=report["pricing_strategy"],
        product_strategy=report["product_strategy"],
        partial=fetch_result.is_partial,
        truncated=fetch_result.truncated,
        warnings=tuple(warnings),
    )

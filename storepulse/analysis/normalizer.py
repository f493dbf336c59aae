"""
Record Normalizer

Converts raw catalog records into NormalizedProduct with every price in INR.
Variants whose price cannot be parsed are dropped; the rest of the product
is kept.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from ..common.constants import (
    FOREIGN_CURRENCY,
    REFERENCE_CURRENCY,
    REFERENCE_CURRENCY_MARKER,
    REFERENCE_PRICE_FLOOR,
    USD_TO_INR,
)
from ..models import NormalizedProduct, NormalizedVariant, RawProduct, RawVariant

logger = logging.getLogger(__name__)


def parse_price(value: Any) -> Optional[float]:
    """
    Parse a price field into a float.

    Missing prices count as 0. Returns None for anything that isn't a
    finite, non-negative number.
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return price


def is_reference_currency(price: float, hostname: str) -> bool:
    """
    Decide whether a raw price is already in INR.

    Heuristic: prices above 100, or any price on a hostname containing
    ".in", are taken as INR. Everything else is assumed to be USD.
    """
    return price > REFERENCE_PRICE_FLOOR or REFERENCE_CURRENCY_MARKER in hostname


def normalize_variant(variant: RawVariant, hostname: str) -> Optional[NormalizedVariant]:
    """Convert one variant to INR, or None if its price is unusable."""
    price = parse_price(variant.price)
    if price is None:
        logger.debug("Dropping variant %r: unparseable price %r", variant.sku, variant.price)
        return None

    in_reference = is_reference_currency(price, hostname)
    rate = 1 if in_reference else USD_TO_INR

    compare_at = parse_price(variant.compare_at_price)
    # Zero, missing and malformed compare-at prices all mean "no compare-at"
    compare_at_converted = compare_at * rate if compare_at else None

    return NormalizedVariant(
        price=price * rate,
        compare_at_price=compare_at_converted,
        available=variant.available,
        sku=variant.sku,
        title=variant.title,
        currency=REFERENCE_CURRENCY if in_reference else FOREIGN_CURRENCY,
    )


def normalize_product(raw: RawProduct, hostname: str) -> NormalizedProduct:
    variants = []
    for raw_variant in raw.variants:
        variant = normalize_variant(raw_variant, hostname)
        if variant is not None:
            variants.append(variant)

    return NormalizedProduct(
        title=raw.title,
        category=raw.product_type,
        vendor=raw.vendor,
        tags=frozenset(raw.tags),
        images_count=raw.images_count,
        created_at=raw.created_at,
        variants=tuple(variants),
    )


def normalize_products(raw_products: Iterable[Dict[str, Any]], hostname: str) -> List[NormalizedProduct]:
    """
    Normalize a fetched catalog.

    Args:
        raw_products: Product dicts as returned by /products.json
        hostname: Canonical store hostname (drives the currency decision)

    Returns:
        List of NormalizedProduct, in catalog order
    """
    products = []
    skipped = 0
    for data in raw_products:
        if not isinstance(data, dict):
            skipped += 1
            continue
        products.append(normalize_product(RawProduct.from_json(data), hostname))

    if skipped:
        logger.warning("Skipped %d malformed product records", skipped)
    return products

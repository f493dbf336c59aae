"""
Statistics Engine

Aggregate price and variant statistics over a normalized catalog.
"""

import math
from typing import Sequence

from ..models import AnalysisError, ErrorKind, NormalizedProduct, PriceStatistics


def upper_median(sorted_values: Sequence[float]) -> float:
    """Element at index n // 2; even-length input gives the upper middle."""
    return sorted_values[len(sorted_values) // 2]


def population_std_dev(values: Sequence[float], mean: float) -> float:
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def compute_statistics(products: Sequence[NormalizedProduct]) -> PriceStatistics:
    """
    Compute price statistics for a catalog.

    Only positive variant prices are counted. Products without surviving
    variants are left out of the variants-per-product figures but still
    count toward the sale percentage.

    Raises:
        AnalysisError: NO_VALID_DATA when there are no positive prices
    """
    prices = [v.price for p in products for v in p.variants if v.price > 0]
    variant_counts = [len(p.variants) for p in products if p.variants]

    if not prices or not variant_counts:
        raise AnalysisError(
            ErrorKind.NO_VALID_DATA,
            "No valid product data found. Store may not have a public catalog "
            "or has no priced products.",
        )

    sorted_prices = sorted(prices)
    mean = sum(prices) / len(prices)
    on_sale = sum(1 for p in products if p.on_sale)

    return PriceStatistics(
        mean=mean,
        median=upper_median(sorted_prices),
        min=sorted_prices[0],
        max=sorted_prices[-1],
        std_dev=population_std_dev(prices, mean),
        variant_count=len(prices),
        prices=tuple(sorted_prices),
        variant_counts=tuple(variant_counts),
        product_count=len(products),
        products_on_sale=on_sale,
        sale_percentage=on_sale / len(products) * 100,
    )

"""
Classification Engine

Maps price statistics to strategy labels and insight sentences.
Pure functions: the same statistics and thresholds always give the same labels.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..common.config_loader import ClassificationThresholds
from ..common.constants import CURRENCY_SYMBOL
from ..models import PriceStatistics

DEFAULT_THRESHOLDS = ClassificationThresholds()


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3, 0.125 -> 0.13 at 2 digits)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def format_amount(value: float) -> str:
    """Whole-rupee amount with thousands separators: 12345.6 -> '12,346'."""
    return f"{int(round_half_up(value)):,}"


def humanize_label(label: str) -> str:
    """'broad_generalist' -> 'Broad Generalist'."""
    return " ".join(word.capitalize() for word in label.split("_"))


def label_words(label: str) -> str:
    return label.replace("_", " ")


# ── Individual dimensions ─────────────────────────────────────────────────

def classify_pricing(mean_price: float, t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> str:
    if mean_price > t.luxury_mean_price:
        return "luxury"
    if mean_price > t.premium_mean_price:
        return "premium"
    if mean_price < t.penetration_mean_price:
        return "penetration"
    return "value"


def price_distribution(prices: Sequence[float],
                       t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> Dict[str, float]:
    """Share of variant prices per band, in percent to 1 decimal."""
    total = len(prices)
    if total == 0:
        return {
            "budget_percentage": 0.0,
            "mid_range_percentage": 0.0,
            "premium_percentage": 0.0,
            "luxury_percentage": 0.0,
        }

    budget = sum(1 for p in prices if p < t.budget_band_max)
    mid_range = sum(1 for p in prices if t.budget_band_max <= p < t.mid_range_band_max)
    premium = sum(1 for p in prices if t.mid_range_band_max <= p < t.premium_band_max)
    luxury = sum(1 for p in prices if p >= t.premium_band_max)

    def share(count: int) -> float:
        return round_half_up(count / total * 100, 1)

    return {
        "budget_percentage": share(budget),
        "mid_range_percentage": share(mid_range),
        "premium_percentage": share(premium),
        "luxury_percentage": share(luxury),
    }


def classify_variants(avg_variants: float, t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> str:
    if avg_variants > t.high_customization_variants:
        return "high_customization"
    if avg_variants > t.moderate_options_variants:
        return "moderate_options"
    return "simple_selection"


def classify_catalog(product_count: int, t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> str:
    if product_count < t.niche_catalog_max:
        return "niche_specialist"
    if product_count > t.broad_catalog_min:
        return "broad_generalist"
    return "balanced"


def classify_consistency(spread: float, t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> str:
    if spread < t.consistent_spread_max:
        return "highly_consistent"
    if spread < t.moderate_spread_max:
        return "moderate_spread"
    return "wide_variety"


def classify_promotions(sale_percentage: float,
                        t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> str:
    if sale_percentage > t.aggressive_sale_pct:
        return "aggressive_promotions"
    if sale_percentage > t.selective_sale_pct:
        return "selective_promotions"
    return "premium_no_discount"


# ── Combined classification ───────────────────────────────────────────────

@dataclass(frozen=True)
class Classification:
    """All strategy labels and insights for one catalog."""
    pricing_strategy: str
    price_distribution: Dict[str, float]
    variant_strategy: str
    catalog_strategy: str
    pricing_consistency: str
    promotional_strategy: str
    average_variants: float
    pricing_insights: List[str]
    product_insights: List[str]


def pricing_insights(stats: PriceStatistics, strategy: str, consistency: str,
                     promotions: str, t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> List[str]:
    diversity = "wide" if stats.max / stats.min > t.wide_diversity_ratio else "narrow"
    return [
        f"Average price point of {CURRENCY_SYMBOL}{format_amount(stats.mean)} "
        f"positions store as {strategy}",
        f"Price range spans {CURRENCY_SYMBOL}{format_amount(stats.max - stats.min)}, "
        f"showing {diversity} catalog diversity",
        f"Standard deviation of {CURRENCY_SYMBOL}{format_amount(stats.std_dev)} "
        f"indicates {label_words(consistency)} pricing",
        f"{round_half_up(stats.sale_percentage, 1):.1f}% of products on sale indicates "
        f"{label_words(promotions)} strategy",
    ]


def product_insights(avg_variants: float, variant_strategy: str, collections_count: int,
                     t: ClassificationThresholds = DEFAULT_THRESHOLDS) -> List[str]:
    navigation = "good" if collections_count > t.good_navigation_collections else "limited"
    return [
        f"Average of {round_half_up(avg_variants, 1):.1f} variants per product indicates "
        f"{label_words(variant_strategy)}",
        f"{collections_count} collections provide {navigation} navigation structure",
    ]


def classify(stats: PriceStatistics, collections_count: int = 0,
             thresholds: Optional[ClassificationThresholds] = None) -> Classification:
    """
    Classify a catalog from its statistics.

    Args:
        stats: Output of compute_statistics
        collections_count: Number of collections the store exposes
        thresholds: Label boundaries (default: built-in values)
    """
    t = thresholds or DEFAULT_THRESHOLDS

    strategy = classify_pricing(stats.mean, t)
    consistency = classify_consistency(stats.spread, t)
    promotions = classify_promotions(stats.sale_percentage, t)
    avg_variants = stats.average_variants
    variant_strategy = classify_variants(avg_variants, t)

    return Classification(
        pricing_strategy=strategy,
        price_distribution=price_distribution(stats.prices, t),
        variant_strategy=variant_strategy,
        catalog_strategy=classify_catalog(stats.product_count, t),
        pricing_consistency=consistency,
        promotional_strategy=promotions,
        average_variants=avg_variants,
        pricing_insights=pricing_insights(stats, strategy, consistency, promotions, t),
        product_insights=product_insights(avg_variants, variant_strategy, collections_count, t),
    )

"""Tests for storepulse/analysis/classification.py"""

import pytest

from storepulse.analysis.classification import (
    classify,
    classify_catalog,
    classify_consistency,
    classify_pricing,
    classify_promotions,
    classify_variants,
    format_amount,
    humanize_label,
    price_distribution,
    round_half_up,
)
from storepulse.analysis.statistics import compute_statistics
from storepulse.common.config_loader import ClassificationThresholds
from storepulse.models import NormalizedProduct, NormalizedVariant


def catalog(prices_per_product, on_sale=()):
    products = []
    for i, prices in enumerate(prices_per_product):
        variants = [NormalizedVariant(price=p) for p in prices]
        if i in on_sale:
            variants[0] = NormalizedVariant(price=prices[0], compare_at_price=prices[0] * 2)
        products.append(NormalizedProduct(title=f"P{i}", category="C", vendor="V", variants=tuple(variants)))
    return products


class TestPricing:
    @pytest.mark.parametrize("mean,label", [
        (16000.01, "luxury"),
        (16000, "premium"),
        (12000.01, "premium"),
        (12000, "value"),
        (5000, "value"),
        (2400, "value"),
        (2399.99, "penetration"),
    ])
    def test_boundaries(self, mean, label):
        assert classify_pricing(mean) == label

    def test_custom_thresholds(self):
        thresholds = ClassificationThresholds(luxury_mean_price=1000)
        assert classify_pricing(1500, thresholds) == "luxury"


class TestPriceDistribution:
    def test_bands(self):
        result = price_distribution([1000, 4000, 11999, 12000, 39999, 40000])
        assert result == {
            "budget_percentage": 16.7,
            "mid_range_percentage": 33.3,
            "premium_percentage": 33.3,
            "luxury_percentage": 16.7,
        }

    def test_empty(self):
        assert set(price_distribution([]).values()) == {0.0}


class TestVariants:
    @pytest.mark.parametrize("avg,label", [
        (1, "simple_selection"),
        (5, "simple_selection"),
        (5.1, "moderate_options"),
        (10, "moderate_options"),
        (10.5, "high_customization"),
    ])
    def test_boundaries(self, avg, label):
        assert classify_variants(avg) == label

    def test_mid_priced_catalog_with_few_variants_is_simple(self):
        products = catalog([[5000] * 5, [4000, 6000], [5000]])
        result = classify(compute_statistics(products))
        assert result.pricing_strategy == "value"
        assert result.average_variants <= 5
        assert result.variant_strategy == "simple_selection"


class TestCatalogBreadth:
    @pytest.mark.parametrize("count,label", [
        (99, "niche_specialist"),
        (100, "balanced"),
        (200, "balanced"),
        (201, "broad_generalist"),
    ])
    def test_boundaries(self, count, label):
        assert classify_catalog(count) == label


class TestConsistency:
    @pytest.mark.parametrize("spread,label", [
        (0, "highly_consistent"),
        (1.99, "highly_consistent"),
        (2, "moderate_spread"),
        (4.99, "moderate_spread"),
        (5, "wide_variety"),
    ])
    def test_boundaries(self, spread, label):
        assert classify_consistency(spread) == label


class TestPromotions:
    @pytest.mark.parametrize("pct,label", [
        (20.8, "aggressive_promotions"),
        (20, "selective_promotions"),
        (5.1, "selective_promotions"),
        (5, "premium_no_discount"),
        (0, "premium_no_discount"),
    ])
    def test_boundaries(self, pct, label):
        assert classify_promotions(pct) == label


class TestFormatting:
    def test_humanize_label(self):
        assert humanize_label("broad_generalist") == "Broad Generalist"
        assert humanize_label("luxury") == "Luxury"

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(20.83333, 1) == 20.8

    def test_format_amount(self):
        assert format_amount(12345.6) == "12,346"
        assert format_amount(999.4) == "999"


class TestClassify:
    def test_insights(self):
        products = catalog([[1000], [5000]], on_sale={1})
        result = classify(compute_statistics(products), collections_count=9)

        assert result.pricing_strategy == "value"
        assert result.pricing_consistency == "highly_consistent"
        assert result.promotional_strategy == "aggressive_promotions"
        assert result.pricing_insights == [
            "Average price point of ₹3,000 positions store as value",
            "Price range spans ₹4,000, showing narrow catalog diversity",
            "Standard deviation of ₹2,000 indicates highly consistent pricing",
            "50.0% of products on sale indicates aggressive promotions strategy",
        ]
        assert result.product_insights == [
            "Average of 1.0 variants per product indicates simple selection",
            "9 collections provide good navigation structure",
        ]

    def test_wide_diversity_and_limited_navigation(self):
        products = catalog([[500], [20000]])
        result = classify(compute_statistics(products), collections_count=8)

        assert "wide catalog diversity" in result.pricing_insights[1]
        assert result.product_insights[1] == "8 collections provide limited navigation structure"

    def test_deterministic(self):
        stats = compute_statistics(catalog([[1200, 1800], [2500], [900, 950, 990]], on_sale={0}))
        assert classify(stats, 3) == classify(stats, 3)

    def test_insight_numbers_round_half_up(self):
        stats = compute_statistics(catalog([[1000] * 3, [1000] * 2, [1000] * 2, [1000] * 2]))
        result = classify(stats)

        assert stats.average_variants == 2.25
        assert result.product_insights[0] == \
            "Average of 2.3 variants per product indicates simple selection"

    def test_sale_share_rounds_half_up(self):
        products = catalog([[1000]] * 16, on_sale={0})
        result = classify(compute_statistics(products))

        assert result.pricing_insights[3].startswith("6.3% of products on sale")

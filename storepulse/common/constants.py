"""
Shared constants for the analyzer.

Catalog endpoint shape and currency normalization values that must stay
identical across the fetcher, the normalizer and the reports.
"""

# Storefront catalog API
PAGE_SIZE = 250
PRODUCTS_ENDPOINT = "products.json"
COLLECTIONS_ENDPOINT = "collections.json"
PLATFORM_DOMAIN = ".myshopify.com"

DEFAULT_USER_AGENT = "StorePulse/1.0 (Competitive Intelligence Bot)"
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_MAX_PRODUCTS = 5000

# Currency normalization
# Prices are reported in INR. Small prices on stores without an Indian
# hostname are assumed to be USD and converted with a fixed rate.
REFERENCE_CURRENCY = "INR"
FOREIGN_CURRENCY = "USD"
REFERENCE_CURRENCY_MARKER = ".in"
REFERENCE_PRICE_FLOOR = 100
USD_TO_INR = 83

CURRENCY_SYMBOL = "₹"

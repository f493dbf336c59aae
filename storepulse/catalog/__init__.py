"""
Storefront catalog acquisition.

Modules:
    identifier  - Store reference to canonical hostname
    client      - HTTP client for the public catalog endpoints
    fetcher     - Paginated /products.json fetch with backoff
    collections - Best-effort /collections.json fetch
"""

from .client import StorefrontClient
from .collections import fetch_collections
from .fetcher import CatalogFetcher, fetch_all_products
from .identifier import normalize_store_identifier, suggest_alternate_hostname

__all__ = [
    'StorefrontClient',
    'CatalogFetcher',
    'fetch_all_products',
    'fetch_collections',
    'normalize_store_identifier',
    'suggest_alternate_hostname',
]

"""
Data models for catalog analysis.

This module contains data classes with no network or analysis logic.
"""

from .product import (
    Collection,
    NormalizedProduct,
    NormalizedVariant,
    RawProduct,
    RawVariant,
)
from .results import (
    AnalysisError,
    AnalysisResult,
    CatalogFetchResult,
    ErrorKind,
    FetchState,
    FetchStatus,
    PriceStatistics,
)

__all__ = [
    'RawVariant',
    'RawProduct',
    'Collection',
    'NormalizedVariant',
    'NormalizedProduct',
    'ErrorKind',
    'AnalysisError',
    'FetchStatus',
    'FetchState',
    'CatalogFetchResult',
    'PriceStatistics',
    'AnalysisResult',
]

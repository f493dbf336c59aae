"""
StorePulse: storefront catalog competitive intelligence

Modules:
    models    - Data models (raw/normalized records, results, errors)
    common    - Shared utilities (config loader, logging, constants)
    catalog   - Catalog and collection fetching
    analysis  - Normalization, statistics, classification, analyze()
"""

from .analysis import analyze
from .models import AnalysisError, AnalysisResult, ErrorKind

__version__ = "1.0.0"

__all__ = ['analyze', 'AnalysisError', 'AnalysisResult', 'ErrorKind']

"""
Catalog analysis.

Modules:
    normalizer     - Raw records to INR-normalized products
    statistics     - Price and variant statistics
    classification - Strategy labels and insight sentences
    analyzer       - End-to-end analyze() entry point
"""

from .analyzer import analyze, build_report
from .classification import Classification, classify, humanize_label
from .normalizer import is_reference_currency, normalize_products
from .statistics import compute_statistics

__all__ = [
    'analyze',
    'build_report',
    'Classification',
    'classify',
    'humanize_label',
    'is_reference_currency',
    'normalize_products',
    'compute_statistics',
]

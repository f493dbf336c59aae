"""
Result and error models.

Everything a caller learns about an analysis travels in these objects:
fetch outcomes, computed statistics, the final report, and typed errors.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ErrorKind(str, Enum):
    INVALID_IDENTIFIER = "InvalidIdentifier"
    STORE_NOT_FOUND = "StoreNotFound"
    RATE_LIMITED = "RateLimited"
    FETCH_FAILED = "FetchFailed"
    NO_VALID_DATA = "NoValidData"


class AnalysisError(Exception):
    """
    Typed analysis failure.

    Attributes:
        kind: ErrorKind of the failure
        message: Short, specific description
        hint: Optional remediation hint (e.g. an alternate hostname)
        status_code: HTTP status code when the failure came from a response
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        hint: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.hint = hint
        self.status_code = status_code

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} {self.hint}"
        return self.message

    def __repr__(self) -> str:
        return f"AnalysisError({self.kind.value}, {self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "hint": self.hint,
        }


class FetchStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


class FetchState(str, Enum):
    """States of the paginated catalog fetch."""
    FETCHING = "fetching"
    BACKING_OFF = "backing_off"
    PARTIAL_DONE = "partial_done"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CatalogFetchResult:
    """Outcome of paging through a store's catalog."""
    products: List[Dict[str, Any]] = field(default_factory=list)
    status: FetchStatus = FetchStatus.SUCCESS
    error: Optional[AnalysisError] = None
    pages_fetched: int = 0
    truncated: bool = False
    total_available: int = 0
    not_fetched: int = 0
    cancelled: bool = False

    @property
    def is_partial(self) -> bool:
        return self.status == FetchStatus.PARTIAL

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


@dataclass(frozen=True)
class PriceStatistics:
    """Aggregate price and variant statistics (prices in INR)."""
    mean: float
    median: float
    min: float
    max: float
    std_dev: float
    variant_count: int
    prices: Tuple[float, ...]
    variant_counts: Tuple[int, ...]
    product_count: int
    products_on_sale: int
    sale_percentage: float

    @property
    def average_variants(self) -> float:
        return sum(self.variant_counts) / len(self.variant_counts)

    @property
    def spread(self) -> float:
        """(max - min) relative to the mean price."""
        return (self.max - self.min) / self.mean


@dataclass(frozen=True)
class AnalysisResult:
    """Final competitive-intelligence report for one store."""
    store: str
    analyzed_at: datetime
    overview: Dict[str, Any]
    pricing_strategy: Dict[str, Any]
    product_strategy: Dict[str, Any]
    partial: bool = False
    truncated: bool = False
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            "store": self.store,
            "analyzed_at": self.analyzed_at.isoformat(),
            "overview": copy.deepcopy(self.overview),
            "pricing_strategy": copy.deepcopy(self.pricing_strategy),
            "product_strategy": copy.deepcopy(self.product_strategy),
            "data_quality": {
                "partial": self.partial,
                "truncated": self.truncated,
                "warnings": list(self.warnings),
            },
        }

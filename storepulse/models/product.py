"""
Catalog record models.

Raw records mirror the storefront JSON with a default for every optional
field. Normalized records hold prices in the reference currency.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


@dataclass
class RawVariant:
    """Variant exactly as received; price currency is unknown."""
    price: Any = None
    compare_at_price: Any = None
    available: bool = True
    sku: str = ""
    title: str = "Default"

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "RawVariant":
        return cls(
            price=data.get("price"),
            compare_at_price=data.get("compare_at_price"),
            # Only an explicit false marks a variant unavailable
            available=data.get("available") is not False,
            sku=data.get("sku") or "",
            title=data.get("title") or "Default",
        )


@dataclass
class RawProduct:
    """Product exactly as received from /products.json."""
    id: Any = None
    title: str = ""
    product_type: str = "Uncategorized"
    vendor: str = "Unknown"
    tags: List[str] = field(default_factory=list)
    created_at: str = ""
    variants: List[RawVariant] = field(default_factory=list)
    images_count: int = 0

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "RawProduct":
        tags = data.get("tags") or []
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",") if t.strip()]

        images = data.get("images") or []

        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            product_type=data.get("product_type") or "Uncategorized",
            vendor=data.get("vendor") or "Unknown",
            tags=[str(t) for t in tags],
            created_at=data.get("created_at") or "",
            variants=[
                RawVariant.from_json(v)
                for v in (data.get("variants") or [])
                if isinstance(v, dict)
            ],
            images_count=len(images) if isinstance(images, list) else 0,
        )


@dataclass(frozen=True)
class Collection:
    """Named storefront collection from /collections.json."""
    id: Any
    title: str
    handle: str = ""
    products_count: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Collection":
        count = data.get("products_count")
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            handle=data.get("handle") or "",
            products_count=count if isinstance(count, int) else None,
        )


@dataclass(frozen=True)
class NormalizedVariant:
    """Variant with prices in the reference currency."""
    price: float
    compare_at_price: Optional[float] = None
    available: bool = True
    sku: str = ""
    title: str = "Default"
    currency: str = "INR"   # currency the raw price was taken to be in

    def __post_init__(self):
        if self.price < 0:
            raise ValueError("Variant price must be non-negative")
        if self.compare_at_price is not None and self.compare_at_price < 0:
            raise ValueError("Compare-at price must be non-negative")

    @property
    def is_discounted(self) -> bool:
        return self.compare_at_price is not None and self.compare_at_price > self.price


@dataclass(frozen=True)
class NormalizedProduct:
    """Product ready for statistics."""
    title: str
    category: str
    vendor: str
    tags: FrozenSet[str] = frozenset()
    images_count: int = 0
    created_at: str = ""
    variants: Tuple[NormalizedVariant, ...] = ()

    @property
    def on_sale(self) -> bool:
        """True if any variant's compare-at price exceeds its price."""
        return any(v.is_discounted for v in self.variants)

"""
Storefront catalog schemas.

Variants are rebuilt from every page fetched and never persisted.
"""

from typing import Optional
from enum import Enum
from pydantic import Field

from models.base import BaseSchema


class ProductStatus(str, Enum):
    """Product lifecycle status as reported by the catalog."""

    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
    ARCHIVED = "ARCHIVED"


class CatalogSelector(BaseSchema):
    """
    Which catalog products are eligible for reconciliation.

    Sent upstream as a search query and re-checked locally on every page,
    since the upstream "published" filter can disagree with what buyers see.
    """

    vendor: str = Field(..., min_length=1)
    status: ProductStatus = ProductStatus.ACTIVE
    require_published: bool = True

    def to_query_string(self) -> str:
        """Render as a catalog search query."""
        parts = [
            f"vendor:'{self.vendor}'",
            f"status:{self.status.value.lower()}",
        ]
        if self.require_published:
            parts.append("published_status:published")
        return " AND ".join(parts)

    def matches(self, variant: "CatalogVariant") -> bool:
        """Local re-check of the upstream filter."""
        if variant.vendor != self.vendor:
            return False
        if variant.product_status != self.status:
            return False
        if self.require_published and not variant.is_published:
            return False
        return True


class CatalogVariant(BaseSchema):
    """Primary variant of one catalog product."""

    variant_id: str
    product_id: Optional[str] = None
    sku: str = ""
    current_quantity: int = 0
    inventory_item_id: Optional[str] = Field(
        None,
        description="Absent when the variant has no tracked inventory item"
    )
    vendor: Optional[str] = None
    product_status: Optional[ProductStatus] = None
    is_published: bool = False


class PageCursor(BaseSchema):
    """Opaque pagination token. Only CatalogPager looks inside."""

    token: str
    has_more: bool = True


class CatalogPage(BaseSchema):
    """One page of eligible variants plus where to continue from."""

    items: list[CatalogVariant] = Field(default_factory=list)
    next_cursor: Optional[PageCursor] = None
    fetched_count: int = Field(
        default=0,
        description="Variants returned upstream before the local filter"
    )

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None and self.next_cursor.has_more

    @classmethod
    def terminal(cls) -> "CatalogPage":
        """Empty last page, used when a fetch degrades."""
        return cls(items=[], next_cursor=None)

"""
Supplier feed schemas.

The supplier feed is the source of truth for "should be" quantities.
"""

import math

from pydantic import Field

from models.base import BaseSchema


class SupplierRecord(BaseSchema):
    """One (sku, quantity) row from the supplier feed."""

    sku: str = Field(..., description="Supplier SKU, join key against the catalog")
    quantity: float = Field(
        ...,
        allow_inf_nan=False,
        description="Stock on hand as reported by the supplier"
    )

    @property
    def whole_quantity(self) -> int:
        """Quantity floored to a whole unit (2.9 -> 2)."""
        return math.floor(self.quantity)


def build_supplier_index(records: list[SupplierRecord]) -> dict[str, SupplierRecord]:
    """
    Index supplier records by SKU.

    SKUs are assumed unique; if the feed repeats one, the first row wins.
    """
    index: dict[str, SupplierRecord] = {}
    for record in records:
        index.setdefault(record.sku, record)
    return index

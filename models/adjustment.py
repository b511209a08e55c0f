"""
Inventory correction schemas.
"""

from pydantic import Field

from models.base import BaseSchema


class Adjustment(BaseSchema):
    """
    Signed correction for one inventory item.

    new quantity = current quantity + delta
    """

    inventory_item_id: str = Field(..., min_length=1)
    delta: int
    sku: str = Field(default="", description="For log context only")


class ReconciliationResult(BaseSchema):
    """Outcome of diffing one catalog page against the supplier index."""

    adjustments: list[Adjustment] = Field(default_factory=list)
    unmatched: list[str] = Field(
        default_factory=list,
        description="Catalog SKUs absent from the supplier feed, in page order"
    )
    skipped_without_inventory: int = 0


class AdjustmentOutcome(BaseSchema):
    """What happened to one bulk adjustment call."""

    requested: int = 0
    applied: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

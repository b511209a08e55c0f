"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.supplier import SupplierRecord, build_supplier_index
from models.catalog import (
    ProductStatus,
    CatalogSelector,
    CatalogVariant,
    PageCursor,
    CatalogPage,
)
from models.adjustment import (
    Adjustment,
    AdjustmentOutcome,
    ReconciliationResult,
)
from models.sync import SyncEvent, SyncEventType, SyncSummary

__all__ = [
    "BaseSchema",
    # Supplier
    "SupplierRecord",
    "build_supplier_index",
    # Catalog
    "ProductStatus",
    "CatalogSelector",
    "CatalogVariant",
    "PageCursor",
    "CatalogPage",
    # Adjustments
    "Adjustment",
    "AdjustmentOutcome",
    "ReconciliationResult",
    # Run
    "SyncEvent",
    "SyncEventType",
    "SyncSummary",
]

"""
SKU matching and correction decisions.

For each eligible catalog variant, looks up the supplier record with the
same SKU and decides whether the catalog quantity must be corrected.

Decision rule (s = supplier quantity floored, c = catalog quantity):
- s <= 1 and s != c   -> correct (low stock must be exact)
- s >= 2 and c <= 1   -> correct (restock shows immediately)
- otherwise           -> leave alone (small drift at healthy levels is tolerated)
"""

from typing import Iterable, Optional
import structlog

from models.adjustment import Adjustment, ReconciliationResult
from models.catalog import CatalogVariant
from models.supplier import SupplierRecord

logger = structlog.get_logger(__name__)


def needs_correction(supplier_qty: int, catalog_qty: int) -> bool:
    """Asymmetric threshold: exact near zero, tolerant when both sides are stocked."""
    if supplier_qty <= 1:
        return supplier_qty != catalog_qty
    return catalog_qty <= 1


class ReconciliationEngine:
    """
    Diffs catalog pages against the supplier index.

    Stateless between calls; the caller accumulates unmatched SKUs.
    """

    def __init__(self, exempt_skus: Optional[Iterable[str]] = None):
        self.exempt_skus = frozenset(exempt_skus or ())

    def reconcile(
        self,
        page_items: list[CatalogVariant],
        supplier_index: dict[str, SupplierRecord],
    ) -> ReconciliationResult:
        """
        Decide corrections for one page.

        Args:
            page_items: Eligible variants, in page order
            supplier_index: Supplier records keyed by SKU

        Returns:
            ReconciliationResult with adjustments and unmatched SKUs (page order)
        """
        adjustments = []
        unmatched = []
        skipped = 0

        for variant in page_items:
            # Nothing can be written without an inventory item
            if not variant.inventory_item_id:
                skipped += 1
                continue

            record = supplier_index.get(variant.sku)
            if record is None:
                if variant.sku not in self.exempt_skus:
                    unmatched.append(variant.sku)
                continue

            supplier_qty = record.whole_quantity
            if not needs_correction(supplier_qty, variant.current_quantity):
                continue

            adjustments.append(
                Adjustment(
                    inventory_item_id=variant.inventory_item_id,
                    delta=supplier_qty - variant.current_quantity,
                    sku=variant.sku,
                )
            )

        logger.debug(
            "page_reconciled",
            items=len(page_items),
            adjustments=len(adjustments),
            unmatched=len(unmatched),
            skipped_without_inventory=skipped
        )

        return ReconciliationResult(
            adjustments=adjustments,
            unmatched=unmatched,
            skipped_without_inventory=skipped,
        )

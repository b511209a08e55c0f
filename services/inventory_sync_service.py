"""
One full, stateless reconciliation pass.

Flow:
    supplier feed (once) -> for each catalog page: diff, bulk-apply, cool down
    -> report unmatched SKUs

An empty supplier feed aborts the run before any catalog read or write.
"""

import time
from typing import Callable
import structlog

from integrations.notifications import NotificationSink
from integrations.supplier_feed import SupplierFeedReader
from models.supplier import build_supplier_index
from models.sync import SyncEventType, SyncSummary
from services.bulk_adjuster import BulkAdjuster
from services.catalog_pager import CatalogPager
from services.events import EventHook
from services.reconciliation_service import ReconciliationEngine
from exceptions import NotificationError

logger = structlog.get_logger(__name__)


class InventorySyncService:
    """
    Orchestrates supplier read, catalog walk, corrections and reporting.

    Strictly sequential: a page's corrections are sent (and the cooldown
    observed) before the next page is requested.
    """

    def __init__(
        self,
        supplier_reader: SupplierFeedReader,
        pager: CatalogPager,
        engine: ReconciliationEngine,
        adjuster: BulkAdjuster,
        notifier: NotificationSink,
        events: EventHook,
        post_batch_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.supplier_reader = supplier_reader
        self.pager = pager
        self.engine = engine
        self.adjuster = adjuster
        self.notifier = notifier
        self.events = events
        self.post_batch_delay = post_batch_delay
        self.sleep = sleep
        self.clock = clock

    def run(self) -> SyncSummary:
        """
        Run one reconciliation pass.

        Returns:
            SyncSummary with totals and the unmatched SKUs in catalog order
        """
        started = self.clock()

        supplier_records = self.supplier_reader.fetch()
        if not supplier_records:
            logger.info("no_supplier_inventory_skipping_run")
            return SyncSummary(
                skipped=True,
                duration_seconds=round(self.clock() - started, 2),
            )

        supplier_index = build_supplier_index(supplier_records)

        pages = 0
        items_seen = 0
        items_eligible = 0
        requested = 0
        applied = 0
        failed_batches = 0
        unmatched: list[str] = []

        for page in self.pager.iter_pages():
            pages += 1
            items_seen += page.fetched_count
            items_eligible += len(page.items)

            result = self.engine.reconcile(page.items, supplier_index)
            unmatched.extend(result.unmatched)

            if result.adjustments:
                logger.info(
                    "adjusting_inventory_items",
                    page=pages,
                    count=len(result.adjustments)
                )
                outcome = self.adjuster.apply(result.adjustments)
                requested += outcome.requested
                applied += outcome.applied
                if not outcome.ok:
                    failed_batches += 1
                self.sleep(self.post_batch_delay)

        self._report_unmatched(unmatched)

        summary = SyncSummary(
            pages=pages,
            items_seen=items_seen,
            items_eligible=items_eligible,
            adjustments_requested=requested,
            adjustments_applied=applied,
            failed_batches=failed_batches,
            unmatched_skus=unmatched,
            duration_seconds=round(self.clock() - started, 2),
        )

        logger.info(
            "inventory_sync_complete",
            pages=summary.pages,
            items_eligible=summary.items_eligible,
            adjustments_requested=summary.adjustments_requested,
            adjustments_applied=summary.adjustments_applied,
            failed_batches=summary.failed_batches,
            unmatched=len(summary.unmatched_skus),
            duration_seconds=summary.duration_seconds
        )

        return summary

    def _report_unmatched(self, unmatched: list[str]) -> None:
        if not unmatched:
            return
        try:
            self.notifier.notify(unmatched)
        except NotificationError as e:
            self.events.emit(
                SyncEventType.NOTIFICATION_FAILED,
                e.message,
                count=len(unmatched),
                **e.details
            )

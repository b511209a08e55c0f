"""
Supplier Stock Sync: process entry point.

Runs one reconciliation pass and exits. Meant to be scheduled externally
(cron, CI schedule); a failed run is simply re-run later.

Exit codes:
    0: run finished (including skipped runs and absorbed upstream errors)
    1: invalid configuration or an unexpected error escaped the run
"""

import sys
from typing import Optional

import structlog
from pydantic import ValidationError

from config import Settings, configure_logging, get_settings
from integrations.notifications import NotificationSink, build_notifier
from integrations.shopify_client import ShopifyGraphQLClient
from integrations.supplier_feed import SupplierFeedReader
from services.bulk_adjuster import BulkAdjuster
from services.catalog_pager import CatalogPager, ThrottlePolicy
from services.events import EventHook, EventRecorder
from services.inventory_sync_service import InventorySyncService
from services.reconciliation_service import ReconciliationEngine
from exceptions import AppError

logger = structlog.get_logger(__name__)


def build_sync_service(
    settings: Settings,
    events: EventHook,
    notifier: Optional[NotificationSink] = None,
) -> InventorySyncService:
    """
    Wire every component from settings.

    This is the only place configuration values are read.
    """
    timeout = settings.request_timeout_seconds

    catalog_client = ShopifyGraphQLClient(
        graphql_url=settings.graphql_url,
        api_key=settings.shopify_api_key,
        api_password=settings.shopify_api_password,
        timeout=timeout,
    )

    return InventorySyncService(
        supplier_reader=SupplierFeedReader(
            url=settings.supplier_api_url,
            api_key=settings.supplier_api_key,
            events=events,
            timeout=timeout,
        ),
        pager=CatalogPager(
            client=catalog_client,
            selector=settings.catalog_selector,
            events=events,
            page_size=settings.catalog_page_size,
            throttle=ThrottlePolicy(
                target_capacity=settings.throttle_target_capacity,
                restore_rate=settings.throttle_restore_rate,
                max_retries=settings.max_throttle_retries,
                max_wait_seconds=settings.max_throttle_wait_seconds,
            ),
        ),
        engine=ReconciliationEngine(exempt_skus=settings.exempt_skus),
        adjuster=BulkAdjuster(
            client=catalog_client,
            location_id=settings.shopify_location_id,
            events=events,
        ),
        notifier=notifier or build_notifier(settings),
        events=events,
        post_batch_delay=settings.post_batch_delay_seconds,
    )


def main() -> int:
    """Run one pass; return the process exit code."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error("invalid_configuration", errors=e.errors(include_url=False))
        return 1

    configure_logging(settings)

    recorder = EventRecorder()
    events = EventHook(listeners=[recorder])

    try:
        service = build_sync_service(settings, events)
        summary = service.run()
    except AppError as e:
        logger.error("inventory_sync_failed", **e.to_dict()["error"])
        return 1
    except Exception:
        logger.exception("inventory_sync_failed")
        return 1

    logger.info(
        "inventory_sync_finished",
        skipped=summary.skipped,
        failed_batches=summary.failed_batches,
        duration_seconds=summary.duration_seconds,
        absorbed_events=len(recorder.events)
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

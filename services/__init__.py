"""
Sync job services.

Modules:
    events: EventHook observability hook
    catalog_pager: CatalogPager (pagination + throttle backoff)
    reconciliation_service: ReconciliationEngine (SKU diff + threshold rule)
    bulk_adjuster: BulkAdjuster (batched inventory corrections)
    inventory_sync_service: InventorySyncService (one full pass)
"""

"""
Run summary and observability event schemas.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from pydantic import Field

from models.base import BaseSchema


class SyncEventType(str, Enum):
    """Absorbed failures and notable degraded paths."""

    SUPPLIER_FEED_UNAVAILABLE = "SUPPLIER_FEED_UNAVAILABLE"
    CATALOG_THROTTLED = "CATALOG_THROTTLED"
    CATALOG_PAGE_DEGRADED = "CATALOG_PAGE_DEGRADED"
    THROTTLE_LIMIT_REACHED = "THROTTLE_LIMIT_REACHED"
    ADJUSTMENT_USER_ERRORS = "ADJUSTMENT_USER_ERRORS"
    ADJUSTMENT_REQUEST_ERRORS = "ADJUSTMENT_REQUEST_ERRORS"
    ADJUSTMENT_REQUEST_FAILED = "ADJUSTMENT_REQUEST_FAILED"
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"


class SyncEvent(BaseSchema):
    """One occurrence routed through the event hook."""

    type: SyncEventType
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SyncSummary(BaseSchema):
    """Totals for one reconciliation pass."""

    skipped: bool = Field(
        default=False,
        description="True when the supplier feed was empty and nothing was read or written"
    )
    pages: int = 0
    items_seen: int = 0
    items_eligible: int = 0
    adjustments_requested: int = 0
    adjustments_applied: int = 0
    failed_batches: int = Field(
        default=0,
        description="Bulk adjustment calls that reported any error"
    )
    unmatched_skus: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0

"""
Bulk inventory corrections.

Sends every adjustment for a page in one inventoryAdjustQuantities call.
Best effort: request failures and rejected items are reported through the
event hook and never raised; the next run re-corrects whatever was missed.
"""

from typing import Any
import structlog

from integrations.shopify_client import ShopifyGraphQLClient
from models.adjustment import Adjustment, AdjustmentOutcome
from models.sync import SyncEventType
from services.events import EventHook
from exceptions import CatalogRequestError, CatalogResponseError

logger = structlog.get_logger(__name__)


ADJUST_MUTATION = """
mutation adjustInventory($input: InventoryAdjustQuantitiesInput!) {
  inventoryAdjustQuantities(input: $input) {
    inventoryAdjustmentGroup {
      id
    }
    userErrors {
      field
      message
    }
  }
}
"""

ADJUSTMENT_REASON = "correction"
QUANTITY_NAME = "available"


def _format_user_error(error: Any) -> str:
    if not isinstance(error, dict):
        return str(error)
    field = error.get("field")
    message = error.get("message") or "unknown error"
    if field:
        path = ".".join(str(part) for part in field) if isinstance(field, list) else str(field)
        return f"{path}: {message}"
    return message


class BulkAdjuster:
    """Applies adjustments at one inventory location."""

    def __init__(
        self,
        client: ShopifyGraphQLClient,
        location_id: str,
        events: EventHook,
    ):
        self.client = client
        self.location_id = location_id
        self.events = events

    def build_input(self, adjustments: list[Adjustment]) -> dict:
        """Mutation variables for a batch."""
        return {
            "input": {
                "reason": ADJUSTMENT_REASON,
                "name": QUANTITY_NAME,
                "changes": [
                    {
                        "delta": adjustment.delta,
                        "locationId": self.location_id,
                        "inventoryItemId": adjustment.inventory_item_id,
                    }
                    for adjustment in adjustments
                ],
            }
        }

    def apply(self, adjustments: list[Adjustment]) -> AdjustmentOutcome:
        """
        Apply a batch of adjustments in a single call.

        Args:
            adjustments: Corrections for one page

        Returns:
            AdjustmentOutcome; applied is 0 whenever the call reported errors
        """
        if not adjustments:
            return AdjustmentOutcome()

        requested = len(adjustments)
        logger.info("adjusting_inventory", count=requested)

        try:
            body = self.client.execute(ADJUST_MUTATION, self.build_input(adjustments))
        except (CatalogRequestError, CatalogResponseError) as e:
            self.events.emit(
                SyncEventType.ADJUSTMENT_REQUEST_FAILED,
                "Inventory adjustment request failed",
                count=requested,
                error=e.message
            )
            return AdjustmentOutcome(requested=requested, errors=[e.message])

        errors = []

        request_errors = body.get("errors") or []
        if request_errors:
            messages = [
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in request_errors
            ]
            self.events.emit(
                SyncEventType.ADJUSTMENT_REQUEST_ERRORS,
                "Inventory adjustment returned errors",
                count=requested,
                errors=messages
            )
            errors.extend(messages)

        data = body.get("data")
        result = data.get("inventoryAdjustQuantities") if isinstance(data, dict) else None
        user_errors = (result.get("userErrors") if isinstance(result, dict) else None) or []
        if user_errors:
            messages = [_format_user_error(e) for e in user_errors]
            self.events.emit(
                SyncEventType.ADJUSTMENT_USER_ERRORS,
                "Inventory adjustment rejected items",
                count=requested,
                errors=messages
            )
            errors.extend(messages)

        if errors:
            return AdjustmentOutcome(requested=requested, errors=errors)

        for adjustment in adjustments:
            logger.debug(
                "inventory_adjusted",
                inventory_item_id=adjustment.inventory_item_id,
                sku=adjustment.sku,
                delta=adjustment.delta
            )

        return AdjustmentOutcome(requested=requested, applied=requested)

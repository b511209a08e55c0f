"""
Supplier inventory feed integration.

Fetches the supplier's full stock list in one authenticated GET.
Fails closed: any read or parse problem yields an empty list, which makes
the sync job skip the run instead of zeroing out live stock.
"""

from typing import Any, Optional
import requests
import structlog

from integrations.auth import build_basic_auth_header
from models.supplier import SupplierRecord
from models.sync import SyncEventType
from services.events import EventHook
from exceptions import SupplierFeedError

logger = structlog.get_logger(__name__)


def parse_supplier_payload(payload: Any) -> list[SupplierRecord]:
    """
    Parse the supplier response body.

    Expected shape: {"inventory": [[sku, quantity], ...]}.
    Rows may also be objects with "sku" and "quantity" keys.
    A missing "inventory" key means an empty feed.

    Raises:
        SupplierFeedError: If the payload or any row is malformed
    """
    if not isinstance(payload, dict):
        raise SupplierFeedError(
            "Supplier payload is not an object",
            details={"payload_type": type(payload).__name__}
        )

    rows = payload.get("inventory") or []
    if not isinstance(rows, list):
        raise SupplierFeedError("Supplier 'inventory' is not a list")

    records = []
    for position, row in enumerate(rows):
        if isinstance(row, dict):
            sku, quantity = row.get("sku"), row.get("quantity")
        elif isinstance(row, (list, tuple)) and len(row) >= 2:
            sku, quantity = row[0], row[1]
        else:
            raise SupplierFeedError(
                "Malformed supplier row",
                details={"row": position}
            )

        if not isinstance(sku, str) or isinstance(quantity, bool):
            raise SupplierFeedError(
                "Malformed supplier row",
                details={"row": position}
            )
        try:
            records.append(SupplierRecord(sku=sku, quantity=quantity))
        except ValueError as e:
            raise SupplierFeedError(
                "Malformed supplier row",
                details={"row": position, "error": str(e)}
            ) from e

    return records


class SupplierFeedReader:
    """
    Reads the supplier stock list.

    One call per run; the whole feed is assumed to fit in memory.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        events: EventHook,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.events = events
        self.timeout = timeout
        self.session = session or requests.Session()
        self._headers = {
            "Authorization": build_basic_auth_header(api_key),
            "Content-Type": "application/json",
        }

    def fetch(self) -> list[SupplierRecord]:
        """
        Fetch every supplier record.

        Returns:
            Supplier records, or an empty list if the feed is unavailable
        """
        logger.info("fetching_supplier_inventory")

        try:
            response = self.session.get(
                self.url,
                headers=self._headers,
                timeout=self.timeout
            )
            response.raise_for_status()
            records = parse_supplier_payload(response.json())

        except requests.exceptions.RequestException as e:
            self.events.emit(
                SyncEventType.SUPPLIER_FEED_UNAVAILABLE,
                "Supplier request failed",
                error=str(e),
                error_type=type(e).__name__
            )
            return []
        except ValueError as e:
            # Body was not JSON
            self.events.emit(
                SyncEventType.SUPPLIER_FEED_UNAVAILABLE,
                "Supplier response is not JSON",
                error=str(e)
            )
            return []
        except SupplierFeedError as e:
            self.events.emit(
                SyncEventType.SUPPLIER_FEED_UNAVAILABLE,
                e.message,
                **e.details
            )
            return []

        logger.info("supplier_inventory_fetched", count=len(records))
        return records

"""
Cursor pagination over the storefront catalog.

Applies the vendor/status/publication selector upstream (search query) and
again locally, and absorbs rate limiting: a throttled page is retried with
the same cursor after a wait computed from the catalog's own cost numbers.
Any other failure ends the walk early with an empty last page.
"""

import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional
import structlog

from integrations.shopify_client import ShopifyGraphQLClient
from models.catalog import (
    CatalogPage,
    CatalogSelector,
    CatalogVariant,
    PageCursor,
    ProductStatus,
)
from models.sync import SyncEventType
from services.events import EventHook
from exceptions import CatalogRequestError, CatalogResponseError, CatalogThrottledError

logger = structlog.get_logger(__name__)


PRODUCTS_QUERY = """
query ($cursor: String, $queryString: String!, $pageSize: Int!) {
  products(first: $pageSize, after: $cursor, query: $queryString) {
    edges {
      cursor
      node {
        id
        vendor
        status
        publishedOnCurrentPublication
        variants(first: 1) {
          edges {
            node {
              id
              sku
              inventoryQuantity
              inventoryItem {
                id
              }
            }
          }
        }
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""


@dataclass(frozen=True)
class ThrottlePolicy:
    """
    How long to back off when the catalog throttles.

    target_capacity and restore_rate are fallbacks for responses that do
    not report their own cost numbers. Both ceilings default to unbounded.
    """

    target_capacity: float = 101
    restore_rate: float = 100
    max_retries: Optional[int] = None
    max_wait_seconds: Optional[float] = None


def compute_throttle_wait(target: float, available: float, restore_rate: float) -> float:
    """
    Seconds to wait until `target` points are available again.

    Whole seconds, rounded up, never negative.
    """
    if restore_rate <= 0:
        raise ValueError("restore_rate must be positive")
    return float(max(0, math.ceil((target - available) / restore_rate)))


def is_throttled(body: dict[str, Any]) -> bool:
    """True if any GraphQL error carries the THROTTLED code."""
    errors = body.get("errors")
    if not isinstance(errors, list):
        return False
    for error in errors:
        if not isinstance(error, dict):
            continue
        extensions = error.get("extensions")
        if isinstance(extensions, dict) and extensions.get("code") == "THROTTLED":
            return True
    return False


def _parse_status(raw: Any) -> Optional[ProductStatus]:
    try:
        return ProductStatus(raw)
    except ValueError:
        return None


class CatalogPager:
    """
    Fetches eligible catalog variants one page at a time.

    Usage:
        pager = CatalogPager(client, selector, events)
        for page in pager.iter_pages():
            ...
    """

    def __init__(
        self,
        client: ShopifyGraphQLClient,
        selector: CatalogSelector,
        events: EventHook,
        page_size: int = 100,
        throttle: Optional[ThrottlePolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.selector = selector
        self.events = events
        self.page_size = page_size
        self.throttle = throttle or ThrottlePolicy()
        self.sleep = sleep
        self.clock = clock

    # ===================
    # PAGINATION
    # ===================

    def iter_pages(self) -> Iterator[CatalogPage]:
        """
        Walk the catalog from the first page until no more pages remain.

        Lazy: the next page is only requested once the caller resumes,
        so a caller can finish its writes for one page before the next read.
        """
        cursor: Optional[PageCursor] = None
        page_number = 1

        while True:
            logger.info("fetching_catalog_page", page=page_number)
            page = self.next_page(cursor)
            yield page

            if not page.has_more:
                return
            cursor = page.next_cursor
            page_number += 1

    def next_page(self, cursor: Optional[PageCursor]) -> CatalogPage:
        """
        Fetch the page after `cursor` (or the first page).

        Throttled responses are retried with the same cursor. Other
        failures return an empty terminal page and emit an event.

        Args:
            cursor: Cursor from the previous page, None for the first

        Returns:
            CatalogPage with only the variants that pass the selector
        """
        variables = {
            "cursor": cursor.token if cursor else None,
            "queryString": self.selector.to_query_string(),
            "pageSize": self.page_size,
        }
        attempts = 0
        started = self.clock()

        while True:
            try:
                body = self.client.execute(PRODUCTS_QUERY, variables)
            except CatalogThrottledError as e:
                if e.retry_after is not None:
                    wait = float(e.retry_after)
                else:
                    wait = compute_throttle_wait(
                        self.throttle.target_capacity, 0, self.throttle.restore_rate
                    )
            except (CatalogRequestError, CatalogResponseError) as e:
                return self._degraded(cursor, e.message, **e.details)
            else:
                if not is_throttled(body):
                    try:
                        return self._parse_page(body)
                    except CatalogResponseError as e:
                        return self._degraded(cursor, e.message, **e.details)
                wait = self._wait_from_cost(body)

            attempts += 1
            if self._ceiling_reached(attempts, started, wait):
                self.events.emit(
                    SyncEventType.THROTTLE_LIMIT_REACHED,
                    "Gave up on throttled catalog page",
                    cursor=variables["cursor"],
                    attempts=attempts,
                    waited_seconds=round(self.clock() - started, 3)
                )
                return CatalogPage.terminal()

            self.events.emit(
                SyncEventType.CATALOG_THROTTLED,
                "Catalog throttled, backing off",
                cursor=variables["cursor"],
                attempt=attempts,
                wait_seconds=wait
            )
            self.sleep(wait)

    # ===================
    # HELPERS
    # ===================

    def _wait_from_cost(self, body: dict[str, Any]) -> float:
        """Backoff computed from the response's cost-accounting extension."""
        extensions = body.get("extensions")
        cost = (extensions.get("cost") if isinstance(extensions, dict) else None) or {}
        status = (cost.get("throttleStatus") if isinstance(cost, dict) else None) or {}
        if not isinstance(cost, dict):
            cost = {}
        if not isinstance(status, dict):
            status = {}

        target = cost.get("requestedQueryCost") or self.throttle.target_capacity
        available = status.get("currentlyAvailable") or 0
        restore_rate = status.get("restoreRate") or self.throttle.restore_rate

        return compute_throttle_wait(target, available, restore_rate)

    def _ceiling_reached(self, attempts: int, started: float, wait: float) -> bool:
        policy = self.throttle
        if policy.max_retries is not None and attempts > policy.max_retries:
            return True
        if policy.max_wait_seconds is not None:
            elapsed = self.clock() - started
            if elapsed + wait > policy.max_wait_seconds:
                return True
        return False

    def _degraded(self, cursor: Optional[PageCursor], reason: str, **details) -> CatalogPage:
        self.events.emit(
            SyncEventType.CATALOG_PAGE_DEGRADED,
            f"Catalog page unavailable, ending pagination: {reason}",
            cursor=cursor.token if cursor else None,
            **details
        )
        return CatalogPage.terminal()

    def _parse_page(self, body: dict[str, Any]) -> CatalogPage:
        """
        Turn a products response into a filtered CatalogPage.

        Raises:
            CatalogResponseError: If the payload does not have the expected shape
        """
        data = body.get("data")
        products = data.get("products") if isinstance(data, dict) else None
        if not isinstance(products, dict):
            raise CatalogResponseError(
                "Catalog response has no products",
                details={"errors": body.get("errors")}
            )

        try:
            variants = [
                variant
                for edge in products.get("edges") or []
                for variant in self._parse_product(edge["node"])
            ]
            page_info = products.get("pageInfo") or {}
            has_next = bool(page_info.get("hasNextPage"))
            end_cursor = page_info.get("endCursor")
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise CatalogResponseError(
                "Malformed catalog page",
                details={"error": str(e)}
            ) from e

        eligible = [v for v in variants if self.selector.matches(v)]

        next_cursor = None
        if has_next and end_cursor:
            next_cursor = PageCursor(token=end_cursor, has_more=True)

        logger.info(
            "catalog_page_fetched",
            fetched=len(variants),
            eligible=len(eligible),
            has_more=next_cursor is not None
        )

        return CatalogPage(
            items=eligible,
            next_cursor=next_cursor,
            fetched_count=len(variants),
        )

    @staticmethod
    def _parse_product(node: dict[str, Any]) -> list[CatalogVariant]:
        variants = []
        for edge in (node.get("variants") or {}).get("edges") or []:
            variant = edge["node"]
            inventory_item = variant.get("inventoryItem") or {}
            variants.append(
                CatalogVariant(
                    variant_id=variant["id"],
                    product_id=node.get("id"),
                    sku=variant.get("sku") or "",
                    current_quantity=variant.get("inventoryQuantity") or 0,
                    inventory_item_id=inventory_item.get("id") or None,
                    vendor=node.get("vendor"),
                    product_status=_parse_status(node.get("status")),
                    is_published=bool(node.get("publishedOnCurrentPublication")),
                )
            )
        return variants

"""
Shopify Admin GraphQL client.

Thin transport wrapper: posts a query, returns the decoded body.
Interpreting GraphQL errors (throttling, user errors) is left to callers.
"""

from typing import Any, Optional
import requests
import structlog

from exceptions import CatalogRequestError, CatalogThrottledError, CatalogResponseError
from integrations.auth import build_basic_auth_header

logger = structlog.get_logger(__name__)


class ShopifyGraphQLClient:
    """Admin API GraphQL transport with Basic authentication."""

    def __init__(
        self,
        graphql_url: str,
        api_key: str,
        api_password: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.graphql_url = graphql_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._headers = {
            "Authorization": build_basic_auth_header(f"{api_key}:{api_password}"),
            "Content-Type": "application/json",
        }

    def execute(self, query: str, variables: Optional[dict] = None) -> dict[str, Any]:
        """
        Run one GraphQL operation.

        Args:
            query: GraphQL document
            variables: Operation variables

        Returns:
            Decoded response body (may contain "errors")

        Raises:
            CatalogThrottledError: On HTTP 429
            CatalogRequestError: On transport failure or other non-2xx status
            CatalogResponseError: If the body is not a JSON object
        """
        try:
            response = self.session.post(
                self.graphql_url,
                json={"query": query, "variables": variables or {}},
                headers=self._headers,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise CatalogRequestError(
                f"Catalog request failed: {e}",
                details={"error_type": type(e).__name__}
            ) from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            try:
                retry_after = float(retry_after) if retry_after else None
            except ValueError:
                retry_after = None
            raise CatalogThrottledError(retry_after=retry_after)

        if not response.ok:
            raise CatalogRequestError(
                f"Catalog returned HTTP {response.status_code}",
                status_code=response.status_code,
                details={"body": response.text[:500]}
            )

        try:
            body = response.json()
        except ValueError as e:
            raise CatalogResponseError("Catalog response is not JSON") from e

        if not isinstance(body, dict):
            raise CatalogResponseError(
                "Catalog response is not an object",
                details={"payload_type": type(body).__name__}
            )

        return body

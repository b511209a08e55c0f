"""
Custom exception classes for the sync job.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "SUPPLIER_FEED_ERROR")
        message: Human-readable message
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to log/report format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ConfigurationError(AppError):
    """A setting required for the selected feature is missing."""

    def __init__(self, setting: str, message: Optional[str] = None):
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=message or f"Missing required setting: {setting}",
            details={"setting": setting}
        )


class ExternalServiceError(AppError):
    """External service failure."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            details={"service": service, **(details or {})}
        )


# ===================
# SUPPLIER ERRORS
# ===================

class SupplierFeedError(ExternalServiceError):
    """Supplier feed could not be read or parsed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(service="supplier", message=message, details=details)


# ===================
# CATALOG ERRORS
# ===================

class CatalogRequestError(ExternalServiceError):
    """Catalog call failed at the transport or HTTP level."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict] = None
    ):
        self.status_code = status_code
        super().__init__(
            service="catalog",
            message=message,
            details={"status_code": status_code, **(details or {})}
        )


class CatalogThrottledError(CatalogRequestError):
    """Catalog rejected the call for exceeding its rate budget (HTTP 429)."""

    def __init__(self, retry_after: Optional[float] = None):
        self.retry_after = retry_after
        super().__init__(
            message="Catalog request throttled",
            status_code=429,
            details={"retry_after": retry_after}
        )


class CatalogResponseError(ExternalServiceError):
    """Catalog returned a payload of unexpected shape."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(service="catalog", message=message, details=details)


# ===================
# NOTIFICATION ERRORS
# ===================

class NotificationError(ExternalServiceError):
    """Unmatched-SKU report could not be delivered."""

    def __init__(self, channel: str, message: str):
        super().__init__(
            service="notification",
            message=message,
            details={"channel": channel}
        )

"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ConfigurationError,
    ExternalServiceError,

    # Supplier
    SupplierFeedError,

    # Catalog
    CatalogRequestError,
    CatalogThrottledError,
    CatalogResponseError,

    # Notifications
    NotificationError,
)

__all__ = [
    # Base
    "AppError",
    "ConfigurationError",
    "ExternalServiceError",

    # Supplier
    "SupplierFeedError",

    # Catalog
    "CatalogRequestError",
    "CatalogThrottledError",
    "CatalogResponseError",

    # Notifications
    "NotificationError",
]

"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Settings are read once at process start and handed to components
explicitly; business logic never reads the environment itself.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional

from models.catalog import CatalogSelector, ProductStatus


DEFAULT_EXEMPT_SKUS = [
    "this product keeps track of images 1",
    "this product keeps track of images 2",
]


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPPLIER FEED
    # ===================
    supplier_api_url: str = Field(
        ...,
        description="Supplier inventory endpoint"
    )
    supplier_api_key: str = Field(
        ...,
        description="Pre-shared supplier key (base64-encoded into a Basic header)"
    )

    # ===================
    # SHOPIFY
    # ===================
    shopify_shop_name: str = Field(
        ...,
        description="Shop subdomain (<name>.myshopify.com)"
    )
    shopify_api_key: str = Field(..., description="Admin API key")
    shopify_api_password: str = Field(..., description="Admin API password")
    shopify_location_id: str = Field(
        ...,
        description="Location GID that receives inventory adjustments"
    )
    shopify_api_version: str = Field(
        default="2023-10",
        pattern=r"^\d{4}-\d{2}$",
        description="Admin GraphQL API version"
    )

    # ===================
    # CATALOG SELECTOR
    # ===================
    catalog_vendor: str = Field(
        default="TR-AU",
        min_length=1,
        description="Only products from this vendor are reconciled"
    )
    catalog_status: ProductStatus = Field(
        default=ProductStatus.ACTIVE,
        description="Lifecycle status a product must have"
    )
    catalog_require_published: bool = Field(
        default=True,
        description="Require publication on the current sales channel"
    )
    catalog_page_size: int = Field(
        default=100,
        ge=1,
        le=250,
        description="Products per catalog page"
    )
    exempt_skus: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXEMPT_SKUS),
        description="Catalog SKUs never reported as unmatched"
    )

    # ===================
    # RATE LIMITING
    # ===================
    throttle_target_capacity: float = Field(
        default=101,
        gt=0,
        description="Capacity to wait for when the response omits its query cost"
    )
    throttle_restore_rate: float = Field(
        default=100,
        gt=0,
        description="Points restored per second when the response omits it"
    )
    max_throttle_retries: Optional[int] = Field(
        None,
        ge=0,
        description="Give up on a page after this many throttled attempts (unbounded if unset)"
    )
    max_throttle_wait_seconds: Optional[float] = Field(
        None,
        gt=0,
        description="Give up on a page after waiting this long (unbounded if unset)"
    )
    post_batch_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pause after each non-empty adjustment batch"
    )
    request_timeout_seconds: float = Field(
        default=30,
        gt=0,
        description="HTTP timeout for upstream calls"
    )

    # ===================
    # NOTIFICATIONS
    # ===================
    notification_channel: str = Field(
        default="email",
        pattern="^(email|telegram|log)$",
        description="Where unmatched SKUs are reported"
    )
    email_host: str = Field(default="smtp.gmail.com")
    email_port: int = Field(default=465, ge=1, le=65535)
    email_user: Optional[str] = Field(None, description="SMTP login / sender")
    email_pass: Optional[str] = Field(None, description="SMTP password")
    email_to: Optional[str] = Field(None, description="Report recipient")
    telegram_bot_token: Optional[str] = Field(
        None,
        description="Telegram bot token from @BotFather"
    )
    telegram_chat_id: Optional[str] = Field(
        None,
        description="Telegram chat ID for reports"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def graphql_url(self) -> str:
        """Admin GraphQL endpoint for the configured shop."""
        return (
            f"https://{self.shopify_shop_name}.myshopify.com"
            f"/admin/api/{self.shopify_api_version}/graphql.json"
        )

    @property
    def catalog_selector(self) -> CatalogSelector:
        """Filter a product must pass to be reconciled."""
        return CatalogSelector(
            vendor=self.catalog_vendor,
            status=self.catalog_status,
            require_published=self.catalog_require_published,
        )

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_pass and self.email_to)

    @property
    def telegram_configured(self) -> bool:
        """Check if Telegram is properly configured."""
        return bool(self.telegram_bot_token and self.telegram_chat_id)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()

"""
Unit tests for Settings.
"""

import pytest
from pydantic import ValidationError

from config.settings import DEFAULT_EXEMPT_SKUS, Settings
from models import ProductStatus

REQUIRED_ENV = {
    "SUPPLIER_API_URL": "https://supplier.example.com/inventory",
    "SUPPLIER_API_KEY": "k",
    "SHOPIFY_SHOP_NAME": "demo-shop",
    "SHOPIFY_API_KEY": "key",
    "SHOPIFY_API_PASSWORD": "pass",
    "SHOPIFY_LOCATION_ID": "gid://shopify/Location/1",
}


@pytest.fixture
def env(monkeypatch):
    """Required settings present in the environment."""
    for name, value in REQUIRED_ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


class TestSettings:
    """Tests for defaults and derived values."""

    def test_defaults(self, env):
        settings = Settings(_env_file=None)

        assert settings.catalog_vendor == "TR-AU"
        assert settings.catalog_status == ProductStatus.ACTIVE
        assert settings.catalog_page_size == 100
        assert settings.exempt_skus == DEFAULT_EXEMPT_SKUS
        assert settings.post_batch_delay_seconds == 1.0
        assert settings.max_throttle_retries is None
        assert settings.max_throttle_wait_seconds is None

    def test_graphql_url(self, env):
        settings = Settings(_env_file=None)

        assert settings.graphql_url == (
            "https://demo-shop.myshopify.com/admin/api/2023-10/graphql.json"
        )

    def test_catalog_selector(self, env):
        env.setenv("CATALOG_VENDOR", "ACME")
        env.setenv("CATALOG_REQUIRE_PUBLISHED", "false")

        selector = Settings(_env_file=None).catalog_selector

        assert selector.vendor == "ACME"
        assert selector.require_published is False

    def test_exempt_skus_from_json(self, env):
        env.setenv("EXEMPT_SKUS", '["IMG-1", "IMG-2", "IMG-3"]')

        assert Settings(_env_file=None).exempt_skus == ["IMG-1", "IMG-2", "IMG-3"]

    def test_throttle_ceilings(self, env):
        env.setenv("MAX_THROTTLE_RETRIES", "10")
        env.setenv("MAX_THROTTLE_WAIT_SECONDS", "120")

        settings = Settings(_env_file=None)

        assert settings.max_throttle_retries == 10
        assert settings.max_throttle_wait_seconds == 120

    def test_missing_required(self, monkeypatch):
        for name in REQUIRED_ENV:
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_page_size(self, env):
        env.setenv("CATALOG_PAGE_SIZE", "500")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

"""
Unit tests for the catalog, supplier and adjustment models.
"""

import pytest
from pydantic import ValidationError

from models import (
    AdjustmentOutcome,
    CatalogPage,
    PageCursor,
    ProductStatus,
    SupplierRecord,
)
from tests.factories import CatalogVariantFactory


# ===================
# CATALOG
# ===================

class TestCatalogSelectorMatches:
    """Tests for the local selector re-check."""

    def test_eligible(self, selector):
        assert selector.matches(CatalogVariantFactory.create()) is True

    @pytest.mark.parametrize("overrides", [
        {"vendor": "OTHER"},
        {"product_status": ProductStatus.ARCHIVED},
        {"product_status": None},
        {"is_published": False},
    ])
    def test_ineligible(self, selector, overrides):
        assert selector.matches(CatalogVariantFactory.create(**overrides)) is False


class TestCatalogPage:
    """Tests for CatalogPage."""

    def test_terminal_page(self):
        page = CatalogPage.terminal()

        assert page.items == []
        assert page.has_more is False

    def test_has_more_follows_cursor(self):
        assert CatalogPage(next_cursor=PageCursor(token="x")).has_more is True
        assert CatalogPage(next_cursor=PageCursor(token="x", has_more=False)).has_more is False


# ===================
# SUPPLIER
# ===================

class TestSupplierRecord:
    """Tests for SupplierRecord."""

    @pytest.mark.parametrize("quantity,expected", [
        (0, 0), (2.9, 2), (2, 2), (0.5, 0), (-0.5, -1),
    ])
    def test_whole_quantity_floors(self, quantity, expected):
        assert SupplierRecord(sku="A", quantity=quantity).whole_quantity == expected

    @pytest.mark.parametrize("quantity", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError):
            SupplierRecord(sku="A", quantity=quantity)


# ===================
# ADJUSTMENT
# ===================

class TestAdjustmentOutcome:
    """Tests for AdjustmentOutcome."""

    def test_ok_without_errors(self):
        assert AdjustmentOutcome(requested=2, applied=2).ok is True

    def test_not_ok_with_errors(self):
        assert AdjustmentOutcome(requested=2, errors=["rejected"]).ok is False

"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import MagicMock

from models import CatalogSelector, ProductStatus, SupplierRecord, build_supplier_index
from services.events import EventHook, EventRecorder


# ===================
# EVENTS
# ===================

@pytest.fixture
def recorder() -> EventRecorder:
    """Listener capturing every emitted event."""
    return EventRecorder()


@pytest.fixture
def events(recorder) -> EventHook:
    """Event hook wired to the recorder."""
    return EventHook(listeners=[recorder])


# ===================
# CATALOG
# ===================

@pytest.fixture
def selector() -> CatalogSelector:
    """Default vendor/active/published selector."""
    return CatalogSelector(vendor="TR-AU", status=ProductStatus.ACTIVE, require_published=True)


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock ShopifyGraphQLClient."""
    return MagicMock()


@pytest.fixture
def mock_sleep() -> MagicMock:
    """Stand-in for time.sleep."""
    return MagicMock()


# ===================
# SUPPLIER
# ===================

@pytest.fixture
def sample_supplier_records() -> list[SupplierRecord]:
    """Supplier feed from the reference scenario."""
    return [
        SupplierRecord(sku="A1", quantity=0),
        SupplierRecord(sku="A2", quantity=5),
        SupplierRecord(sku="A3", quantity=10),
    ]


@pytest.fixture
def sample_supplier_index(sample_supplier_records) -> dict[str, SupplierRecord]:
    return build_supplier_index(sample_supplier_records)

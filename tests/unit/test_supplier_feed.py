"""
Unit tests for the supplier feed reader.

The reader fails closed: every failure yields an empty list.
"""

import base64
from unittest.mock import MagicMock
import pytest
import requests

from integrations.supplier_feed import SupplierFeedReader, parse_supplier_payload
from integrations.auth import build_basic_auth_header
from models import SupplierRecord, SyncEventType
from exceptions import SupplierFeedError

URL = "https://supplier.example.com/api/inventory"


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_session():
    """Mock requests.Session."""
    return MagicMock()


@pytest.fixture
def reader(mock_session, events):
    return SupplierFeedReader(url=URL, api_key="secret-key", events=events, session=mock_session)


def respond_with(mock_session, payload):
    response = MagicMock()
    response.json.return_value = payload
    mock_session.get.return_value = response
    return response


# ===================
# PARSING
# ===================

class TestParseSupplierPayload:
    """Tests for parse_supplier_payload."""

    def test_tuple_rows(self):
        records = parse_supplier_payload({"inventory": [["A1", 0], ["A2", 5.5]]})

        assert records == [
            SupplierRecord(sku="A1", quantity=0),
            SupplierRecord(sku="A2", quantity=5.5),
        ]

    def test_object_rows(self):
        records = parse_supplier_payload({"inventory": [{"sku": "A1", "quantity": 3}]})

        assert records == [SupplierRecord(sku="A1", quantity=3)]

    def test_missing_inventory_is_empty(self):
        assert parse_supplier_payload({}) == []

    @pytest.mark.parametrize("payload", [
        [],
        {"inventory": "nope"},
        {"inventory": [["A1"]]},
        {"inventory": [[None, 3]]},
        {"inventory": [["A1", None]]},
        {"inventory": [["A1", "lots"]]},
        {"inventory": [["A1", True]]},
        {"inventory": [["A1", float("nan")]]},
        {"inventory": [["A1", float("inf")]]},
        {"inventory": [{"sku": "A1", "quantity": float("-inf")}]},
    ])
    def test_malformed_payloads_raise(self, payload):
        with pytest.raises(SupplierFeedError):
            parse_supplier_payload(payload)


# ===================
# FETCH
# ===================

class TestFetch:
    """Tests for fetch."""

    def test_returns_records(self, reader, mock_session, recorder):
        respond_with(mock_session, {"inventory": [["A1", 0], ["A2", 5]]})

        records = reader.fetch()

        assert [r.sku for r in records] == ["A1", "A2"]
        assert recorder.events == []

    def test_sends_basic_auth(self, reader, mock_session):
        respond_with(mock_session, {"inventory": []})

        reader.fetch()

        headers = mock_session.get.call_args.kwargs["headers"]
        expected = base64.b64encode(b"secret-key").decode("ascii")
        assert headers["Authorization"] == f"Basic {expected}"
        assert headers["Content-Type"] == "application/json"

    def test_transport_failure_returns_empty(self, reader, mock_session, recorder):
        mock_session.get.side_effect = requests.exceptions.ConnectionError("refused")

        assert reader.fetch() == []
        assert len(recorder.of_type(SyncEventType.SUPPLIER_FEED_UNAVAILABLE)) == 1

    def test_http_error_returns_empty(self, reader, mock_session, recorder):
        response = respond_with(mock_session, {})
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("401 Unauthorized")

        assert reader.fetch() == []
        assert len(recorder.of_type(SyncEventType.SUPPLIER_FEED_UNAVAILABLE)) == 1

    def test_non_json_returns_empty(self, reader, mock_session, recorder):
        response = respond_with(mock_session, None)
        response.json.side_effect = ValueError("Expecting value")

        assert reader.fetch() == []
        assert len(recorder.of_type(SyncEventType.SUPPLIER_FEED_UNAVAILABLE)) == 1

    def test_one_bad_row_discards_whole_feed(self, reader, mock_session, recorder):
        respond_with(mock_session, {"inventory": [["A1", 3], ["A2"]]})

        assert reader.fetch() == []
        events = recorder.of_type(SyncEventType.SUPPLIER_FEED_UNAVAILABLE)
        assert events[0].details["row"] == 1

    def test_non_finite_quantity_discards_whole_feed(self, reader, mock_session, recorder):
        respond_with(mock_session, {"inventory": [["A1", 3], ["A2", float("nan")]]})

        assert reader.fetch() == []
        events = recorder.of_type(SyncEventType.SUPPLIER_FEED_UNAVAILABLE)
        assert events[0].details["row"] == 1


class TestBasicAuthHeader:
    """Tests for build_basic_auth_header."""

    def test_user_password_pair(self):
        header = build_basic_auth_header("key:pass")

        assert header == "Basic a2V5OnBhc3M="

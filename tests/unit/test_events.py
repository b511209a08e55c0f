"""
Unit tests for the event hook.
"""

from services.events import EventHook, EventRecorder
from models import SyncEventType


class TestEventHook:
    """Tests for EventHook."""

    def test_dispatches_to_every_listener(self):
        first, second = EventRecorder(), EventRecorder()
        hook = EventHook(listeners=[first])
        hook.subscribe(second)

        event = hook.emit(SyncEventType.CATALOG_PAGE_DEGRADED, "gave up", cursor="c1")

        assert first.events == [event]
        assert second.events == [event]
        assert event.details == {"cursor": "c1"}
        assert event.message == "gave up"

    def test_emit_without_listeners(self):
        event = EventHook().emit(SyncEventType.NOTIFICATION_FAILED, "smtp down")

        assert event.type == SyncEventType.NOTIFICATION_FAILED

    def test_recorder_filters_by_type(self, events, recorder):
        events.emit(SyncEventType.CATALOG_THROTTLED, "wait")
        events.emit(SyncEventType.CATALOG_THROTTLED, "wait")
        events.emit(SyncEventType.ADJUSTMENT_USER_ERRORS, "rejected")

        assert len(recorder.of_type(SyncEventType.CATALOG_THROTTLED)) == 2
        assert len(recorder.of_type(SyncEventType.SUPPLIER_FEED_UNAVAILABLE)) == 0

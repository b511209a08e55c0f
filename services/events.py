"""
Observability hook for absorbed failures.

Every error the sync job swallows is emitted here instead of disappearing:
it is logged through structlog and handed to any subscribed listener, so
callers (and tests) can see degraded paths without scraping console output.
"""

from typing import Callable, Optional
import structlog

from models.sync import SyncEvent, SyncEventType

logger = structlog.get_logger(__name__)

EventListener = Callable[[SyncEvent], None]

# Events that mean work was lost are errors; the rest are expected noise
_ERROR_EVENTS = {
    SyncEventType.SUPPLIER_FEED_UNAVAILABLE,
    SyncEventType.ADJUSTMENT_REQUEST_FAILED,
    SyncEventType.NOTIFICATION_FAILED,
}
_INFO_EVENTS = {
    SyncEventType.CATALOG_THROTTLED,
}


class EventHook:
    """Fan-out point for sync events."""

    def __init__(self, listeners: Optional[list[EventListener]] = None):
        self._listeners: list[EventListener] = list(listeners or [])

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def emit(self, event_type: SyncEventType, message: str, **details) -> SyncEvent:
        """
        Record one event.

        Args:
            event_type: What happened
            message: Human-readable summary
            **details: Structured context (also logged)

        Returns:
            The event that was dispatched
        """
        event = SyncEvent(type=event_type, message=message, details=details)

        if event_type in _ERROR_EVENTS:
            log = logger.error
        elif event_type in _INFO_EVENTS:
            log = logger.info
        else:
            log = logger.warning
        log(event_type.value.lower(), message=message, **details)

        for listener in self._listeners:
            listener(event)

        return event


class EventRecorder:
    """Listener that keeps every event it receives."""

    def __init__(self):
        self.events: list[SyncEvent] = []

    def __call__(self, event: SyncEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: SyncEventType) -> list[SyncEvent]:
        return [e for e in self.events if e.type == event_type]

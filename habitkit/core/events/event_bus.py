"""Simple in-process event bus."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from habitkit.core.events.event_models import EventRecord

logger = logging.getLogger(__name__)

EventHandler = Callable[[EventRecord], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.setdefault(event_type, [])
        handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: EventRecord) -> None:
        for handler in self._subscribers.get(event.event_type, []):
            handler(event)

    def emit(self, event_type: str, payload: Optional[Dict[str, Any]] = None) -> EventRecord:
        """Build an EventRecord and publish it synchronously."""
        event = EventRecord(event_type=event_type, payload=dict(payload or {}))
        logger.debug("event %s %s", event_type, event.payload)
        self.publish(event)
        return event

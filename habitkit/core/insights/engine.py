"""Insights engine: event notifications and report-driven recommendations."""

from __future__ import annotations

import logging
from collections import deque
from threading import Lock
from typing import TYPE_CHECKING, List, Optional

from habitkit.core.events.event_bus import EventBus
from habitkit.core.events.event_models import EventRecord
from habitkit.core.insights.rules import habit_rules
from habitkit.domains.habits.events import (
    HABITS_HABIT_COMPLETED,
    HABITS_HABIT_CREATED,
    HABITS_HABIT_DELETED,
    HABITS_HABIT_UPDATED,
)

if TYPE_CHECKING:
    from habitkit.domains.habits.services.analytics import AnalyticsReport

logger = logging.getLogger(__name__)

EVENT_RULES = [
    ("habit_rules.notify", habit_rules.notify),
]

REPORT_RULES = [
    ("habit_rules", habit_rules.apply_rules),
]

SUBSCRIBED_EVENTS = (
    HABITS_HABIT_CREATED,
    HABITS_HABIT_UPDATED,
    HABITS_HABIT_COMPLETED,
    HABITS_HABIT_DELETED,
)


class InsightsEngine:
    def __init__(self, bus: EventBus, feed_size: int = 50) -> None:
        self._lock = Lock()
        self._feed: deque = deque(maxlen=feed_size)
        for event_type in SUBSCRIBED_EVENTS:
            bus.subscribe(event_type, self.ingest_event)

    def ingest_event(self, event: EventRecord) -> List[dict]:
        """Run event rules and append their notices to the feed."""
        notices: List[dict] = []
        for rule_name, rule_fn in EVENT_RULES:
            produced = rule_fn(event) or []
            if produced:
                logger.debug("%s produced %d notices for %s", rule_name, len(produced), event.event_type)
                notices.extend(produced)
        with self._lock:
            for notice in notices:
                self._feed.append({**notice, "at": event.created_at.isoformat()})
        return notices

    def notifications(self, limit: Optional[int] = None) -> List[dict]:
        """Feed entries, newest first."""
        with self._lock:
            items = list(reversed(self._feed))
        return items[:limit] if limit is not None else items

    def clear(self) -> None:
        with self._lock:
            self._feed.clear()

    def summarize(self, report: "AnalyticsReport") -> List[dict]:
        insights: List[dict] = []
        for _rule_name, rule_fn in REPORT_RULES:
            insights.extend(rule_fn(report) or [])
        return insights

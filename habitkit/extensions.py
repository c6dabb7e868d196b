"""Shared in-process services for the habitkit application."""

from __future__ import annotations

from typing import Optional

from flask import Flask, current_app

from habitkit.core.clock import Clock, SystemClock
from habitkit.core.events.event_bus import EventBus
from habitkit.core.insights.engine import InsightsEngine
from habitkit.domains.habits.models import Account
from habitkit.domains.habits.services import HabitRegistry


def init_extensions(app: Flask, clock: Optional[Clock] = None) -> None:
    """Build the clock, event bus, registry and insights engine for one app."""
    clock = clock or SystemClock()
    bus = EventBus()
    # subscribe before the registry exists so seeding notices land in the feed
    insights = InsightsEngine(bus, feed_size=app.config["NOTIFICATION_FEED_SIZE"])
    registry = HabitRegistry(
        clock=clock,
        account=Account(name=app.config["ACCOUNT_NAME"], join_date=clock.today()),
        bus=bus,
        lookback=app.config["STREAK_LOOKBACK_DAYS"],
    )
    app.extensions["clock"] = clock
    app.extensions["event_bus"] = bus
    app.extensions["insights_engine"] = insights
    app.extensions["habit_registry"] = registry


def get_registry() -> HabitRegistry:
    return current_app.extensions["habit_registry"]


def get_insights() -> InsightsEngine:
    return current_app.extensions["insights_engine"]

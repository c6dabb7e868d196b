import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from habitkit import create_app
from habitkit.core.clock import FixedClock
from habitkit.core.events.event_bus import EventBus
from habitkit.domains.habits.services import HabitRegistry

# A Wednesday, so the current Mon-Sun week has days on both sides of today.
TODAY = date(2024, 5, 15)


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (app, API)")


@pytest.fixture()
def clock():
    return FixedClock(TODAY)


@pytest.fixture()
def bus():
    return EventBus()


@pytest.fixture()
def registry(clock, bus):
    """A fresh registry on the fixed clock."""
    return HabitRegistry(clock=clock, bus=bus)


@pytest.fixture()
def app(clock):
    """Per-test app; every app owns its own in-memory registry."""
    app = create_app("testing", clock=clock)
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()

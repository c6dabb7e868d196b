import pytest

pytestmark = pytest.mark.integration

from habitkit import create_app
from habitkit.config import TestingConfig, config_by_name
from habitkit.core.clock import Clock, SystemClock
from habitkit.domains.habits.models import Entry


def test_config_lookup():
    assert config_by_name["ci"] is TestingConfig
    app = create_app("unknown-env")
    assert app.config["DEBUG"] is True


def test_testing_config_values(app):
    assert app.config["STREAK_LOOKBACK_DAYS"] == 30
    assert app.config["NOTIFICATION_FEED_SIZE"] == 50
    assert app.extensions["habit_registry"].lookback == 30


def test_duplicate_entries_surface_as_500(app, client, clock):
    registry = app.extensions["habit_registry"]
    habit = registry.create({"name": "Water", "goal": 8, "unit": "glasses"})
    # corrupt the log behind the registry's back
    habit.entries._entries.extend(
        [Entry(date=clock.today(), value=1, completed=False), Entry(date=clock.today(), value=2, completed=False)]
    )

    resp = client.get(f"/api/habits/{habit.id}")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "invariant_violation"


def test_unknown_route_is_json(client):
    resp = client.get("/api/habits/not-a-number")

    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False


def test_clocks_share_one_interface(app, clock):
    assert isinstance(clock, Clock)
    assert isinstance(SystemClock(), Clock)
    assert isinstance(app.extensions["habit_registry"].clock, Clock)
    assert not isinstance(object(), Clock)

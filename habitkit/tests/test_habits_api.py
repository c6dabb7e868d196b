"""Habits API tests.

Covers the JSON endpoints of the habits, analytics and insights blueprints:
- GET/POST /api/habits
- GET/PATCH/DELETE /api/habits/<id>
- POST /api/habits/<id>/entries|increment|complete|select
- GET /api/habits/<id>/weekly|trend, /api/habits/active, /api/habits/pending
- GET /api/analytics/summary|overview, /api/insights/notifications
"""

from __future__ import annotations

from datetime import timedelta

import pytest

pytestmark = pytest.mark.integration


# ==================== Helpers ====================


def _create(client, **overrides):
    payload = {"name": "Water", "icon": "💧", "goal": 8, "unit": "glasses", "category": "health"}
    payload.update(overrides)
    resp = client.post("/api/habits", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["habit"]


def _record(client, habit_id, value):
    return client.post(f"/api/habits/{habit_id}/entries", json={"value": value})


# ==================== Create / List ====================


class TestCreateAndList:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_json() == {"ok": True}

    def test_create_returns_summary(self, client):
        habit = _create(client)

        assert habit["id"] == 1
        assert habit["name"] == "Water"
        assert habit["category"] == "health"
        assert habit["step"] == 1
        assert habit["current_streak"] == 0
        assert habit["completed_today"] is False
        assert habit["progress_level"] == "behind"

    def test_create_validation_error(self, client):
        resp = client.post("/api/habits", json={"name": "", "goal": 8, "unit": "glasses"})

        assert resp.status_code == 400
        body = resp.get_json()
        assert body["ok"] is False
        assert body["error"] == "validation_error"
        assert body["details"][0]["loc"] == ["name"]

    def test_create_without_body(self, client):
        resp = client.post("/api/habits")
        assert resp.status_code == 400

    def test_create_with_seeded_entries(self, client, clock):
        yesterday = clock.today() - timedelta(days=1)
        before = yesterday - timedelta(days=1)
        habit = _create(
            client,
            entries=[
                {"logged_date": yesterday.isoformat(), "value": 8},
                {"logged_date": before.isoformat(), "value": 10},
            ],
        )

        assert habit["current_streak"] == 2
        assert habit["longest_streak"] == 2

    def test_future_seed_rejected(self, client, clock):
        tomorrow = clock.today() + timedelta(days=1)
        resp = client.post(
            "/api/habits",
            json={
                "name": "Water",
                "goal": 8,
                "unit": "glasses",
                "entries": [{"logged_date": tomorrow.isoformat(), "value": 8}],
            },
        )

        assert resp.status_code == 400
        assert client.get("/api/habits").get_json()["habits"] == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Water", "goal": True, "unit": "glasses"},
            {
                "name": "Water",
                "goal": 8,
                "unit": "glasses",
                "entries": [{"logged_date": "2024-05-14", "value": True}],
            },
        ],
    )
    def test_create_rejects_boolean_numbers(self, client, payload):
        resp = client.post("/api/habits", json=payload)

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "validation_error"
        assert client.get("/api/habits").get_json()["habits"] == []

    def test_patch_rejects_boolean_goal(self, client):
        habit = _create(client)

        resp = client.patch(f"/api/habits/{habit['id']}", json={"goal": True})

        assert resp.status_code == 400
        assert client.get(f"/api/habits/{habit['id']}").get_json()["habit"]["goal"] == 8

    def test_seed_timestamps_truncate_to_day(self, client, clock):
        yesterday = clock.today() - timedelta(days=1)
        habit = _create(client, entries=[{"logged_date": f"{yesterday.isoformat()}T22:45:00", "value": 8}])

        detail = client.get(f"/api/habits/{habit['id']}").get_json()["habit"]

        assert detail["entries"][0]["logged_date"] == yesterday.isoformat()
        assert detail["current_streak"] == 1

    def test_list_filters(self, client):
        _create(client)
        _create(client, name="Deep Work", goal=2, unit="hours", category="productivity")

        all_habits = client.get("/api/habits?category=all").get_json()["habits"]
        assert [h["name"] for h in all_habits] == ["Water", "Deep Work"]

        filtered = client.get("/api/habits?category=productivity").get_json()["habits"]
        assert [h["name"] for h in filtered] == ["Deep Work"]

        searched = client.get("/api/habits?q=wat").get_json()["habits"]
        assert [h["name"] for h in searched] == ["Water"]

    def test_list_unknown_category(self, client):
        resp = client.get("/api/habits?category=sports")
        assert resp.status_code == 400


# ==================== Detail / Edit / Delete ====================


class TestHabitDetail:
    def test_detail_includes_stats_and_entries(self, client, clock):
        habit = _create(client)
        _record(client, habit["id"], 8)

        resp = client.get(f"/api/habits/{habit['id']}")

        assert resp.status_code == 200
        data = resp.get_json()["habit"]
        assert data["stats"] == {
            "total_entries": 1,
            "completed_entries": 1,
            "best_run": 1,
            "last_logged_date": clock.today().isoformat(),
        }
        assert data["entries"] == [
            {"logged_date": clock.today().isoformat(), "value": 8.0, "completed": True}
        ]

    def test_unknown_habit_404(self, client):
        resp = client.get("/api/habits/99")

        assert resp.status_code == 404
        assert resp.get_json()["error"] == "not_found"

    def test_patch_updates_fields(self, client):
        habit = _create(client)

        resp = client.patch(f"/api/habits/{habit['id']}", json={"name": "Drink Water", "goal": 10})

        assert resp.status_code == 200
        assert resp.get_json()["habit"]["name"] == "Drink Water"
        assert resp.get_json()["habit"]["goal"] == 10

    def test_patch_rejects_empty_name(self, client):
        habit = _create(client)

        resp = client.patch(f"/api/habits/{habit['id']}", json={"name": "  "})

        assert resp.status_code == 400

    def test_patch_unknown_habit(self, client):
        resp = client.patch("/api/habits/5", json={"name": "Nope"})
        assert resp.status_code == 404

    def test_delete(self, client):
        habit = _create(client)

        assert client.delete(f"/api/habits/{habit['id']}").status_code == 200
        assert client.get(f"/api/habits/{habit['id']}").status_code == 404
        assert client.delete(f"/api/habits/{habit['id']}").status_code == 404


# ==================== Entries ====================


class TestEntries:
    def test_record_completes(self, client):
        habit = _create(client)

        resp = _record(client, habit["id"], 8)

        assert resp.status_code == 200
        data = resp.get_json()["habit"]
        assert data["today_value"] == 8
        assert data["completed_today"] is True
        assert data["progress"] == 100

    def test_record_invalid_value(self, client):
        habit = _create(client)

        assert _record(client, habit["id"], "lots").status_code == 400
        assert client.post(f"/api/habits/{habit['id']}/entries", json={}).status_code == 400

    def test_record_negative_clamps(self, client):
        habit = _create(client)

        data = _record(client, habit["id"], -4).get_json()["habit"]

        assert data["today_value"] == 0

    def test_boolean_value_rejected(self, client):
        habit = _create(client)

        resp = _record(client, habit["id"], True)

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "validation_error"
        detail = client.get(f"/api/habits/{habit['id']}").get_json()["habit"]
        assert detail["entries"] == []
        account = client.get("/api/analytics/summary").get_json()["account"]
        assert account["total_habits_completed"] == 0

    def test_boolean_steps_rejected(self, client):
        habit = _create(client)

        resp = client.post(f"/api/habits/{habit['id']}/increment", json={"steps": True})

        assert resp.status_code == 400

    def test_increment_hours(self, client):
        habit = _create(client, name="Sleep", unit="hours")

        client.post(f"/api/habits/{habit['id']}/increment", json={"steps": 3})
        data = client.post(f"/api/habits/{habit['id']}/increment").get_json()["habit"]

        assert data["step"] == 0.5
        assert data["today_value"] == 2.0

    def test_complete(self, client):
        habit = _create(client)

        data = client.post(f"/api/habits/{habit['id']}/complete").get_json()["habit"]

        assert data["completed_today"] is True
        assert data["today_value"] == 8

    def test_weekly_and_trend(self, client):
        habit = _create(client)
        _record(client, habit["id"], 4)

        weekly = client.get(f"/api/habits/{habit['id']}/weekly").get_json()
        assert weekly["weekly_completion"] == 0
        assert len(weekly["chart"]) == 7

        trend = client.get(f"/api/habits/{habit['id']}/trend").get_json()
        assert trend["unit"] == "glasses"
        assert [p["value"] for p in trend["trend"]] == [4]

    def test_pending(self, client):
        water = _create(client)
        _create(client, name="Read", unit="pages", goal=10)
        _record(client, water["id"], 8)

        data = client.get("/api/habits/pending").get_json()

        assert data["count"] == 1
        assert data["habits"][0]["name"] == "Read"


# ==================== Active Habit ====================


class TestActiveHabit:
    def test_empty_state(self, client):
        resp = client.get("/api/habits/active")
        assert resp.get_json() == {"ok": True, "habit": None}

    def test_select_then_delete(self, client):
        habit = _create(client)

        selected = client.post(f"/api/habits/{habit['id']}/select")
        assert selected.status_code == 200
        assert client.get("/api/habits/active").get_json()["habit"]["id"] == habit["id"]

        client.delete(f"/api/habits/{habit['id']}")

        resp = client.get("/api/habits/active")
        assert resp.status_code == 200
        assert resp.get_json()["habit"] is None

    def test_select_unknown(self, client):
        assert client.post("/api/habits/12/select").status_code == 404


# ==================== Analytics / Insights ====================


class TestAnalyticsApi:
    def test_account_summary(self, client, clock):
        habit = _create(client)
        _record(client, habit["id"], 8)

        account = client.get("/api/analytics/summary").get_json()["account"]

        assert account["name"] == "Habit Tracker"
        assert account["join_date"] == clock.today().isoformat()
        assert account["total_habits_completed"] == 1
        assert account["current_streak"] == 0

    def test_overview(self, client, clock):
        yesterday = (clock.today() - timedelta(days=1)).isoformat()
        _create(client, entries=[{"logged_date": yesterday, "value": 8}])
        _create(client, name="Read", goal=10, unit="pages", category="self-care",
                entries=[{"logged_date": yesterday, "value": 2}])

        body = client.get("/api/analytics/overview").get_json()

        report = body["report"]
        assert report["overall_completion"] == 50
        assert report["band"] == "good"
        assert report["categories"] == {"health": 1, "self-care": 1}
        assert report["most_consistent"]["name"] == "Water"
        assert report["needs_improvement"]["name"] == "Read"
        types = [i["type"] for i in body["insights"]]
        assert types == ["consistency", "goal_setting", "streak_champion", "overall_completion"]

    def test_overview_without_habits(self, client):
        body = client.get("/api/analytics/overview").get_json()

        assert body["report"]["overall_completion"] == 0
        assert len(body["insights"]) == 3

    def test_notifications_feed(self, client):
        habit = _create(client)
        _record(client, habit["id"], 8)

        notices = client.get("/api/insights/notifications").get_json()["notifications"]
        assert [n["type"] for n in notices] == ["habit_completed", "habit_created"]

        limited = client.get("/api/insights/notifications?limit=1").get_json()["notifications"]
        assert len(limited) == 1

    def test_notifications_bad_limit(self, client):
        assert client.get("/api/insights/notifications?limit=0").status_code == 400

"""Habits JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from datetime import date

from flask import Blueprint, jsonify, request

from habitkit.core.utils.validation import validate_payload
from habitkit.domains.habits.models import Habit
from habitkit.domains.habits.schemas.habit_schemas import (
    AdjustRequest,
    EntryCreate,
    EntryResponse,
    HabitDetailResponse,
    HabitListQuery,
    HabitSummaryResponse,
)
from habitkit.domains.habits.services import analytics
from habitkit.domains.habits.streaks import best_run
from habitkit.extensions import get_registry

habit_api_bp = Blueprint("habit_api", __name__)


def _summary_fields(habit: Habit, today: date) -> dict:
    return dict(
        id=habit.id,
        name=habit.name,
        icon=habit.icon,
        goal=habit.goal,
        unit=habit.unit,
        category=habit.category,
        color=habit.color,
        step=habit.step,
        current_streak=habit.current_streak,
        longest_streak=habit.longest_streak,
        today_value=habit.today_value(today),
        completed_today=habit.completed_today(today),
        progress=habit.progress(today),
        progress_level=habit.progress_level(today),
        weekly_completion=analytics.weekly_completion_rate(habit, today),
    )


def _summary(habit: Habit, today: date) -> dict:
    return HabitSummaryResponse(**_summary_fields(habit, today)).model_dump(mode="json")


def _detail(habit: Habit, today: date) -> dict:
    entries = habit.entries.chronological()
    resp = HabitDetailResponse(
        **_summary_fields(habit, today),
        stats={
            "total_entries": len(entries),
            "completed_entries": sum(1 for e in entries if e.completed),
            "best_run": best_run(habit.entries),
            "last_logged_date": entries[-1].date.isoformat() if entries else None,
        },
        entries=[
            EntryResponse(logged_date=e.date, value=e.value, completed=e.completed) for e in entries
        ],
    )
    return resp.model_dump(mode="json")


@habit_api_bp.get("")
def list_habits():
    query = validate_payload(HabitListQuery, request.args.to_dict())
    registry = get_registry()
    with registry.snapshot() as today:
        habits = registry.list(category=query.category, search=query.q)
        return jsonify({"ok": True, "habits": [_summary(h, today) for h in habits]})


@habit_api_bp.post("")
def create_habit():
    payload = request.get_json(silent=True) or {}
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.create(payload)
        return jsonify({"ok": True, "habit": _summary(habit, today)}), 201


@habit_api_bp.get("/active")
def active_habit():
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.active_habit()
        if habit is None:
            return jsonify({"ok": True, "habit": None})
        return jsonify({"ok": True, "habit": _detail(habit, today)})


@habit_api_bp.get("/pending")
def pending_habits():
    registry = get_registry()
    with registry.snapshot() as today:
        habits = registry.pending_today()
        return jsonify({"ok": True, "count": len(habits), "habits": [_summary(h, today) for h in habits]})


@habit_api_bp.get("/<int:habit_id>")
def habit_detail(habit_id: int):
    registry = get_registry()
    with registry.snapshot() as today:
        return jsonify({"ok": True, "habit": _detail(registry.get(habit_id), today)})


@habit_api_bp.patch("/<int:habit_id>")
def update_habit(habit_id: int):
    payload = request.get_json(silent=True) or {}
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.update(habit_id, payload)
        return jsonify({"ok": True, "habit": _summary(habit, today)})


@habit_api_bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    get_registry().remove(habit_id)
    return jsonify({"ok": True})


@habit_api_bp.post("/<int:habit_id>/entries")
def record_entry(habit_id: int):
    data = validate_payload(EntryCreate, request.get_json(silent=True))
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.record(habit_id, data.value)
        return jsonify({"ok": True, "habit": _summary(habit, today)})


@habit_api_bp.post("/<int:habit_id>/increment")
def increment_entry(habit_id: int):
    data = validate_payload(AdjustRequest, request.get_json(silent=True))
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.adjust(habit_id, data.steps)
        return jsonify({"ok": True, "habit": _summary(habit, today)})


@habit_api_bp.post("/<int:habit_id>/complete")
def complete_habit(habit_id: int):
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.complete_today(habit_id)
        return jsonify({"ok": True, "habit": _summary(habit, today)})


@habit_api_bp.get("/<int:habit_id>/weekly")
def weekly_overview(habit_id: int):
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.get(habit_id)
        return jsonify(
            {
                "ok": True,
                "habit_id": habit.id,
                "weekly_completion": analytics.weekly_completion_rate(habit, today),
                "chart": analytics.weekly_chart(habit, today),
            }
        )


@habit_api_bp.get("/<int:habit_id>/trend")
def habit_trend(habit_id: int):
    registry = get_registry()
    with registry.snapshot():
        habit = registry.get(habit_id)
        return jsonify({"ok": True, "habit_id": habit.id, "unit": habit.unit, "trend": analytics.trend(habit)})


@habit_api_bp.post("/<int:habit_id>/select")
def select_habit(habit_id: int):
    registry = get_registry()
    with registry.snapshot() as today:
        habit = registry.select(habit_id)
        return jsonify({"ok": True, "habit": _detail(habit, today)})

"""Habits domain event catalog."""

from __future__ import annotations

HABITS_HABIT_CREATED = "habits.habit.created"
HABITS_HABIT_UPDATED = "habits.habit.updated"
HABITS_HABIT_LOGGED = "habits.habit.logged"
HABITS_HABIT_COMPLETED = "habits.habit.completed"
HABITS_HABIT_DELETED = "habits.habit.deleted"

EVENT_CATALOG = {
    HABITS_HABIT_CREATED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "name": "str",
            "category": "str",
            "goal": "float",
            "unit": "str",
            "seeded_entries": "int",
        },
    },
    HABITS_HABIT_UPDATED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "fields": "dict",
        },
    },
    HABITS_HABIT_LOGGED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "name": "str",
            "logged_date": "date",
            "value": "float",
            "completed": "bool",
            "streak": "int",
        },
    },
    HABITS_HABIT_COMPLETED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "name": "str",
            "logged_date": "date",
            "total_habits_completed": "int",
        },
    },
    HABITS_HABIT_DELETED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "name": "str",
            "was_active": "bool",
        },
    },
}

__all__ = [
    "EVENT_CATALOG",
    "HABITS_HABIT_CREATED",
    "HABITS_HABIT_UPDATED",
    "HABITS_HABIT_LOGGED",
    "HABITS_HABIT_COMPLETED",
    "HABITS_HABIT_DELETED",
]

"""Habit rules for consistency, goal-setting and streak insights."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from habitkit.core.events.event_models import EventRecord
from habitkit.domains.habits.events import (
    HABITS_HABIT_COMPLETED,
    HABITS_HABIT_CREATED,
    HABITS_HABIT_DELETED,
    HABITS_HABIT_UPDATED,
)

if TYPE_CHECKING:
    from habitkit.domains.habits.services.analytics import AnalyticsReport

LOW_COMPLETION_THRESHOLD = 50

BAND_MESSAGES = {
    "excellent": "Excellent! You're consistently completing your habits.",
    "good": "Good progress, but there's room for improvement.",
    "building": "Keep working on building consistency with your habits.",
}


def apply_rules(report: "AnalyticsReport") -> List[dict]:
    """Fixed decision table over the computed statistics."""
    if not report.rates:
        return [
            _insight("consistency", "Add habits to see consistency analysis."),
            _insight("goal_setting", "Add habits to get goal setting recommendations."),
            _insight("streak_champion", "Track your habits to build streaks."),
        ]

    insights: List[dict] = []

    best = report.most_consistent
    insights.append(
        _insight(
            "consistency",
            f"Your most consistent habit is {best.name} with {best.rate}% completion rate. "
            "Try to apply the same discipline to your other habits.",
            context={"habit_id": best.habit_id, "rate": best.rate},
        )
    )

    struggling = [r for r in report.rates if r.rate < LOW_COMPLETION_THRESHOLD]
    if struggling:
        target = struggling[0]
        insights.append(
            _insight(
                "goal_setting",
                f"Consider adjusting your goals for {target.name} to make them more achievable. "
                "Small wins build momentum.",
                severity="warning",
                context={"habit_id": target.habit_id, "rate": target.rate},
            )
        )
    else:
        insights.append(
            _insight(
                "goal_setting",
                "Your goals seem well-balanced. Consider increasing the challenge "
                "for habits you consistently complete.",
            )
        )

    leader = report.streak_leader
    insights.append(
        _insight(
            "streak_champion",
            f"Your longest streak overall is {report.account.longest_streak} days! "
            f"The habit with the current longest individual streak is {leader.name} "
            f"({leader.current_streak} days). Keep the momentum going!",
            context={"habit_id": leader.habit_id, "streak": leader.current_streak},
        )
    )

    insights.append(
        _insight(
            "overall_completion",
            BAND_MESSAGES[report.band],
            severity="info" if report.band != "building" else "warning",
            context={"rate": report.overall_completion},
        )
    )
    return insights


def notify(event: EventRecord) -> List[dict]:
    """Short user-facing notices for habit lifecycle events."""
    name = event.payload.get("name")
    if event.event_type == HABITS_HABIT_COMPLETED:
        return [
            _insight(
                "habit_completed",
                f"🎉 Great job! You've completed your {name} goal!",
                severity="success",
                context=event.payload,
            )
        ]
    if event.event_type == HABITS_HABIT_CREATED:
        return [_insight("habit_created", f'New habit "{name}" added successfully!', context=event.payload)]
    if event.event_type == HABITS_HABIT_UPDATED:
        return [_insight("habit_updated", f'Habit "{name}" updated successfully!', context=event.payload)]
    if event.event_type == HABITS_HABIT_DELETED:
        return [_insight("habit_deleted", "Habit deleted successfully", context=event.payload)]
    return []


def _insight(kind: str, message: str, severity: str = "info", context: dict | None = None) -> dict:
    return {
        "type": kind,
        "message": message,
        "severity": severity,
        "context": dict(context or {}),
    }

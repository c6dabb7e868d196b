"""Completion statistics derived from the current habit set.

Everything here is a pure function of the habits passed in and ``today``.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from habitkit.core.utils.numbers import percentage, round_half_up
from habitkit.domains.habits.models import AccountSummary, Habit

WEEK_DAYS = 7
TREND_DAYS = 14
DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def weekly_completion_rate(habit: Habit, today: date) -> int:
    """Percent of entries in the trailing week that met the goal."""
    recent = habit.entries.window(today - timedelta(days=WEEK_DAYS), today)
    if not recent:
        return 0
    return percentage(sum(1 for entry in recent if entry.completed), len(recent))


def overall_completion_rate(habits: Iterable[Habit], today: date) -> int:
    rates = [weekly_completion_rate(habit, today) for habit in habits]
    if not rates:
        return 0
    return round_half_up(sum(rates) / len(rates))


def category_breakdown(habits: Iterable[Habit]) -> Dict[str, int]:
    return dict(Counter(habit.category.value for habit in habits))


def most_consistent(habits: Iterable[Habit], today: date) -> Optional[Habit]:
    best: Optional[Habit] = None
    best_rate = -1
    for habit in habits:
        rate = weekly_completion_rate(habit, today)
        if rate > best_rate:
            best, best_rate = habit, rate
    return best


def needs_improvement(habits: Iterable[Habit], today: date) -> Optional[Habit]:
    worst: Optional[Habit] = None
    worst_rate = 101
    for habit in habits:
        rate = weekly_completion_rate(habit, today)
        if rate < worst_rate:
            worst, worst_rate = habit, rate
    return worst


def streak_leader(habits: Iterable[Habit]) -> Optional[Habit]:
    leader: Optional[Habit] = None
    for habit in habits:
        if leader is None or habit.current_streak > leader.current_streak:
            leader = habit
    return leader


def weekly_chart(habit: Habit, today: date) -> List[Dict[str, Any]]:
    """Monday-to-Sunday values for the current week, 0 where nothing was logged."""
    monday = today - timedelta(days=today.weekday())
    index = habit.entries.by_date()
    series = []
    for offset, label in enumerate(DAY_LABELS):
        day = monday + timedelta(days=offset)
        entry = index.get(day)
        series.append(
            {
                "day": label,
                "date": day.isoformat(),
                "value": entry.value if entry else 0,
                "goal": habit.goal,
            }
        )
    return series


def trend(habit: Habit, days: int = TREND_DAYS) -> List[Dict[str, Any]]:
    return [
        {"date": entry.date.isoformat(), "value": entry.value}
        for entry in habit.entries.latest(days)
    ]


def completion_band(rate: int) -> str:
    if rate >= 80:
        return "excellent"
    if rate >= 50:
        return "good"
    return "building"


@dataclass(frozen=True)
class HabitRate:
    habit_id: int
    name: str
    icon: str
    rate: int
    current_streak: int

    @classmethod
    def of(cls, habit: Habit, today: date) -> "HabitRate":
        return cls(
            habit_id=habit.id,
            name=habit.name,
            icon=habit.icon,
            rate=weekly_completion_rate(habit, today),
            current_streak=habit.current_streak,
        )


@dataclass(frozen=True)
class AnalyticsReport:
    today: date
    overall_completion: int
    band: str
    account: AccountSummary
    categories: Dict[str, int] = field(default_factory=dict)
    rates: List[HabitRate] = field(default_factory=list)
    most_consistent: Optional[HabitRate] = None
    needs_improvement: Optional[HabitRate] = None
    streak_leader: Optional[HabitRate] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["today"] = self.today.isoformat()
        return data


def build_report(habits: Sequence[Habit], account: AccountSummary, today: date) -> AnalyticsReport:
    habits = list(habits)
    by_id = {habit.id: HabitRate.of(habit, today) for habit in habits}

    def _rate(habit: Optional[Habit]) -> Optional[HabitRate]:
        return by_id[habit.id] if habit is not None else None

    overall = overall_completion_rate(habits, today)
    return AnalyticsReport(
        today=today,
        overall_completion=overall,
        band=completion_band(overall),
        account=account,
        categories=category_breakdown(habits),
        rates=list(by_id.values()),
        most_consistent=_rate(most_consistent(habits, today)),
        needs_improvement=_rate(needs_improvement(habits, today)),
        streak_leader=_rate(streak_leader(habits)),
    )


__all__ = [
    "AnalyticsReport",
    "HabitRate",
    "build_report",
    "category_breakdown",
    "completion_band",
    "most_consistent",
    "needs_improvement",
    "overall_completion_rate",
    "streak_leader",
    "trend",
    "weekly_chart",
    "weekly_completion_rate",
]

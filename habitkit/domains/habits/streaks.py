"""Consecutive-day streak calculations.

Streaks walk backward from *yesterday*: today's entry is still open, so it
neither extends nor breaks the streak until the day has closed.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from habitkit.domains.habits.models.entry_log import EntryLog

LOOKBACK_DAYS = 30


def current_streak(log: EntryLog, today: date, lookback: int = LOOKBACK_DAYS) -> int:
    """Count completed days in a row ending yesterday, up to ``lookback`` days."""
    index = log.by_date()
    streak = 0
    cursor = today - timedelta(days=1)
    while streak < lookback:
        entry = index.get(cursor)
        if entry is None or not entry.completed:
            break
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def account_streak(
    logs: Iterable[EntryLog], today: date, lookback: int = LOOKBACK_DAYS
) -> int:
    """Like ``current_streak`` but a day counts when any habit completed it."""
    completed_days = set()
    for log in logs:
        completed_days.update(day for day, entry in log.by_date().items() if entry.completed)

    streak = 0
    cursor = today - timedelta(days=1)
    while streak < lookback and cursor in completed_days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def best_run(log: EntryLog) -> int:
    """Longest run of consecutive completed days anywhere in the log."""
    days: List[date] = sorted(day for day, entry in log.by_date().items() if entry.completed)
    best = 0
    run = 0
    previous = None
    for day in days:
        if previous is not None and day == previous + timedelta(days=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = day
    return best


__all__ = ["LOOKBACK_DAYS", "current_streak", "account_streak", "best_run"]

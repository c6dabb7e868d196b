"""Habit services: the registry that owns every habit and keeps streaks current."""

from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, List, Mapping, Optional

from habitkit.core.clock import Clock, SystemClock
from habitkit.core.errors import NotFoundError
from habitkit.core.events.event_bus import EventBus
from habitkit.core.utils.validation import require_number, validate_payload
from habitkit.domains.habits.events import (
    HABITS_HABIT_COMPLETED,
    HABITS_HABIT_CREATED,
    HABITS_HABIT_DELETED,
    HABITS_HABIT_LOGGED,
    HABITS_HABIT_UPDATED,
)
from habitkit.domains.habits.models import Account, AccountSummary, EntryLog, Habit, HabitCategory
from habitkit.domains.habits.schemas.habit_schemas import HabitCreate, HabitUpdate
from habitkit.domains.habits.services.analytics import AnalyticsReport, build_report
from habitkit.domains.habits.streaks import LOOKBACK_DAYS

logger = logging.getLogger(__name__)


class HabitRegistry:
    """All habits of one account, in insertion order.

    Every public operation runs under one re-entrant lock and finishes its
    streak and account recomputation before returning. Validation happens
    before any mutation, so a failed call leaves the registry untouched.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        account: Optional[Account] = None,
        bus: Optional[EventBus] = None,
        lookback: int = LOOKBACK_DAYS,
    ) -> None:
        self.clock = clock or SystemClock()
        self.account = account or Account(join_date=self.clock.today())
        self.bus = bus or EventBus()
        self.lookback = lookback
        self.active_habit_id: Optional[int] = None
        self._habits: Dict[int, Habit] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()
        self._computed_for: Optional[date] = None

    # ----- reads -----

    def __len__(self) -> int:
        return len(self._habits)

    def __contains__(self, habit_id: object) -> bool:
        return habit_id in self._habits

    def __iter__(self) -> Iterator[Habit]:
        return iter(self.habits())

    def today(self) -> date:
        with self._lock:
            return self._today()

    def habits(self) -> List[Habit]:
        with self._lock:
            self._today()
            return list(self._habits.values())

    def get(self, habit_id: int) -> Habit:
        with self._lock:
            self._today()
            return self._get(habit_id)

    def list(
        self, category: Optional[str | HabitCategory] = None, search: Optional[str] = None
    ) -> List[Habit]:
        """Habits in insertion order, filtered by exact category and name substring."""
        if isinstance(category, HabitCategory):
            category = category.value
        if category == "all":
            category = None
        needle = (search or "").strip().lower()
        with self._lock:
            self._today()
            return [
                habit
                for habit in self._habits.values()
                if (category is None or habit.category.value == category)
                and needle in habit.name.lower()
            ]

    def pending_today(self) -> List[Habit]:
        """Habits whose entry for today is missing or below goal."""
        with self._lock:
            today = self._today()
            return [h for h in self._habits.values() if not h.completed_today(today)]

    def account_summary(self) -> AccountSummary:
        with self._lock:
            self._today()
            return self.account.summary()

    def active_habit(self) -> Optional[Habit]:
        """The habit the presentation layer is viewing, or None once it is gone."""
        with self._lock:
            self._today()
            if self.active_habit_id is None:
                return None
            return self._habits.get(self.active_habit_id)

    @contextmanager
    def snapshot(self) -> Iterator[date]:
        """Hold the lock while the caller reads habits; yields today.

        No mutation can interleave with reads made inside the block.
        """
        with self._lock:
            yield self._today()

    def report(self) -> AnalyticsReport:
        """Analytics over every habit, computed from one consistent state."""
        with self._lock:
            today = self._today()
            return build_report(list(self._habits.values()), self.account.summary(), today)

    # ----- mutations -----

    def create(self, payload: HabitCreate | Mapping[str, Any]) -> Habit:
        data = validate_payload(HabitCreate, payload)
        with self._lock:
            today = self._today()
            entries = EntryLog.seeded(
                ((seed.logged_date, seed.value) for seed in data.entries), data.goal, today
            )
            habit = Habit(
                id=next(self._ids),
                name=data.name,
                icon=data.icon,
                goal=data.goal,
                unit=data.unit,
                category=data.category,
                color=data.color,
                entries=entries,
                created_on=today,
            )
            habit.recompute(today, self.lookback)
            self._habits[habit.id] = habit
            self._recompute_account(today)
            logger.info("Created habit %s (%s) with %d seeded entries", habit.id, habit.name, len(entries))
            self.bus.emit(
                HABITS_HABIT_CREATED,
                {
                    "habit_id": habit.id,
                    "name": habit.name,
                    "category": habit.category.value,
                    "goal": habit.goal,
                    "unit": habit.unit,
                    "seeded_entries": len(entries),
                },
            )
            return habit

    def record(self, habit_id: int, value: Any) -> Habit:
        """Write today's value for a habit and recompute habit and account state."""
        number = max(0.0, require_number(value))
        with self._lock:
            today = self._today()
            habit = self._get(habit_id)
            entry, was_completed = habit.apply_entry(number, today, self.lookback)
            self._recompute_account(today)
            credited = not was_completed and self.account.credit(entry)
            logger.debug(
                "Recorded %s for habit %s on %s (completed=%s)",
                number,
                habit_id,
                today.isoformat(),
                entry.completed,
            )
            self.bus.emit(
                HABITS_HABIT_LOGGED,
                {
                    "habit_id": habit.id,
                    "name": habit.name,
                    "logged_date": today.isoformat(),
                    "value": entry.value,
                    "completed": entry.completed,
                    "streak": habit.current_streak,
                },
            )
            if credited:
                logger.info("Habit %s completed for %s", habit.id, today.isoformat())
                self.bus.emit(
                    HABITS_HABIT_COMPLETED,
                    {
                        "habit_id": habit.id,
                        "name": habit.name,
                        "logged_date": today.isoformat(),
                        "total_habits_completed": self.account.total_habits_completed,
                    },
                )
            return habit

    def adjust(self, habit_id: int, steps: Any = 1) -> Habit:
        """Move today's value by ``steps`` increments of the habit's step, floored at 0."""
        count = require_number(steps, "steps")
        with self._lock:
            today = self._today()
            habit = self._get(habit_id)
            value = max(0.0, habit.today_value(today) + count * habit.step)
            return self.record(habit_id, value)

    def complete_today(self, habit_id: int) -> Habit:
        with self._lock:
            habit = self.get(habit_id)
            return self.record(habit_id, habit.goal)

    def update(self, habit_id: int, fields: HabitUpdate | Mapping[str, Any]) -> Habit:
        data = validate_payload(HabitUpdate, fields)
        with self._lock:
            self._today()
            habit = self._get(habit_id)
            changed = habit.edit(**data.changes())
            if changed:
                logger.info("Updated habit %s: %s", habit.id, sorted(changed))
                self.bus.emit(
                    HABITS_HABIT_UPDATED,
                    {"habit_id": habit.id, "name": habit.name, "fields": changed},
                )
            return habit

    def remove(self, habit_id: int) -> None:
        with self._lock:
            today = self._today()
            habit = self._get(habit_id)
            del self._habits[habit_id]
            was_active = self.active_habit_id == habit_id
            if was_active:
                self.active_habit_id = None
            self._recompute_account(today)
            logger.info("Removed habit %s (%s)", habit.id, habit.name)
            self.bus.emit(
                HABITS_HABIT_DELETED,
                {"habit_id": habit.id, "name": habit.name, "was_active": was_active},
            )

    def select(self, habit_id: int) -> Habit:
        with self._lock:
            habit = self.get(habit_id)
            self.active_habit_id = habit.id
            return habit

    def clear_selection(self) -> None:
        with self._lock:
            self.active_habit_id = None

    # ----- internals -----

    def _get(self, habit_id: int) -> Habit:
        habit = self._habits.get(habit_id)
        if habit is None:
            raise NotFoundError(habit_id)
        return habit

    def _today(self) -> date:
        # caches computed on a previous day are stale once the day rolls over
        today = self.clock.today()
        if today != self._computed_for:
            for habit in self._habits.values():
                habit.recompute(today, self.lookback)
            self._recompute_account(today)
        return today

    def _recompute_account(self, today: date) -> None:
        self.account.recompute((h.entries for h in self._habits.values()), today, self.lookback)
        self._computed_for = today


__all__ = ["HabitRegistry"]

"""Habit and account records with cached streak values."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple

from habitkit.core.utils.numbers import percentage
from habitkit.domains.habits.models.entry_log import Entry, EntryLog
from habitkit.domains.habits.streaks import LOOKBACK_DAYS, account_streak, current_streak

DEFAULT_ICON = "✅"
DEFAULT_COLOR = "#3B82F6"
# units tracked in fractional amounts step by half a unit
FRACTIONAL_UNITS = {"hours"}


class HabitCategory(str, Enum):
    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    SELF_CARE = "self-care"
    FITNESS = "fitness"


@dataclass
class Habit:
    id: int
    name: str
    goal: float
    unit: str
    icon: str = DEFAULT_ICON
    category: HabitCategory = HabitCategory.HEALTH
    color: str = DEFAULT_COLOR
    entries: EntryLog = field(default_factory=EntryLog)
    current_streak: int = 0
    longest_streak: int = 0
    created_on: Optional[date] = None

    EDITABLE_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "icon", "goal", "unit", "category", "color")

    @property
    def step(self) -> float:
        return 0.5 if self.unit.strip().lower() in FRACTIONAL_UNITS else 1

    def recompute(self, today: date, lookback: int = LOOKBACK_DAYS) -> int:
        """Refresh the cached streaks. The only writer of those fields."""
        self.current_streak = current_streak(self.entries, today, lookback)
        self.longest_streak = max(self.longest_streak, self.current_streak)
        return self.current_streak

    def apply_entry(
        self, value: float, today: date, lookback: int = LOOKBACK_DAYS
    ) -> Tuple[Entry, bool]:
        """Record today's value and recompute streaks.

        Returns the entry and whether it was completed *before* this write.
        """
        existing = self.entries.entry_for(today)
        was_completed = bool(existing and existing.completed)
        entry = self.entries.record_today(value, self.goal, today)
        self.recompute(today, lookback)
        return entry, was_completed

    def edit(self, **fields: Any) -> Dict[str, Any]:
        """Update identity/display fields. Historical completion is left as recorded."""
        changed: Dict[str, Any] = {}
        for key in self.EDITABLE_FIELDS:
            if key not in fields or fields[key] is None:
                continue
            value = fields[key]
            if key == "category":
                value = HabitCategory(value)
            if getattr(self, key) != value:
                setattr(self, key, value)
                changed[key] = value.value if isinstance(value, HabitCategory) else value
        return changed

    def today_entry(self, today: date) -> Optional[Entry]:
        return self.entries.entry_for(today)

    def today_value(self, today: date) -> float:
        entry = self.today_entry(today)
        return entry.value if entry else 0

    def completed_today(self, today: date) -> bool:
        entry = self.today_entry(today)
        return bool(entry and entry.completed)

    def progress(self, today: date) -> int:
        """Today's value as a percentage of goal, capped at 100."""
        return min(100, percentage(self.today_value(today), self.goal))

    def progress_level(self, today: date) -> str:
        ratio = self.today_value(today) / self.goal * 100
        if ratio >= 100:
            return "complete"
        if ratio >= 70:
            return "close"
        return "behind"


@dataclass(frozen=True)
class AccountSummary:
    current_streak: int
    longest_streak: int
    total_habits_completed: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class Account:
    name: str = "Habit Tracker"
    join_date: date = field(default_factory=date.today)
    total_habits_completed: int = 0
    current_streak: int = 0
    longest_streak: int = 0

    def recompute(
        self, logs: Iterable[EntryLog], today: date, lookback: int = LOOKBACK_DAYS
    ) -> int:
        self.current_streak = account_streak(logs, today, lookback)
        self.longest_streak = max(self.longest_streak, self.current_streak)
        return self.current_streak

    def credit(self, entry: Entry) -> bool:
        """Count a completed day once; later re-completions of the same entry are ignored."""
        if not entry.completed or entry.credited:
            return False
        entry.credited = True
        self.total_habits_completed += 1
        return True

    def summary(self) -> AccountSummary:
        return AccountSummary(
            current_streak=self.current_streak,
            longest_streak=self.longest_streak,
            total_habits_completed=self.total_habits_completed,
        )

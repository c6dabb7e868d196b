from habitkit.domains.habits.models.entry_log import Entry, EntryLog, as_day
from habitkit.domains.habits.models.habit_models import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    Account,
    AccountSummary,
    Habit,
    HabitCategory,
)

__all__ = [
    "Account",
    "AccountSummary",
    "DEFAULT_COLOR",
    "DEFAULT_ICON",
    "Entry",
    "EntryLog",
    "Habit",
    "HabitCategory",
    "as_day",
]

"""Daily entry log for a single habit."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from habitkit.core.errors import InvariantViolation, ValidationError


@dataclass
class Entry:
    """One day's measurement. ``completed`` is derived from value and goal."""

    date: date
    value: float
    completed: bool
    # set once this day has added to the account completion counter
    credited: bool = False


def as_day(value: date | datetime | str) -> date:
    """Normalise a date, datetime or ISO string to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text).date() if "T" in text else date.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"invalid date: {value!r}") from None
    raise ValidationError(f"invalid date: {value!r}")


class EntryLog:
    """Entries for one habit, at most one per calendar day.

    Storage order is not significant; every lookup goes by calendar day.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: List[Entry] = list(entries)

    @classmethod
    def seeded(
        cls, seed: Iterable[Tuple[date | datetime | str, float]], goal: float, today: date
    ) -> "EntryLog":
        """Build a log from (day, value) pairs, rejecting duplicate or future days."""
        entries: List[Entry] = []
        seen: set[date] = set()
        for raw_day, raw_value in seed:
            day = as_day(raw_day)
            if day > today:
                raise ValidationError(f"entry for {day.isoformat()} is in the future")
            if day in seen:
                raise ValidationError(f"duplicate entry for {day.isoformat()}")
            value = float(raw_value)
            if value < 0:
                raise ValidationError("entry values must be non-negative")
            seen.add(day)
            completed = value >= goal
            entries.append(Entry(date=day, value=value, completed=completed, credited=completed))
        return cls(entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entry_for(self, day: date) -> Optional[Entry]:
        matches = [entry for entry in self._entries if entry.date == day]
        if len(matches) > 1:
            raise InvariantViolation(f"{len(matches)} entries found for {day.isoformat()}")
        return matches[0] if matches else None

    def by_date(self) -> Dict[date, Entry]:
        index: Dict[date, Entry] = {}
        for entry in self._entries:
            if entry.date in index:
                raise InvariantViolation(f"duplicate entries found for {entry.date.isoformat()}")
            index[entry.date] = entry
        return index

    def record_today(self, value: float, goal: float, today: date) -> Entry:
        """Upsert today's entry and re-derive its completion against ``goal``."""
        entry = self.entry_for(today)
        completed = value >= goal
        if entry is None:
            entry = Entry(date=today, value=value, completed=completed)
            self._entries.append(entry)
        else:
            entry.value = value
            entry.completed = completed
        return entry

    def window(self, start_exclusive: date, end_inclusive: date) -> List[Entry]:
        return [e for e in self._entries if start_exclusive < e.date <= end_inclusive]

    def chronological(self) -> List[Entry]:
        return sorted(self._entries, key=lambda e: e.date)

    def latest(self, count: int) -> List[Entry]:
        if count <= 0:
            return []
        return self.chronological()[-count:]

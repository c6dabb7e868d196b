"""Clock capability supplying "today" to the habit core."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Anything that can say which calendar day it is."""

    def today(self) -> date: ...


class SystemClock:
    """Reads the local calendar day from the system clock."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a given day; tests move it with ``advance``/``set``."""

    def __init__(self, day: Optional[date] = None) -> None:
        self._day = _as_date(day or date.today())

    def today(self) -> date:
        return self._day

    def set(self, day: date) -> None:
        self._day = _as_date(day)

    def advance(self, days: int = 1) -> date:
        self._day = self._day + timedelta(days=days)
        return self._day


def _as_date(value: date) -> date:
    # datetime is a date subclass; keep only the calendar day
    if isinstance(value, datetime):
        return value.date()
    return value


__all__ = ["Clock", "SystemClock", "FixedClock"]

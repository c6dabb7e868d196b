"""Error taxonomy shared by the habit core and its controllers."""

from __future__ import annotations

from typing import Any, Optional


class HabitError(Exception):
    """Base error; ``code`` is the machine-readable string sent to clients."""

    code = "habit_error"

    def __init__(self, message: Optional[str] = None, *, details: Any = None) -> None:
        super().__init__(message or self.code)
        self.details = details


class ValidationError(HabitError, ValueError):
    """Missing or invalid fields on create/edit/record. Caller re-prompts."""

    code = "validation_error"


class NotFoundError(HabitError, LookupError):
    """The referenced habit id is no longer in the registry."""

    code = "not_found"

    def __init__(self, habit_id: Any = None, message: Optional[str] = None) -> None:
        super().__init__(message or f"habit {habit_id} not found")
        self.habit_id = habit_id


class InvariantViolation(HabitError, RuntimeError):
    """Internal state broke a core invariant (e.g. two entries for one day)."""

    code = "invariant_violation"


__all__ = ["HabitError", "ValidationError", "NotFoundError", "InvariantViolation"]

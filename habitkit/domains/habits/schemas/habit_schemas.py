"""Habit DTOs and schemas."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from habitkit.domains.habits.models import DEFAULT_COLOR, DEFAULT_ICON, HabitCategory, as_day


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


class EntrySeed(BaseModel):
    logged_date: date
    value: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("logged_date", mode="before")
    @classmethod
    def _calendar_day(cls, value: Any) -> Any:
        return as_day(value)

    @field_validator("value", mode="before")
    @classmethod
    def _numeric_value(cls, value: Any) -> Any:
        return _reject_bool(value)


class HabitCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=255)
    icon: str = Field(default=DEFAULT_ICON, max_length=16)
    goal: float = Field(gt=0, allow_inf_nan=False)
    unit: str = Field(min_length=1, max_length=64)
    category: HabitCategory = HabitCategory.HEALTH
    color: str = Field(default=DEFAULT_COLOR, max_length=32)
    entries: List[EntrySeed] = Field(default_factory=list)

    @field_validator("goal", mode="before")
    @classmethod
    def _numeric_goal(cls, value: Any) -> Any:
        return _reject_bool(value)

    @field_validator("name", "unit", mode="before")
    @classmethod
    def _strip_required(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("icon", mode="before")
    @classmethod
    def _default_icon(cls, value: Any) -> Any:
        return _strip(value) or DEFAULT_ICON

    @field_validator("color", mode="before")
    @classmethod
    def _default_color(cls, value: Any) -> Any:
        return _strip(value) or DEFAULT_COLOR


class HabitUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    icon: Optional[str] = Field(default=None, min_length=1, max_length=16)
    goal: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    unit: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category: Optional[HabitCategory] = None
    color: Optional[str] = Field(default=None, min_length=1, max_length=32)

    @field_validator("goal", mode="before")
    @classmethod
    def _numeric_goal(cls, value: Any) -> Any:
        return _reject_bool(value)

    @field_validator("name", "icon", "unit", "color", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return _strip(value)

    def changes(self) -> Dict[str, Any]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


class EntryCreate(BaseModel):
    value: float = Field(allow_inf_nan=False)

    @field_validator("value", mode="before")
    @classmethod
    def _numeric_value(cls, value: Any) -> Any:
        return _reject_bool(value)


class AdjustRequest(BaseModel):
    steps: int = 1

    @field_validator("steps", mode="before")
    @classmethod
    def _numeric_steps(cls, value: Any) -> Any:
        return _reject_bool(value)


class HabitListQuery(BaseModel):
    category: Optional[str] = None
    q: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> Any:
        value = _strip(value)
        if not value or value == "all":
            return None
        if value not in {c.value for c in HabitCategory}:
            raise ValueError("invalid_category")
        return value


class EntryResponse(BaseModel):
    logged_date: date
    value: float
    completed: bool


class HabitSummaryResponse(BaseModel):
    id: int
    name: str
    icon: str
    goal: float
    unit: str
    category: HabitCategory
    color: str
    step: float
    current_streak: int
    longest_streak: int
    today_value: float
    completed_today: bool
    progress: int
    progress_level: str
    weekly_completion: int


class HabitDetailResponse(HabitSummaryResponse):
    stats: dict
    entries: List[EntryResponse]


class AccountSummaryResponse(BaseModel):
    name: str
    join_date: date
    current_streak: int
    longest_streak: int
    total_habits_completed: int

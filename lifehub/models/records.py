"""
Tracked Record Models for LifeHub

One model per kind of thing the user records. They are designed to:
1. Be immutable once created (frozen)
2. Enforce their invariants at construction time
3. Serialize with the camelCase field names of the saved snapshot

DESIGN DECISION: Records are never edited field-by-field.
A change is a whole new record that replaces the old one in the Store.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


DAYS_PER_WEEK = 7


class FrozenRecord(BaseModel):
    """Shared configuration for every stored model."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """Direction of money movement."""
    INCOME = "income"
    EXPENSE = "expense"


class Mood(str, Enum):
    """Self-reported mood, stored as the emoji the user picked."""
    GREAT = "😀"
    GOOD = "🙂"
    NEUTRAL = "😐"
    LOW = "😕"
    BAD = "😞"


class MealType(str, Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


class Recurrence(str, Enum):
    """How a task comes back after it is completed."""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"


class LifeArea(str, Enum):
    FINANCE = "Finance"
    HEALTH = "Health"
    DIET = "Diet"
    LIFE = "Life"
    CAREER = "Career"


class ReadingStatus(str, Enum):
    FINISHED = "finished"
    CURRENT = "current"
    UPCOMING = "upcoming"


class Habit(str, Enum):
    """Yes/no habits tracked per day of the week. Water is a count, not a habit flag."""
    GYM = "gym"
    SWIM = "swim"
    CALL_FAMILY = "callFamily"


# =============================================================================
# FINANCE
# =============================================================================

class Transaction(FrozenRecord):
    """
    A single income or expense.

    Amounts are always non-negative; the direction lives in `kind`,
    which is saved under the key "type".
    """

    id: str = Field(..., min_length=1)
    date: date
    kind: TransactionKind = Field(..., alias="type")
    category: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., ge=0)
    note: Optional[str] = Field(default=None, max_length=1000)


# =============================================================================
# HEALTH & DIET
# =============================================================================

class HealthEntry(FrozenRecord):
    """A day's health measurements. Every measurement is optional."""

    id: str = Field(..., min_length=1)
    date: date
    weight_kg: Optional[float] = Field(default=None, ge=0)
    sleep_hrs: Optional[float] = Field(default=None, ge=0)
    steps: Optional[int] = Field(default=None, ge=0)
    mood: Optional[Mood] = None


class Meal(FrozenRecord):
    id: str = Field(..., min_length=1)
    date: date
    meal_type: MealType
    name: str = Field(..., min_length=1, max_length=200)
    calories: Optional[float] = Field(default=None, ge=0)


# =============================================================================
# PLANNING, NOTES, READING
# =============================================================================

class Task(FrozenRecord):
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=300)
    due: Optional[date] = None
    done: bool = False
    recur: Recurrence = Recurrence.NONE
    area: Optional[LifeArea] = None


class Note(FrozenRecord):
    id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    pinned: bool = False
    created: datetime


class ReadingItem(FrozenRecord):
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=300)
    status: ReadingStatus = ReadingStatus.UPCOMING


# =============================================================================
# WEEKLY HABITS
# =============================================================================

class WeeklyHabits(FrozenRecord):
    """
    One week of habit tracking.

    Every array holds exactly seven slots, Monday=0 through Sunday=6.
    """

    week_start: date
    gym: tuple[bool, ...] = (False,) * DAYS_PER_WEEK
    swim: tuple[bool, ...] = (False,) * DAYS_PER_WEEK
    water: tuple[int, ...] = (0,) * DAYS_PER_WEEK
    call_family: tuple[bool, ...] = (False,) * DAYS_PER_WEEK

    @field_validator("gym", "swim", "water", "call_family")
    @classmethod
    def validate_week_length(cls, v: tuple) -> tuple:
        if len(v) != DAYS_PER_WEEK:
            raise ValueError(
                f"Habit arrays must have {DAYS_PER_WEEK} entries, got {len(v)}"
            )
        return v

    @field_validator("water")
    @classmethod
    def validate_water_counts(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if any(count < 0 for count in v):
            raise ValueError("Water counts cannot be negative")
        return v

    @classmethod
    def fresh(cls, week_start: date) -> "WeeklyHabits":
        """An empty week starting on the given Monday."""
        return cls(week_start=week_start)

"""
Data Models Package

This package contains all Pydantic models used in LifeHub.
All data flowing through the system must conform to these schemas.
"""

from lifehub.models.records import (
    DAYS_PER_WEEK,
    Habit,
    HealthEntry,
    LifeArea,
    Meal,
    MealType,
    Mood,
    Note,
    ReadingItem,
    ReadingStatus,
    Recurrence,
    Task,
    Transaction,
    TransactionKind,
    WeeklyHabits,
)
from lifehub.models.store import (
    DEFAULT_BUDGETS,
    DEFAULT_CATEGORIES,
    IdFactory,
    Store,
    new_id,
    start_of_week,
)
from lifehub.models.validation import ValidationIssue, ValidationResult
from lifehub.models.views import (
    BudgetLine,
    EmergencyFundStatus,
    HabitSummary,
    Totals,
)

__all__ = [
    # Records
    "DAYS_PER_WEEK",
    "Habit",
    "HealthEntry",
    "LifeArea",
    "Meal",
    "MealType",
    "Mood",
    "Note",
    "ReadingItem",
    "ReadingStatus",
    "Recurrence",
    "Task",
    "Transaction",
    "TransactionKind",
    "WeeklyHabits",
    # Store
    "DEFAULT_BUDGETS",
    "DEFAULT_CATEGORIES",
    "IdFactory",
    "Store",
    "new_id",
    "start_of_week",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Views
    "BudgetLine",
    "EmergencyFundStatus",
    "HabitSummary",
    "Totals",
]

"""
The Store - one complete snapshot of everything LifeHub tracks.

CRITICAL: A Store is never modified in place.
Every mutation produces a new Store; older snapshots stay valid forever.

Startup builds the first Store by overlaying whatever was persisted
on top of the defaults below. Persisted data is trusted field by field:
one unreadable field (or one unreadable record inside a list) falls back
on its own instead of throwing the whole snapshot away.
"""

from datetime import date, timedelta
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, get_args, get_origin
from uuid import uuid4

from pydantic import Field, ValidationError, field_serializer, field_validator

from lifehub.log import get_logger
from lifehub.models.records import (
    DAYS_PER_WEEK,
    FrozenRecord,
    HealthEntry,
    Meal,
    Note,
    ReadingItem,
    ReadingStatus,
    Task,
    Transaction,
    WeeklyHabits,
)


logger = get_logger(__name__)

IdFactory = Callable[[], str]


def new_id() -> str:
    """Default identifier generator."""
    return str(uuid4())


def start_of_week(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


# =============================================================================
# DEFAULTS
# =============================================================================

# Recommended categories. Transactions may use any category; these are the
# ones every monthly view always reports, in this order.
DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Rent",
    "Food/Grocery",
    "Phone Bill",
    "Transport",
    "Gym",
    "Restaurants",
    "Other",
)

DEFAULT_BUDGETS: dict[str, float] = {
    "Rent": 800,
    "Food/Grocery": 250,
    "Phone Bill": 30,
    "Transport": 80,
    "Gym": 25,
    "Restaurants": 60,
    "Other": 100,
}

DEFAULT_EMERGENCY_FUND_TARGET = 2000.0
DEFAULT_EMERGENCY_FUND_NAME = "Emergency Fund"
DEFAULT_MONTHLY_EXPENSE_BASELINE = 1000.0

STARTER_READING: tuple[tuple[str, ReadingStatus], ...] = (
    ("Clear Thinking", ReadingStatus.FINISHED),
    ("The Psychology of Money", ReadingStatus.FINISHED),
    ("Atomic Habits", ReadingStatus.CURRENT),
    ("Deep Work", ReadingStatus.UPCOMING),
)


class Store(FrozenRecord):
    """
    The single authoritative snapshot.

    Field aliases are the keys of the saved JSON document, so a JSON
    backup can be fed straight back into Store.initial().
    """

    transactions: tuple[Transaction, ...] = Field(default=(), alias="txns")
    health: tuple[HealthEntry, ...] = ()
    meals: tuple[Meal, ...] = ()
    tasks: tuple[Task, ...] = ()
    notes: tuple[Note, ...] = ()

    emergency_fund_target: float = Field(default=DEFAULT_EMERGENCY_FUND_TARGET, ge=0)
    emergency_fund_name: str = Field(default=DEFAULT_EMERGENCY_FUND_NAME, min_length=1)
    emergency_fund_balance: float = Field(default=0.0, ge=0)
    monthly_expense_baseline: float = Field(default=DEFAULT_MONTHLY_EXPENSE_BASELINE, ge=0)

    # Read-only: snapshots share this mapping through model_copy.
    budgets: Mapping[str, float] = Field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_BUDGETS))
    )
    night_shift_mode: bool = True
    weekly_habits: WeeklyHabits
    reading: tuple[ReadingItem, ...] = ()

    @field_validator("budgets")
    @classmethod
    def validate_budgets(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        for category, target in v.items():
            if not category.strip():
                raise ValueError("Budget category cannot be blank")
            if target < 0:
                raise ValueError(f"Budget for {category} cannot be negative")
        return MappingProxyType(dict(v))

    @field_serializer("budgets")
    def serialize_budgets(self, v: Mapping[str, float]) -> dict[str, float]:
        return dict(v)

    @classmethod
    def defaults(cls, today: date, id_factory: Optional[IdFactory] = None) -> "Store":
        """The Store a first-time user starts with."""
        make_id = id_factory or new_id
        return cls(
            weekly_habits=WeeklyHabits.fresh(start_of_week(today)),
            reading=tuple(
                ReadingItem(id=make_id(), title=title, status=status)
                for title, status in STARTER_READING
            ),
        )

    @classmethod
    def initial(
        cls,
        persisted: Optional[Any],
        today: date,
        id_factory: Optional[IdFactory] = None,
    ) -> "Store":
        """
        Build the startup Store from an optional persisted payload.

        Args:
            persisted: Whatever the persistence gateway loaded. Anything
                      that is not a mapping counts as "nothing persisted".
            today: Reference date anchoring the default habit week
            id_factory: Generator for ids of default records

        Returns:
            A complete Store; never raises on bad persisted data
        """
        base = cls.defaults(today, id_factory)
        if persisted is None:
            return base
        if not isinstance(persisted, dict):
            logger.warning(
                "persisted_snapshot_discarded",
                reason="not a mapping",
                payload_type=type(persisted).__name__,
            )
            return base

        updates: dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            key = _persisted_key(persisted, name, field.alias)
            if key is None:
                continue
            raw = persisted[key]

            if name == "weekly_habits":
                updates[name] = _overlay_habits(raw, base.weekly_habits)
                continue

            value = _validate_field(name, raw, base)
            if value is _UNREADABLE:
                continue
            updates[name] = value

        return base.model_copy(update=updates)


# =============================================================================
# TOLERANT LOADING
# =============================================================================

_UNREADABLE = object()


def _persisted_key(persisted: dict, name: str, alias: Optional[str]) -> Optional[str]:
    if alias and alias in persisted:
        return alias
    if name in persisted:
        return name
    return None


def _validate_field(name: str, raw: Any, base: Store) -> Any:
    """Validate one Store field on its own. List fields keep their readable records."""
    annotation = Store.model_fields[name].annotation

    if get_origin(annotation) is tuple:
        if not isinstance(raw, (list, tuple)):
            logger.warning("persisted_field_discarded", field=name, reason="not a list")
            return _UNREADABLE
        record_type = get_args(annotation)[0]
        records = []
        for index, item in enumerate(raw):
            try:
                records.append(record_type.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "persisted_record_discarded",
                    field=name,
                    index=index,
                    error_count=e.error_count(),
                )
        return tuple(records)

    # Validating through the model applies the field's constraints and validators.
    try:
        candidate = Store.model_validate({
            "weekly_habits": base.weekly_habits,
            name: raw,
        })
    except ValidationError as e:
        logger.warning("persisted_field_discarded", field=name, error_count=e.error_count())
        return _UNREADABLE
    return getattr(candidate, name)


def _fit_week(raw: Any, filler: Any) -> Any:
    """Pad or truncate a persisted habit array to seven days."""
    if not isinstance(raw, (list, tuple)):
        return raw
    items = list(raw)[:DAYS_PER_WEEK]
    return items + [filler] * (DAYS_PER_WEEK - len(items))


def _overlay_habits(raw: Any, default: WeeklyHabits) -> WeeklyHabits:
    """Overlay a persisted habits block on the default one, sub-field by sub-field."""
    if not isinstance(raw, dict):
        logger.warning("persisted_field_discarded", field="weekly_habits", reason="not a mapping")
        return default

    fillers = {"gym": False, "swim": False, "water": 0, "call_family": False}
    merged = default
    for name, field in WeeklyHabits.model_fields.items():
        key = _persisted_key(raw, name, field.alias)
        if key is None:
            continue
        value = raw[key]
        if name in fillers:
            value = _fit_week(value, fillers[name])
        try:
            candidate = WeeklyHabits.model_validate(
                {**merged.model_dump(), name: value}
            )
        except ValidationError as e:
            logger.warning(
                "persisted_field_discarded",
                field=f"weekly_habits.{name}",
                error_count=e.error_count(),
            )
            continue
        merged = candidate
    return merged

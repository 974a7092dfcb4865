"""
The Mutator - the only way a Store changes.

Every operation takes the current Store plus the intent's arguments and
returns a NEW Store. The Store passed in is never touched, so a rejected
intent leaves nothing behind and every earlier snapshot stays valid.

GUARANTEES:
- Invalid intents raise ValidationFailedError; no partial changes
- Record ids come from the injected id factory
- "Today" comes from the injected clock
- New records go first (newest-first); the reading list keeps insertion order
"""

from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from lifehub.config import TrackerSettings, get_settings
from lifehub.errors import RecordNotFoundError, ValidationFailedError
from lifehub.models.records import (
    DAYS_PER_WEEK,
    Habit,
    HealthEntry,
    Meal,
    Note,
    ReadingItem,
    ReadingStatus,
    Recurrence,
    Task,
    Transaction,
    TransactionKind,
    WeeklyHabits,
)
from lifehub.models.store import IdFactory, Store, new_id, start_of_week
from lifehub.validation import (
    TransactionDraft,
    TransactionValidator,
    invalid,
    parse_amount,
    parse_date,
    result_from_pydantic,
)


Clock = Callable[[], datetime]

# Field name on WeeklyHabits for each yes/no habit.
_HABIT_FIELDS = {
    Habit.GYM: "gym",
    Habit.SWIM: "swim",
    Habit.CALL_FAMILY: "call_family",
}

_RECURRENCE_STEP = {
    Recurrence.DAILY: timedelta(days=1),
    Recurrence.WEEKLY: timedelta(days=7),
}


def _build(intent: str, model: type, **fields: Any):
    """Construct a record, turning pydantic errors into a rejected intent."""
    try:
        return model(**fields)
    except ValidationError as e:
        raise ValidationFailedError(result_from_pydantic(intent, e)) from e


def _number(intent: str, field: str, value: Any) -> float:
    number = parse_amount(value)
    if number is None:
        raise ValidationFailedError(
            invalid(intent, field, f"{field} ({value!r}) is not a number", "invalid_format")
        )
    return number


def _without(records: tuple, record_id: str, collection: str) -> tuple:
    remaining = tuple(r for r in records if r.id != record_id)
    if len(remaining) == len(records):
        raise RecordNotFoundError(collection, record_id)
    return remaining


def _replacing(records: tuple, record_id: str, collection: str, change: Callable) -> tuple:
    """Swap one record for change(record), keeping its position."""
    found = False
    updated = []
    for record in records:
        if record.id == record_id:
            record = change(record)
            found = True
        updated.append(record)
    if not found:
        raise RecordNotFoundError(collection, record_id)
    return tuple(updated)


class Mutator:
    """
    Validates intents and produces the next Store.

    Stateless apart from its injected collaborators, so one instance can
    serve the whole process.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        validator: Optional[TransactionValidator] = None,
        settings: Optional[TrackerSettings] = None,
    ):
        """
        Args:
            clock: Returns the current moment. Defaults to datetime.now.
            id_factory: Returns a fresh unique id per call. Defaults to uuid4.
            validator: Add-transaction validator
            settings: Tracker settings (quick-add note)
        """
        self._clock = clock or datetime.now
        self._new_id = id_factory or new_id
        self._settings = settings or get_settings().tracker
        self._validator = validator or TransactionValidator(self._settings)

    def today(self) -> date:
        return self._clock().date()

    # =========================================================================
    # FINANCE
    # =========================================================================

    def add_transaction(
        self,
        store: Store,
        date: Any,
        kind: Any,
        category: Any,
        amount: Any,
        note: Optional[str] = None,
    ) -> Store:
        """
        Record an income or expense.

        Raises:
            ValidationFailedError: amount missing/zero/not a number/negative,
                date missing or not a date, type missing or unknown,
                category missing
        """
        draft = TransactionDraft(
            date=date,
            kind=kind,
            category=category,
            amount=amount,
            note=note,
        )
        result = self._validator.validate(draft, self.today())
        if not result.is_valid:
            raise ValidationFailedError(result)

        transaction = _build(
            "add_transaction",
            Transaction,
            id=self._new_id(),
            date=draft.parsed_date,
            kind=draft.parsed_kind,
            category=draft.parsed_category,
            amount=draft.parsed_amount,
            note=note or None,
        )
        return store.model_copy(
            update={"transactions": (transaction,) + store.transactions}
        )

    def quick_add_category_expense(
        self,
        store: Store,
        category: str,
        amount: Any,
        staging: Optional[Mapping[str, float]] = None,
    ) -> tuple[Store, dict[str, float]]:
        """
        One-tap expense for a category, dated today.

        An empty or non-positive amount is an unfinished entry, not an
        error: the Store and staging come back unchanged.

        Returns:
            (store, staging) where staging has this category reset to 0
        """
        staged = dict(staging or {})
        value = parse_amount(amount)
        if value is None or value <= 0:
            return store, staged

        updated = self.add_transaction(
            store,
            date=self.today(),
            kind=TransactionKind.EXPENSE,
            category=category,
            amount=value,
            note=self._settings.quick_add_note,
        )
        staged[category] = 0
        return updated, staged

    def remove_transaction(self, store: Store, transaction_id: str) -> Store:
        return store.model_copy(update={
            "transactions": _without(store.transactions, transaction_id, "transaction")
        })

    def adjust_emergency_fund_balance(self, store: Store, delta: Any) -> Store:
        """Add (or subtract) from the fund. The balance never goes below zero."""
        change = _number("adjust_emergency_fund_balance", "delta", delta)
        balance = max(0.0, store.emergency_fund_balance + change)
        return store.model_copy(update={"emergency_fund_balance": balance})

    def set_monthly_expense_baseline(self, store: Store, value: Any) -> Store:
        baseline = _number("set_monthly_expense_baseline", "baseline", value)
        return store.model_copy(update={"monthly_expense_baseline": max(0.0, baseline)})

    def set_budget(self, store: Store, category: str, target: Any) -> Store:
        """Replace the monthly target for a category, creating it if new."""
        if not isinstance(category, str) or not category.strip():
            raise ValidationFailedError(
                invalid("set_budget", "category", "Category is required", "missing")
            )
        amount = _number("set_budget", "target", target)
        budgets = MappingProxyType({**store.budgets, category.strip(): max(0.0, amount)})
        return store.model_copy(update={"budgets": budgets})

    def set_emergency_fund_target(self, store: Store, value: Any) -> Store:
        target = _number("set_emergency_fund_target", "target", value)
        return store.model_copy(update={"emergency_fund_target": max(0.0, target)})

    def set_emergency_fund_name(self, store: Store, name: str) -> Store:
        if not isinstance(name, str) or not name.strip():
            raise ValidationFailedError(
                invalid("set_emergency_fund_name", "name", "Fund name is required", "missing")
            )
        return store.model_copy(update={"emergency_fund_name": name.strip()})

    # =========================================================================
    # HEALTH & DIET
    # =========================================================================

    def add_health_entry(
        self,
        store: Store,
        date: Any,
        weight_kg: Optional[float] = None,
        sleep_hrs: Optional[float] = None,
        steps: Optional[int] = None,
        mood: Optional[str] = None,
    ) -> Store:
        entry = _build(
            "add_health_entry",
            HealthEntry,
            id=self._new_id(),
            date=parse_date(date) or date,
            weight_kg=weight_kg,
            sleep_hrs=sleep_hrs,
            steps=steps,
            mood=mood,
        )
        return store.model_copy(update={"health": (entry,) + store.health})

    def remove_health_entry(self, store: Store, entry_id: str) -> Store:
        return store.model_copy(update={
            "health": _without(store.health, entry_id, "health")
        })

    def add_meal(
        self,
        store: Store,
        date: Any,
        meal_type: str,
        name: str,
        calories: Optional[float] = None,
    ) -> Store:
        meal = _build(
            "add_meal",
            Meal,
            id=self._new_id(),
            date=parse_date(date) or date,
            meal_type=meal_type,
            name=name,
            calories=calories,
        )
        return store.model_copy(update={"meals": (meal,) + store.meals})

    def remove_meal(self, store: Store, meal_id: str) -> Store:
        return store.model_copy(update={"meals": _without(store.meals, meal_id, "meal")})

    # =========================================================================
    # TASKS
    # =========================================================================

    def add_task(
        self,
        store: Store,
        title: str,
        due: Any = None,
        recur: str = Recurrence.NONE,
        area: Optional[str] = None,
    ) -> Store:
        task = _build(
            "add_task",
            Task,
            id=self._new_id(),
            title=title,
            due=(parse_date(due) or due) if due else None,
            recur=recur,
            area=area or None,
        )
        return store.model_copy(update={"tasks": (task,) + store.tasks})

    def toggle_task(self, store: Store, task_id: str) -> Store:
        """
        Flip a task between open and done.

        Completing a recurring task does not close it: it moves the due
        date forward by one period and stays open.
        """
        today = self.today()

        def flip(task: Task) -> Task:
            if not task.done and task.recur in _RECURRENCE_STEP:
                next_due = (task.due or today) + _RECURRENCE_STEP[task.recur]
                return task.model_copy(update={"due": next_due})
            return task.model_copy(update={"done": not task.done})

        return store.model_copy(update={
            "tasks": _replacing(store.tasks, task_id, "task", flip)
        })

    def remove_task(self, store: Store, task_id: str) -> Store:
        return store.model_copy(update={"tasks": _without(store.tasks, task_id, "task")})

    # =========================================================================
    # NOTES
    # =========================================================================

    def add_note(self, store: Store, text: str, pinned: bool = False) -> Store:
        note = _build(
            "add_note",
            Note,
            id=self._new_id(),
            text=text,
            pinned=pinned,
            created=self._clock(),
        )
        return store.model_copy(update={"notes": (note,) + store.notes})

    def toggle_note_pin(self, store: Store, note_id: str) -> Store:
        return store.model_copy(update={
            "notes": _replacing(
                store.notes,
                note_id,
                "note",
                lambda n: n.model_copy(update={"pinned": not n.pinned}),
            )
        })

    def remove_note(self, store: Store, note_id: str) -> Store:
        return store.model_copy(update={"notes": _without(store.notes, note_id, "note")})

    # =========================================================================
    # READING
    # =========================================================================

    def add_reading_item(
        self,
        store: Store,
        title: str,
        status: str = ReadingStatus.UPCOMING,
    ) -> Store:
        item = _build(
            "add_reading_item",
            ReadingItem,
            id=self._new_id(),
            title=title,
            status=status,
        )
        return store.model_copy(update={"reading": store.reading + (item,)})

    def set_reading_status(self, store: Store, item_id: str, status: str) -> Store:
        try:
            new_status = ReadingStatus(status)
        except ValueError:
            raise ValidationFailedError(invalid(
                "set_reading_status",
                "status",
                f"Status must be one of {[s.value for s in ReadingStatus]}, got {status!r}",
            ))
        return store.model_copy(update={
            "reading": _replacing(
                store.reading,
                item_id,
                "reading",
                lambda item: item.model_copy(update={"status": new_status}),
            )
        })

    def remove_reading_item(self, store: Store, item_id: str) -> Store:
        return store.model_copy(update={
            "reading": _without(store.reading, item_id, "reading")
        })

    # =========================================================================
    # WEEKLY HABITS
    # =========================================================================

    def _check_day(self, intent: str, day: int) -> None:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day < DAYS_PER_WEEK:
            raise ValidationFailedError(invalid(
                intent,
                "day",
                f"Day must be 0 (Monday) to 6 (Sunday), got {day!r}",
            ))

    def toggle_habit(self, store: Store, habit: str, day: int) -> Store:
        """Flip one yes/no habit for one day of the tracked week."""
        self._check_day("toggle_habit", day)
        try:
            field = _HABIT_FIELDS[Habit(habit)]
        except ValueError:
            raise ValidationFailedError(invalid(
                "toggle_habit",
                "habit",
                f"Habit must be one of {[h.value for h in Habit]}, got {habit!r}",
            ))

        days = list(getattr(store.weekly_habits, field))
        days[day] = not days[day]
        habits = store.weekly_habits.model_copy(update={field: tuple(days)})
        return store.model_copy(update={"weekly_habits": habits})

    def set_water(self, store: Store, day: int, count: int) -> Store:
        self._check_day("set_water", day)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValidationFailedError(invalid(
                "set_water",
                "count",
                f"Water count must be a whole number of at least 0, got {count!r}",
            ))

        water = list(store.weekly_habits.water)
        water[day] = count
        habits = store.weekly_habits.model_copy(update={"water": tuple(water)})
        return store.model_copy(update={"weekly_habits": habits})

    def start_new_week(self, store: Store) -> Store:
        """Replace the habit block with an empty one for the current week."""
        habits = WeeklyHabits.fresh(start_of_week(self.today()))
        return store.model_copy(update={"weekly_habits": habits})

    # =========================================================================
    # PREFERENCES
    # =========================================================================

    def set_night_shift_mode(self, store: Store, enabled: bool) -> Store:
        return store.model_copy(update={"night_shift_mode": bool(enabled)})

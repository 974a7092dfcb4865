"""
Tests for LifeHub

Test strategy:
1. Unit tests for models, validator, mutator and aggregates
2. Gateway tests against tmp_path and the in-memory backend
3. A fixed clock and sequential ids everywhere (see conftest.py)
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from conftest import FIXED_TODAY, WEEK_START, sequential_ids

from lifehub.models import (
    DEFAULT_BUDGETS,
    HealthEntry,
    Meal,
    MealType,
    Mood,
    Note,
    ReadingStatus,
    Store,
    Task,
    Transaction,
    TransactionKind,
    WeeklyHabits,
    start_of_week,
)


class TestRecordModels:
    """Tests for the tracked record models."""

    def test_transaction_creation(self):
        """Test Transaction model creation by attribute name."""
        t = Transaction(
            id="t1",
            date=date(2026, 10, 1),
            kind=TransactionKind.EXPENSE,
            category="Rent",
            amount=800,
        )
        assert t.kind == TransactionKind.EXPENSE
        assert t.amount == 800
        assert t.note is None

    def test_transaction_accepts_saved_keys(self):
        """Test that the saved "type" key populates kind."""
        t = Transaction.model_validate({
            "id": "t1",
            "date": "2026-10-01",
            "type": "income",
            "category": "Salary",
            "amount": 2500.5,
        })
        assert t.kind == TransactionKind.INCOME
        assert t.date == date(2026, 10, 1)

    def test_transaction_dumps_type_key(self):
        """Test that kind is written back under "type"."""
        t = Transaction(
            id="t1", date=date(2026, 10, 1), kind="expense", category="Gym", amount=25
        )
        dumped = t.model_dump(mode="json", by_alias=True)
        assert dumped["type"] == "expense"
        assert "kind" not in dumped

    def test_transaction_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            Transaction(
                id="t1", date=date(2026, 10, 1), kind="expense", category="Gym", amount=-1
            )

    def test_transaction_rejects_blank_category(self):
        """Test that whitespace-only categories are rejected after stripping."""
        with pytest.raises(ValidationError):
            Transaction(
                id="t1", date=date(2026, 10, 1), kind="expense", category="   ", amount=5
            )

    def test_transaction_is_frozen(self):
        """Test that records cannot be edited in place."""
        t = Transaction(
            id="t1", date=date(2026, 10, 1), kind="expense", category="Gym", amount=25
        )
        with pytest.raises(ValidationError):
            t.amount = 30

    def test_health_entry_camel_case(self):
        """Test HealthEntry reads and writes camelCase keys."""
        entry = HealthEntry.model_validate({
            "id": "h1",
            "date": "2026-10-20",
            "weightKg": 72.5,
            "sleepHrs": 7,
            "mood": "🙂",
        })
        assert entry.weight_kg == 72.5
        assert entry.mood == Mood.GOOD
        dumped = entry.model_dump(mode="json", by_alias=True)
        assert dumped["weightKg"] == 72.5
        assert dumped["sleepHrs"] == 7

    def test_health_entry_rejects_negative_steps(self):
        """Test that numeric health fields must be non-negative."""
        with pytest.raises(ValidationError):
            HealthEntry(id="h1", date=date(2026, 10, 20), steps=-10)

    def test_meal_rejects_unknown_type(self):
        """Test meal type is a closed set."""
        with pytest.raises(ValidationError):
            Meal(id="m1", date=date(2026, 10, 20), meal_type="Brunch", name="Eggs")

    def test_meal_type_alias(self):
        """Test meal type is saved as mealType."""
        meal = Meal(id="m1", date=date(2026, 10, 20), meal_type=MealType.LUNCH, name="Soup")
        assert meal.model_dump(mode="json", by_alias=True)["mealType"] == "Lunch"

    def test_task_defaults(self):
        """Test Task defaults to open and non-recurring."""
        task = Task(id="k1", title="File taxes")
        assert task.done is False
        assert task.recur.value == "none"
        assert task.area is None

    def test_note_requires_created(self):
        """Test Note needs a creation timestamp."""
        with pytest.raises(ValidationError):
            Note(id="n1", text="hello")
        note = Note(id="n1", text="hello", created=datetime(2026, 10, 21, 8, 0))
        assert note.pinned is False


class TestWeeklyHabits:
    """Tests for the weekly habit block."""

    def test_fresh_week_has_seven_empty_days(self):
        """Test a fresh week is all False / 0."""
        habits = WeeklyHabits.fresh(WEEK_START)
        assert habits.gym == (False,) * 7
        assert habits.water == (0,) * 7
        assert habits.call_family == (False,) * 7

    def test_rejects_wrong_length(self):
        """Test arrays must hold exactly seven days."""
        with pytest.raises(ValidationError, match="7 entries"):
            WeeklyHabits(week_start=WEEK_START, gym=(True, False))

    def test_rejects_negative_water(self):
        """Test water counts must be non-negative."""
        with pytest.raises(ValidationError):
            WeeklyHabits(week_start=WEEK_START, water=(0, 0, -1, 0, 0, 0, 0))

    def test_call_family_alias(self):
        """Test callFamily and weekStart keys."""
        dumped = WeeklyHabits.fresh(WEEK_START).model_dump(mode="json", by_alias=True)
        assert dumped["weekStart"] == "2026-10-19"
        assert len(dumped["callFamily"]) == 7

    def test_start_of_week(self):
        """Test Monday anchoring for every day of the week."""
        for offset in range(7):
            day = date(2026, 10, 19 + offset)
            assert start_of_week(day) == WEEK_START
        assert start_of_week(date(2026, 10, 26)) == date(2026, 10, 26)


class TestStoreDefaults:
    """Tests for the first-run Store."""

    def test_default_values(self, store):
        """Test the hard-coded defaults."""
        assert store.emergency_fund_target == 2000
        assert store.emergency_fund_name == "Emergency Fund"
        assert store.emergency_fund_balance == 0
        assert store.monthly_expense_baseline == 1000
        assert store.budgets == DEFAULT_BUDGETS
        assert store.night_shift_mode is True
        assert store.transactions == ()

    def test_starter_reading_list(self, store):
        """Test the starter reading list and its statuses."""
        titles = [item.title for item in store.reading]
        assert titles == [
            "Clear Thinking",
            "The Psychology of Money",
            "Atomic Habits",
            "Deep Work",
        ]
        assert store.reading[2].status == ReadingStatus.CURRENT
        assert [item.id for item in store.reading] == ["book-1", "book-2", "book-3", "book-4"]

    def test_habits_anchor_to_monday(self, store):
        """Test the default habit week starts on the current Monday."""
        assert store.weekly_habits.week_start == WEEK_START

    def test_budgets_are_not_shared(self):
        """Test each default Store gets its own budgets dict."""
        a = Store.defaults(FIXED_TODAY)
        b = Store.defaults(FIXED_TODAY)
        assert a.budgets == b.budgets
        assert a.budgets is not b.budgets

    def test_budgets_are_read_only(self, mutator, store):
        """Test a later snapshot cannot rewrite an earlier snapshot's budgets."""
        later = mutator.adjust_emergency_fund_balance(store, 1)
        with pytest.raises(TypeError):
            later.budgets["Rent"] = 1
        assert store.budgets["Rent"] == 800

        changed = mutator.set_budget(later, "Rent", 900)
        with pytest.raises(TypeError):
            changed.budgets["Gym"] = 0
        assert store.budgets["Rent"] == 800

    def test_budgets_dump_as_plain_dict(self, store):
        assert type(store.model_dump(by_alias=True)["budgets"]) is dict
        assert store.model_dump(mode="json", by_alias=True)["budgets"]["Rent"] == 800

    def test_saved_keys(self, store):
        """Test the top-level keys of the saved document."""
        dumped = store.model_dump(mode="json", by_alias=True)
        assert set(dumped) == {
            "txns", "health", "meals", "tasks", "notes",
            "emergencyFundTarget", "emergencyFundName", "emergencyFundBalance",
            "monthlyExpenseBaseline", "budgets", "nightShiftMode",
            "weeklyHabits", "reading",
        }


class TestStoreInitial:
    """Tests for overlaying persisted data on defaults."""

    def _initial(self, persisted):
        return Store.initial(persisted, FIXED_TODAY, id_factory=sequential_ids("book"))

    def test_nothing_persisted(self, store):
        """Test None yields exactly the defaults."""
        assert self._initial(None) == store

    def test_non_mapping_payload(self, store):
        """Test a list or string payload counts as nothing persisted."""
        assert self._initial(["not", "a", "store"]) == store
        assert self._initial("garbage") == store

    def test_partial_payload_keeps_other_defaults(self):
        """Test fields that are present override, missing ones keep defaults."""
        result = self._initial({
            "emergencyFundBalance": 350,
            "budgets": {"Rent": 900},
        })
        assert result.emergency_fund_balance == 350
        assert result.budgets == {"Rent": 900}
        assert result.monthly_expense_baseline == 1000
        assert len(result.reading) == 4

    def test_unreadable_field_falls_back(self):
        """Test one bad field does not discard the rest."""
        result = self._initial({
            "emergencyFundBalance": "lots",
            "monthlyExpenseBaseline": 1500,
        })
        assert result.emergency_fund_balance == 0
        assert result.monthly_expense_baseline == 1500

    def test_negative_balance_falls_back(self):
        """Test field constraints are enforced during loading."""
        result = self._initial({"emergencyFundBalance": -50})
        assert result.emergency_fund_balance == 0

    def test_negative_budget_falls_back(self):
        """Test the budgets validator runs during loading."""
        result = self._initial({"budgets": {"Rent": -1}})
        assert result.budgets == DEFAULT_BUDGETS

    def test_bad_records_are_dropped_individually(self):
        """Test one unreadable transaction does not lose the others."""
        result = self._initial({
            "txns": [
                {"id": "a", "date": "2026-10-01", "type": "expense", "category": "Rent", "amount": 800},
                {"id": "b", "date": "not a date", "type": "expense", "category": "Rent", "amount": 5},
                {"id": "c", "date": "2026-10-02", "type": "income", "category": "Pay", "amount": 100},
            ],
        })
        assert [t.id for t in result.transactions] == ["a", "c"]

    def test_collection_that_is_not_a_list(self):
        """Test a collection stored as the wrong type keeps its default."""
        result = self._initial({"tasks": {"id": "x"}})
        assert result.tasks == ()

    def test_unknown_keys_are_ignored(self, store):
        """Test extra keys from other versions are tolerated."""
        assert self._initial({"theme": "dark", "version": 7}) == store

    def test_habits_overlay_per_field(self):
        """Test habit sub-fields fall back independently and arrays are fitted to 7."""
        result = self._initial({
            "weeklyHabits": {
                "weekStart": "2026-10-12",
                "gym": [True, True],
                "water": "many",
                "callFamily": [True] * 9,
            },
        })
        habits = result.weekly_habits
        assert habits.week_start == date(2026, 10, 12)
        assert habits.gym == (True, True, False, False, False, False, False)
        assert habits.water == (0,) * 7
        assert habits.call_family == (True,) * 7

    def test_habits_not_a_mapping(self, store):
        """Test a broken habits block keeps the default week."""
        result = self._initial({"weeklyHabits": [1, 2, 3]})
        assert result.weekly_habits == store.weekly_habits

    def test_snake_case_keys_also_load(self):
        """Test attribute names are accepted as well as saved keys."""
        result = self._initial({"emergency_fund_name": "Rainy Day"})
        assert result.emergency_fund_name == "Rainy Day"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

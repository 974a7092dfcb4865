"""
Derived Views

DESIGN DECISION: Every figure the user sees is computed here, from a Store
snapshot and an explicit reference date. Nothing is cached and nothing is
written back, so the same snapshot always gives the same numbers.

Sums use math.fsum, which makes totals independent of transaction order.
"""

import math
from datetime import date
from typing import Optional

from lifehub.models.records import (
    ReadingItem,
    ReadingStatus,
    Task,
    Transaction,
    TransactionKind,
)
from lifehub.models.store import DEFAULT_CATEGORIES, Store
from lifehub.models.views import (
    BudgetLine,
    EmergencyFundStatus,
    HabitSummary,
    Totals,
)


SIX_MONTHS = 6


def month_key(day: date) -> str:
    """Canonical "YYYY-MM" identifier of the month containing `day`."""
    return f"{day.year:04d}-{day.month:02d}"


def progress_pct(value: float, target: float) -> float:
    """
    value / target as a percentage clamped to 0-100.

    A zero (or negative) target means "no target" and reads as 0%.
    """
    if target <= 0:
        return 0.0
    return min(100.0, max(0.0, value / target * 100))


def transactions_in_month(
    store: Store,
    key: str,
    kind: Optional[TransactionKind] = None,
) -> tuple[Transaction, ...]:
    """Transactions dated in the given month, optionally only one kind, in Store order."""
    return tuple(
        t for t in store.transactions
        if month_key(t.date) == key and (kind is None or t.kind == kind)
    )


def spend_by_category(store: Store, key: str) -> dict[str, float]:
    """
    Expense total per category for one month.

    Every standard category is reported, 0 when idle. Categories outside
    the standard set show up after them, in order of first appearance.
    """
    amounts: dict[str, list[float]] = {category: [] for category in DEFAULT_CATEGORIES}
    for t in transactions_in_month(store, key, TransactionKind.EXPENSE):
        amounts.setdefault(t.category, []).append(abs(t.amount))
    return {category: math.fsum(values) for category, values in amounts.items()}


def totals(store: Store) -> Totals:
    """
    All-time income, expense and net.

    Not month-scoped: this covers every transaction ever recorded.
    """
    income = math.fsum(
        t.amount for t in store.transactions if t.kind == TransactionKind.INCOME
    )
    expense = math.fsum(
        t.amount for t in store.transactions if t.kind == TransactionKind.EXPENSE
    )
    return Totals(income=income, expense=expense, net=income - expense)


def emergency_fund_status(store: Store) -> EmergencyFundStatus:
    """The fund against its own target and against six months of expenses."""
    six_month_target = store.monthly_expense_baseline * SIX_MONTHS
    return EmergencyFundStatus(
        balance=store.emergency_fund_balance,
        target=store.emergency_fund_target,
        six_month_target=six_month_target,
        achieved=store.emergency_fund_balance >= six_month_target,
        progress_pct=progress_pct(store.emergency_fund_balance, store.emergency_fund_target),
    )


def budget_status(store: Store, key: str) -> dict[str, BudgetLine]:
    """
    Spend against budget per category for one month.

    Covers the standard categories, any category with a budget, and any
    category with spend that month. A target of 0 means "no limit": it is
    never over, and its progress reads 0%.
    """
    spent = spend_by_category(store, key)
    categories = list(spent)
    categories.extend(c for c in store.budgets if c not in spent)

    lines = {}
    for category in categories:
        amount = spent.get(category, 0.0)
        target = store.budgets.get(category, 0.0)
        lines[category] = BudgetLine(
            category=category,
            spent=amount,
            target=target,
            over=target > 0 and amount > target,
            progress_pct=progress_pct(amount, target),
        )
    return lines


def habit_summary(store: Store) -> HabitSummary:
    habits = store.weekly_habits
    return HabitSummary(
        gym_days=sum(habits.gym),
        swim_days=sum(habits.swim),
        call_family_days=sum(habits.call_family),
        water_total=sum(habits.water),
    )


def reading_by_status(store: Store) -> dict[ReadingStatus, tuple[ReadingItem, ...]]:
    """Reading list split by status, each group in list order."""
    return {
        status: tuple(item for item in store.reading if item.status == status)
        for status in ReadingStatus
    }


def open_tasks(store: Store) -> tuple[Task, ...]:
    """Tasks not yet done, earliest due first; undated tasks last."""
    pending = [t for t in store.tasks if not t.done]
    return tuple(sorted(pending, key=lambda t: (t.due is None, t.due or date.max)))


def overdue_tasks(store: Store, today: date) -> tuple[Task, ...]:
    return tuple(t for t in open_tasks(store) if t.due is not None and t.due < today)

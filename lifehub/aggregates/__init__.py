"""Derived view package."""

from lifehub.aggregates.aggregator import (
    budget_status,
    emergency_fund_status,
    habit_summary,
    month_key,
    open_tasks,
    overdue_tasks,
    progress_pct,
    reading_by_status,
    spend_by_category,
    totals,
    transactions_in_month,
)

__all__ = [
    "budget_status",
    "emergency_fund_status",
    "habit_summary",
    "month_key",
    "open_tasks",
    "overdue_tasks",
    "progress_pct",
    "reading_by_status",
    "spend_by_category",
    "totals",
    "transactions_in_month",
]

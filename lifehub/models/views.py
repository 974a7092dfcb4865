"""
Derived View Models

What the aggregator hands back to the presentation layer.
These are computed, never stored.
"""

from pydantic import BaseModel, Field


class Totals(BaseModel):
    """All-time money totals across every transaction ever recorded."""

    income: float = Field(ge=0)
    expense: float = Field(ge=0)
    net: float


class EmergencyFundStatus(BaseModel):
    """Where the emergency fund stands against its milestones."""

    balance: float = Field(ge=0)
    target: float = Field(ge=0)
    six_month_target: float = Field(
        ge=0,
        description="Monthly expense baseline times six"
    )
    achieved: bool = Field(
        description="Balance has reached the six-month target"
    )
    progress_pct: float = Field(
        ge=0,
        le=100,
        description="Balance as a percentage of the fund target, for progress bars"
    )


class BudgetLine(BaseModel):
    """One category's spend against its monthly budget."""

    category: str
    spent: float = Field(ge=0)
    target: float = Field(ge=0)
    over: bool = Field(
        description="Spent exceeds a non-zero target"
    )
    progress_pct: float = Field(
        ge=0,
        le=100,
        description="Spent as a percentage of target, 0 when there is no target"
    )


class HabitSummary(BaseModel):
    """Completed days per habit for the tracked week."""

    gym_days: int = Field(ge=0, le=7)
    swim_days: int = Field(ge=0, le=7)
    call_family_days: int = Field(ge=0, le=7)
    water_total: int = Field(ge=0)

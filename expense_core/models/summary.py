"""
Summary Models

Read-only results produced by the summary engine for display.
Nothing here is persisted.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expense_core.models.expense import DateRange, ExpensePeriod


class CategoryBreakdown(BaseModel):
    """Share of one category in a period's spending."""

    category_id: str
    category_name: str
    color: str = ""
    total_amount: Decimal = Field(ge=0)
    expense_count: int = Field(ge=0)
    percentage: int = Field(
        ...,
        description="Rounded share of the period total (0-100)"
    )


class BudgetStatus(BaseModel):
    """How much of a category's monthly budget has been used."""

    category_id: str
    budget_amount: Decimal = Field(ge=0)
    spent_amount: Decimal = Field(ge=0)
    remaining_amount: Decimal = Field(
        ...,
        description="Negative when over budget"
    )
    percentage: int
    is_over_budget: bool


class PeriodSummary(BaseModel):
    """Totals for a single period."""

    period: ExpensePeriod
    range: DateRange
    total_amount: Decimal = Field(ge=0)
    expense_count: int = Field(ge=0)
    breakdown: list[CategoryBreakdown] = Field(default_factory=list)


class MonthlyStats(BaseModel):
    """Dashboard figures for the month containing the reference date."""

    range: DateRange
    total_expenses: Decimal = Field(ge=0)
    category_breakdown: list[CategoryBreakdown] = Field(default_factory=list)
    compared_to_last_month: Optional[int] = Field(
        default=None,
        description="Percent change versus the previous month; None when last month was empty"
    )
    budget_status: list[BudgetStatus] = Field(default_factory=list)

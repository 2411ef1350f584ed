"""
Data Models Package

This package contains all Pydantic models used by Expense Core.
The persistent store does not depend on any of them.
"""

from expense_core.models.expense import (
    Category,
    DateRange,
    Expense,
    ExpensePeriod,
    PaymentMethod,
)
from expense_core.models.summary import (
    BudgetStatus,
    CategoryBreakdown,
    MonthlyStats,
    PeriodSummary,
)

__all__ = [
    # Domain models
    "Category",
    "DateRange",
    "Expense",
    "ExpensePeriod",
    "PaymentMethod",
    # Summary models
    "BudgetStatus",
    "CategoryBreakdown",
    "MonthlyStats",
    "PeriodSummary",
]

"""
Summary Engine

DESIGN DECISION: Summaries are computed DETERMINISTICALLY from the
expense list the caller passes in. The engine never reads storage
itself, so a dashboard can load once and ask many questions.

All money math uses Decimal; percentages go through
calculate_percentage so every view rounds the same way.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional, Union

from expense_core.models.expense import (
    Category,
    DateRange,
    Expense,
    ExpensePeriod,
    wall_clock,
)
from expense_core.models.summary import (
    BudgetStatus,
    CategoryBreakdown,
    MonthlyStats,
    PeriodSummary,
)
from expense_core.utils.aggregation import calculate_percentage
from expense_core.utils.dates import Reference, coerce_period, get_date_range, get_previous_range
from expense_core.utils.formatting import format_currency, format_date


class SummaryEngine:
    """
    Turns a list of expenses into display-ready figures.

    GUARANTEES:
    - Only sums what it is given
    - Percentages are whole numbers and 0 when the total is 0
    - Period boundaries are inclusive (see get_date_range)
    """

    @staticmethod
    def filter_range(expenses: Iterable[Expense], date_range: DateRange) -> list[Expense]:
        return [e for e in expenses if date_range.contains(e.date)]

    @staticmethod
    def total(expenses: Iterable[Expense]) -> Decimal:
        return sum((e.amount for e in expenses), Decimal("0"))

    def total_for_period(
        self,
        expenses: Iterable[Expense],
        period: Union[ExpensePeriod, str],
        reference: Optional[Reference] = None,
    ) -> Decimal:
        """Sum of amounts in the week/month/year containing reference."""
        return self.total(self.filter_range(expenses, get_date_range(period, reference)))

    def category_breakdown(self, expenses: Iterable[Expense]) -> list[CategoryBreakdown]:
        """
        Group expenses by category id, largest total first.

        The category name and color come from the most recent expense
        in each group, since categories are embedded by value.
        """
        expenses = list(expenses)
        grand_total = self.total(expenses)

        totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
        counts: dict[str, int] = defaultdict(int)
        latest: dict[str, Expense] = {}

        for expense in expenses:
            category_id = expense.category.id
            totals[category_id] += expense.amount
            counts[category_id] += 1
            if (
                category_id not in latest
                or wall_clock(expense.date) > wall_clock(latest[category_id].date)
            ):
                latest[category_id] = expense

        breakdown = [
            CategoryBreakdown(
                category_id=category_id,
                category_name=latest[category_id].category.name,
                color=latest[category_id].category.color,
                total_amount=amount,
                expense_count=counts[category_id],
                percentage=calculate_percentage(amount, grand_total),
            )
            for category_id, amount in totals.items()
        ]
        breakdown.sort(key=lambda item: (-item.total_amount, item.category_name))
        return breakdown

    def summarize_period(
        self,
        expenses: Iterable[Expense],
        period: Union[ExpensePeriod, str],
        reference: Optional[Reference] = None,
    ) -> PeriodSummary:
        """Totals and category breakdown for one period."""
        period = coerce_period(period)
        date_range = get_date_range(period, reference)
        in_range = self.filter_range(expenses, date_range)

        return PeriodSummary(
            period=period,
            range=date_range,
            total_amount=self.total(in_range),
            expense_count=len(in_range),
            breakdown=self.category_breakdown(in_range),
        )

    def budget_status(
        self,
        expenses: Iterable[Expense],
        category: Category,
        reference: Optional[Reference] = None,
    ) -> Optional[BudgetStatus]:
        """
        Monthly budget usage for a category.

        Returns None when the category has no budget.
        """
        if category.budget is None:
            return None

        month = get_date_range(ExpensePeriod.MONTH, reference)
        spent = self.total(
            e for e in self.filter_range(expenses, month)
            if e.category.id == category.id
        )
        return BudgetStatus(
            category_id=category.id,
            budget_amount=category.budget,
            spent_amount=spent,
            remaining_amount=category.budget - spent,
            percentage=calculate_percentage(spent, category.budget),
            is_over_budget=spent > category.budget,
        )

    def monthly_stats(
        self,
        expenses: Iterable[Expense],
        categories: Iterable[Category] = (),
        reference: Optional[Reference] = None,
    ) -> MonthlyStats:
        """
        Dashboard figures for the month containing reference.

        compared_to_last_month is the rounded percent change versus the
        previous month, or None when nothing was spent last month.
        """
        expenses = list(expenses)
        current_range = get_date_range(ExpensePeriod.MONTH, reference)
        current = self.filter_range(expenses, current_range)
        previous_total = self.total(
            self.filter_range(expenses, get_previous_range(ExpensePeriod.MONTH, reference))
        )
        current_total = self.total(current)

        compared = None
        if previous_total:
            compared = calculate_percentage(current_total - previous_total, previous_total)

        statuses = []
        for category in categories:
            status = self.budget_status(expenses, category, reference)
            if status is not None:
                statuses.append(status)

        return MonthlyStats(
            range=current_range,
            total_expenses=current_total,
            category_breakdown=self.category_breakdown(current),
            compared_to_last_month=compared,
            budget_status=statuses,
        )

    def describe_period(
        self,
        summary: PeriodSummary,
        currency_code: Optional[str] = None,
    ) -> list[str]:
        """
        Render a period summary as display lines.

        First line is the range and total, then one line per category:
        "<name>: <amount> (<percentage>%)".
        """
        lines = [
            "{start} - {end}: {total}".format(
                start=format_date(summary.range.start),
                end=format_date(summary.range.end),
                total=format_currency(summary.total_amount, currency_code),
            )
        ]
        for item in summary.breakdown:
            lines.append(
                f"{item.category_name}: "
                f"{format_currency(item.total_amount, currency_code)} "
                f"({item.percentage}%)"
            )
        return lines

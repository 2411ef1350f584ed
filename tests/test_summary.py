"""Tests for SummaryEngine."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from expense_core.models.expense import Category, ExpensePeriod
from expense_core.queries import SummaryEngine
from expense_core.utils import InvalidPeriodError


@pytest.fixture
def engine():
    return SummaryEngine()


@pytest.fixture
def august(make_expense, food, transport):
    return [
        make_expense("30", food, datetime(2025, 8, 11, 9, 0)),
        make_expense("10", transport, datetime(2025, 8, 13, 18, 0)),
        make_expense("60", food, datetime(2025, 8, 25, 12, 0)),
        make_expense("50", food, datetime(2025, 7, 20, 12, 0)),
    ]


class TestTotals:
    """Totals per period."""

    def test_total_for_period(self, engine, august):
        assert engine.total_for_period(august, "week", date(2025, 8, 13)) == Decimal("40")
        assert engine.total_for_period(august, "month", date(2025, 8, 13)) == Decimal("100")
        assert engine.total_for_period(august, "year", date(2025, 8, 13)) == Decimal("150")

    def test_empty(self, engine):
        assert engine.total_for_period([], "month", date(2025, 8, 1)) == Decimal("0")

    def test_unknown_period(self, engine, august):
        with pytest.raises(InvalidPeriodError):
            engine.total_for_period(august, "fortnight", date(2025, 8, 1))


class TestBreakdown:
    """Category breakdown and percentages."""

    def test_summarize_month(self, engine, august):
        summary = engine.summarize_period(august, "month", date(2025, 8, 13))
        assert summary.period is ExpensePeriod.MONTH
        assert summary.expense_count == 3
        assert summary.total_amount == Decimal("100")

        first, second = summary.breakdown
        assert (first.category_id, first.total_amount, first.percentage) == ("food", Decimal("90"), 90)
        assert (second.category_id, second.expense_count, second.percentage) == ("transport", 1, 10)

    def test_uses_latest_category_copy(self, engine, make_expense, food):
        renamed = food.model_copy(update={"name": "Groceries"})
        breakdown = engine.category_breakdown([
            make_expense("1", food, datetime(2025, 8, 1)),
            make_expense("1", renamed, datetime(2025, 8, 2)),
        ])
        assert breakdown[0].category_name == "Groceries"
        assert breakdown[0].percentage == 100

    def test_zero_amounts_give_zero_percent(self, engine, make_expense):
        breakdown = engine.category_breakdown([make_expense("0")])
        assert breakdown[0].percentage == 0

    def test_mixed_awareness_in_one_category(self, engine, make_expense, food):
        renamed = food.model_copy(update={"name": "Groceries"})
        expenses = [
            make_expense("1", food, datetime(2025, 8, 13, 12)),
            make_expense("2", renamed, datetime(2025, 8, 14, 12, tzinfo=timezone.utc)),
        ]
        assert engine.total_for_period(expenses, "month", date(2025, 8, 13)) == Decimal("3")

        breakdown = engine.category_breakdown(expenses)
        assert breakdown[0].category_name == "Groceries"
        assert breakdown[0].expense_count == 2
        assert engine.summarize_period(expenses, "month", date(2025, 8, 13)).expense_count == 2


class TestBudgets:
    """Budget status and monthly stats."""

    def test_budget_status(self, engine, august, food):
        status = engine.budget_status(august, food, date(2025, 8, 13))
        assert status.spent_amount == Decimal("90")
        assert status.remaining_amount == Decimal("110")
        assert status.percentage == 45
        assert status.is_over_budget is False

    def test_over_budget(self, engine, make_expense):
        tight = Category(id="food", name="Food", budget=Decimal("50"))
        status = engine.budget_status([make_expense("80", tight)], tight, date(2025, 8, 13))
        assert status.is_over_budget is True
        assert status.remaining_amount == Decimal("-30")
        assert status.percentage == 160

    def test_no_budget(self, engine, august, transport):
        assert engine.budget_status(august, transport, date(2025, 8, 13)) is None

    def test_monthly_stats(self, engine, august, food, transport):
        stats = engine.monthly_stats(august, [food, transport], date(2025, 8, 13))
        assert stats.total_expenses == Decimal("100")
        assert stats.compared_to_last_month == 100
        assert [b.category_id for b in stats.budget_status] == ["food"]
        assert stats.range.start == datetime(2025, 8, 1)

    def test_monthly_stats_without_previous_month(self, engine, august):
        stats = engine.monthly_stats(august, reference=date(2025, 7, 1))
        assert stats.total_expenses == Decimal("50")
        assert stats.compared_to_last_month is None


class TestDescribe:
    """Rendering summaries."""

    def test_describe_period(self, engine, august):
        summary = engine.summarize_period(august, "week", date(2025, 8, 13))
        lines = engine.describe_period(summary, "EUR")
        assert lines[0].startswith("11/08/2025 - 17/08/2025: ")
        assert "40,00" in lines[0]
        assert lines[1].startswith("Food: 30,00")
        assert lines[1].endswith("(75%)")
        assert lines[2].endswith("(25%)")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

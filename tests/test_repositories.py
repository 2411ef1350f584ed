"""Tests for ExpenseRepository and CategoryRepository."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from expense_core.models.expense import Category
from expense_core.repositories import DEFAULT_CATEGORIES, CategoryRepository, ExpenseRepository
from expense_core.services.storage import (
    DeserializationError,
    DuplicateError,
    InMemoryBackend,
    NotFoundError,
    PersistentStore,
    StorageWriteError,
)


@pytest.fixture
def expenses(store):
    return ExpenseRepository(store)


@pytest.fixture
def categories(store):
    return CategoryRepository(store)


class TestExpenseRepository:
    """Tests for ExpenseRepository."""

    @pytest.mark.asyncio
    async def test_empty_store_lists_nothing(self, expenses):
        assert await expenses.list_expenses() == []

    @pytest.mark.asyncio
    async def test_add_assigns_id_and_persists(self, expenses, store, food):
        added = await expenses.add_expense(
            amount="25.50",
            category=food,
            date=date(2025, 8, 13),
            description="Lunch",
        )
        assert added.id
        stored = (await store.get_item("expense-storage")).value
        assert stored[0]["id"] == added.id
        assert stored[0]["amount"] == "25.50"

    @pytest.mark.asyncio
    async def test_newest_first(self, expenses, food):
        first = await expenses.add_expense(1, food, date(2025, 8, 1))
        second = await expenses.add_expense(2, food, date(2025, 8, 2))
        assert [e.id for e in await expenses.list_expenses()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_add_rejects_negative_amount(self, expenses, food):
        with pytest.raises(ValidationError):
            await expenses.add_expense(-1, food, date(2025, 8, 1))
        assert await expenses.list_expenses() == []

    @pytest.mark.asyncio
    async def test_update(self, expenses, food):
        added = await expenses.add_expense(10, food, date(2025, 8, 1), description="Old")
        updated = await expenses.update_expense(added.id, amount=Decimal("12"), description="New")
        assert updated.id == added.id
        assert updated.amount == Decimal("12")
        assert (await expenses.get_expense(added.id)).description == "New"

    @pytest.mark.asyncio
    async def test_update_cannot_change_id(self, expenses, food):
        added = await expenses.add_expense(10, food, date(2025, 8, 1))
        with pytest.raises(ValueError, match="cannot be changed"):
            await expenses.update_expense(added.id, id="other")

    @pytest.mark.asyncio
    async def test_update_cannot_make_amount_negative(self, expenses, food):
        added = await expenses.add_expense(10, food, date(2025, 8, 1))
        with pytest.raises(ValidationError):
            await expenses.update_expense(added.id, amount=-3)
        assert (await expenses.get_expense(added.id)).amount == Decimal("10")

    @pytest.mark.asyncio
    async def test_update_unknown(self, expenses):
        with pytest.raises(NotFoundError):
            await expenses.update_expense("missing", amount=1)

    @pytest.mark.asyncio
    async def test_delete(self, expenses, food):
        added = await expenses.add_expense(10, food, date(2025, 8, 1))
        assert await expenses.delete_expense(added.id) is True
        assert await expenses.delete_expense(added.id) is False
        assert await expenses.list_expenses() == []

    @pytest.mark.asyncio
    async def test_filters(self, expenses, food, transport):
        await expenses.add_expense(10, food, datetime(2025, 8, 11, 9, 0))
        await expenses.add_expense(20, transport, datetime(2025, 8, 17, 22, 0))
        await expenses.add_expense(30, food, datetime(2025, 8, 18, 8, 0))

        assert len(await expenses.get_by_category("food")) == 2
        week = await expenses.get_by_period("week", date(2025, 8, 13))
        assert sorted(e.amount for e in week) == [Decimal("10"), Decimal("20")]
        in_range = await expenses.get_by_date_range(date(2025, 8, 17), date(2025, 8, 18))
        assert sorted(e.amount for e in in_range) == [Decimal("20"), Decimal("30")]

    @pytest.mark.asyncio
    async def test_relink_category(self, expenses, food, transport):
        await expenses.add_expense(10, food, date(2025, 8, 1))
        await expenses.add_expense(20, transport, date(2025, 8, 1))

        renamed = food.model_copy(update={"name": "Groceries"})
        assert await expenses.relink_category(renamed) == 1
        assert await expenses.relink_category(renamed) == 0

        names = {e.category.id: e.category.name for e in await expenses.list_expenses()}
        assert names == {"food": "Groceries", "transport": "Transport"}

    @pytest.mark.asyncio
    async def test_clear_all(self, expenses, store, food):
        await store.set_item("unrelated", True)
        await expenses.add_expense(10, food, date(2025, 8, 1))
        await expenses.clear_all()
        assert await expenses.list_expenses() == []
        assert (await store.get_item("unrelated")).value is True

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, expenses, backend, food):
        backend.fail_writes = True
        with pytest.raises(StorageWriteError):
            await expenses.add_expense(10, food, date(2025, 8, 1))

    @pytest.mark.asyncio
    async def test_corrupt_list_raises(self):
        store = PersistentStore(InMemoryBackend({"expense-storage": "[{"}))
        with pytest.raises(DeserializationError):
            await ExpenseRepository(store).list_expenses()

    @pytest.mark.asyncio
    async def test_custom_key_from_settings(self, monkeypatch, store, food):
        monkeypatch.setenv("EXPENSE_STORE_EXPENSES_KEY", "my-expenses")
        await ExpenseRepository(store).add_expense(1, food, date(2025, 8, 1))
        assert await store.get_all_keys() == ["my-expenses"]


class TestCategoryRepository:
    """Tests for CategoryRepository."""

    @pytest.mark.asyncio
    async def test_defaults_when_nothing_stored(self, categories, store):
        listed = await categories.list_categories()
        assert [c.id for c in listed] == [
            "food", "shopping", "transport", "health", "education", "other",
        ]
        assert listed == list(DEFAULT_CATEGORIES)
        assert await store.get_all_keys() == []

    @pytest.mark.asyncio
    async def test_add_with_generated_id(self, categories):
        added = await categories.add_category("Pets", icon="🐶", color="#000000", budget=50)
        assert len(added.id) == 36
        assert (await categories.get_category(added.id)).name == "Pets"
        assert len(await categories.list_categories()) == len(DEFAULT_CATEGORIES) + 1

    @pytest.mark.asyncio
    async def test_add_duplicate_id(self, categories):
        with pytest.raises(DuplicateError):
            await categories.add_category("Food again", category_id="food")

    @pytest.mark.asyncio
    async def test_update(self, categories):
        updated = await categories.update_category("food", name="Comida", budget=Decimal("300"))
        assert updated.name == "Comida"
        assert (await categories.get_category("food")).budget == Decimal("300")

    @pytest.mark.asyncio
    async def test_update_unknown(self, categories):
        with pytest.raises(NotFoundError):
            await categories.update_category("missing", name="x")

    @pytest.mark.asyncio
    async def test_update_cannot_change_id(self, categories):
        with pytest.raises(ValueError):
            await categories.update_category("food", id="meals")

    @pytest.mark.asyncio
    async def test_delete_and_reset(self, categories):
        assert await categories.delete_category("other") is True
        assert await categories.delete_category("other") is False
        assert await categories.get_category("other") is None

        restored = await categories.reset_to_defaults()
        assert [c.id for c in restored][-1] == "other"
        assert await categories.get_category("other") == Category(
            id="other", name="Other", icon="⚪", color="#6B7280"
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

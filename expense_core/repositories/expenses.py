"""
Expense Repository

Persists the user's expense list through PersistentStore under a single
key (StoreSettings.expenses_key, "expense-storage" by default), newest
expense first.

IMPORTANT: every mutation is read-modify-write across awaits.
It is NOT atomic; two concurrent writers race and the last write wins.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional, Union

import structlog

from expense_core.config import get_settings
from expense_core.models.expense import (
    Category,
    DateRange,
    Expense,
    ExpensePeriod,
    PaymentMethod,
)
from expense_core.services.storage import NotFoundError, PersistentStore
from expense_core.utils.dates import Reference, get_date_range
from expense_core.utils.ids import generate_id


class ExpenseRepository:
    """
    CRUD and filtering over the stored expense list.

    Storage failures surface as StorageError subclasses
    (SerializationError, StorageWriteError, DeserializationError).
    """

    def __init__(self, store: PersistentStore, key: Optional[str] = None):
        self._store = store
        self._key = key or get_settings().store.expenses_key
        self._logger = structlog.get_logger(__name__)

    async def list_expenses(self) -> list[Expense]:
        """Return all stored expenses, newest first. Empty if none stored."""
        stored = (await self._store.get_item(self._key)).unwrap()
        if not stored:
            return []
        return [Expense.from_storage(item) for item in stored]

    async def _save(self, expenses: list[Expense]) -> None:
        payload = [expense.to_storage() for expense in expenses]
        (await self._store.set_item(self._key, payload)).unwrap()

    async def get_expense(self, expense_id: str) -> Optional[Expense]:
        for expense in await self.list_expenses():
            if expense.id == expense_id:
                return expense
        return None

    async def add_expense(
        self,
        amount: Union[Decimal, float, int, str],
        category: Category,
        date: Union[date, datetime, str],
        description: str = "",
        payment_method: Union[PaymentMethod, str] = PaymentMethod.CARD,
        **extra: Any,
    ) -> Expense:
        """
        Create an expense with a fresh id and store it at the head of the list.

        Raises:
            pydantic.ValidationError: If the fields are invalid (e.g. negative amount)
            StorageError: If the write fails
        """
        expense = Expense(
            id=generate_id(),
            amount=amount,
            category=category,
            date=date,
            description=description,
            payment_method=payment_method,
            **extra,
        )
        expenses = await self.list_expenses()
        await self._save([expense, *expenses])

        self._logger.info(
            "expense_added",
            expense_id=expense.id,
            category_id=category.id,
            amount=str(expense.amount),
        )
        return expense

    async def update_expense(self, expense_id: str, **changes: Any) -> Expense:
        """
        Apply field changes to a stored expense.

        Raises:
            ValueError: If changes try to reassign the id
            NotFoundError: If no expense has this id
            pydantic.ValidationError: If the result violates the model
        """
        if "id" in changes and changes["id"] != expense_id:
            raise ValueError("Expense id cannot be changed")
        changes.pop("id", None)

        expenses = await self.list_expenses()
        for index, expense in enumerate(expenses):
            if expense.id == expense_id:
                data = expense.model_dump()
                data.update(changes)
                updated = Expense.model_validate(data)
                expenses[index] = updated
                await self._save(expenses)
                self._logger.info(
                    "expense_updated",
                    expense_id=expense_id,
                    fields=sorted(changes),
                )
                return updated

        raise NotFoundError(
            "Expense not found", operation="update_expense", key=expense_id
        )

    async def delete_expense(self, expense_id: str) -> bool:
        """Delete an expense. Returns False if it did not exist."""
        expenses = await self.list_expenses()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            return False
        await self._save(remaining)
        self._logger.info("expense_deleted", expense_id=expense_id)
        return True

    async def get_by_category(self, category_id: str) -> list[Expense]:
        return [e for e in await self.list_expenses() if e.category.id == category_id]

    async def get_by_date_range(
        self,
        start: Union[date, datetime],
        end: Union[date, datetime],
    ) -> list[Expense]:
        """
        Expenses whose date lies in [start, end], both ends inclusive.

        A plain date as end covers that whole day.
        """
        if not isinstance(end, datetime):
            end = datetime.combine(end, time.max)
        date_range = DateRange(start=start, end=end)
        return [e for e in await self.list_expenses() if date_range.contains(e.date)]

    async def get_by_period(
        self,
        period: Union[ExpensePeriod, str],
        reference: Optional[Reference] = None,
    ) -> list[Expense]:
        """Expenses in the week/month/year containing reference (default: now)."""
        date_range = get_date_range(period, reference)
        return [e for e in await self.list_expenses() if date_range.contains(e.date)]

    async def relink_category(self, category: Category) -> int:
        """
        Replace the embedded copy of a category in every expense filed under it.

        Expenses embed categories by value, so renaming or recoloring a
        category only reaches history through this call.

        Returns:
            Number of expenses updated
        """
        expenses = await self.list_expenses()
        count = 0
        for index, expense in enumerate(expenses):
            if expense.category.id == category.id and expense.category != category:
                expenses[index] = expense.model_copy(update={"category": category})
                count += 1
        if count:
            await self._save(expenses)
            self._logger.info(
                "category_relinked", category_id=category.id, expenses=count
            )
        return count

    async def clear_all(self) -> None:
        """Remove the whole expense list."""
        (await self._store.remove_item(self._key)).unwrap()
        self._logger.info("expenses_cleared")

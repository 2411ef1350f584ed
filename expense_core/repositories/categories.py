"""
Category Repository

Persists the category set under StoreSettings.categories_key
("category-storage" by default). Until the user changes anything,
the built-in defaults are returned without being written.
"""

from decimal import Decimal
from typing import Any, Optional, Union

import structlog

from expense_core.config import get_settings
from expense_core.models.expense import Category
from expense_core.services.storage import DuplicateError, NotFoundError, PersistentStore
from expense_core.utils.ids import generate_uuid


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="Food", icon="🍕", color="#F59E0B"),
    Category(id="shopping", name="Shopping", icon="🛍️", color="#EC4899"),
    Category(id="transport", name="Transport", icon="🚗", color="#8B5CF6"),
    Category(id="health", name="Health & Fitness", icon="💪", color="#6366F1"),
    Category(id="education", name="Education", icon="📚", color="#3B82F6"),
    Category(id="other", name="Other", icon="⚪", color="#6B7280"),
)


class CategoryRepository:
    """CRUD over the stored category set."""

    def __init__(self, store: PersistentStore, key: Optional[str] = None):
        self._store = store
        self._key = key or get_settings().store.categories_key
        self._logger = structlog.get_logger(__name__)

    async def list_categories(self) -> list[Category]:
        stored = (await self._store.get_item(self._key)).unwrap()
        if stored is None:
            return list(DEFAULT_CATEGORIES)
        return [Category.model_validate(item) for item in stored]

    async def _save(self, categories: list[Category]) -> None:
        payload = [category.model_dump(mode="json") for category in categories]
        (await self._store.set_item(self._key, payload)).unwrap()

    async def get_category(self, category_id: str) -> Optional[Category]:
        for category in await self.list_categories():
            if category.id == category_id:
                return category
        return None

    async def add_category(
        self,
        name: str,
        icon: str = "",
        color: str = "",
        budget: Optional[Union[Decimal, float, int]] = None,
        category_id: Optional[str] = None,
    ) -> Category:
        """
        Add a category. A random UUID is used as id unless one is given.

        Raises:
            DuplicateError: If the id is already taken
        """
        category = Category(
            id=category_id or generate_uuid(),
            name=name,
            icon=icon,
            color=color,
            budget=budget,
        )
        categories = await self.list_categories()
        if any(existing.id == category.id for existing in categories):
            raise DuplicateError(
                "Category id already exists",
                operation="add_category",
                key=category.id,
            )
        categories.append(category)
        await self._save(categories)
        self._logger.info("category_added", category_id=category.id)
        return category

    async def update_category(self, category_id: str, **changes: Any) -> Category:
        """
        Apply changes to a category.

        Expenses already filed under it keep their embedded copy; use
        ExpenseRepository.relink_category to propagate.

        Raises:
            ValueError: If changes try to reassign the id
            NotFoundError: If the category does not exist
        """
        if "id" in changes and changes["id"] != category_id:
            raise ValueError("Category id cannot be changed")
        changes.pop("id", None)

        categories = await self.list_categories()
        for index, category in enumerate(categories):
            if category.id == category_id:
                updated = Category.model_validate({**category.model_dump(), **changes})
                categories[index] = updated
                await self._save(categories)
                return updated

        raise NotFoundError(
            "Category not found", operation="update_category", key=category_id
        )

    async def delete_category(self, category_id: str) -> bool:
        categories = await self.list_categories()
        remaining = [c for c in categories if c.id != category_id]
        if len(remaining) == len(categories):
            return False
        await self._save(remaining)
        self._logger.info("category_deleted", category_id=category_id)
        return True

    async def reset_to_defaults(self) -> list[Category]:
        categories = list(DEFAULT_CATEGORIES)
        await self._save(categories)
        return categories

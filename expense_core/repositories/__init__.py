"""Repositories: the caller-owned key scheme on top of PersistentStore."""

from expense_core.repositories.categories import DEFAULT_CATEGORIES, CategoryRepository
from expense_core.repositories.expenses import ExpenseRepository

__all__ = ["DEFAULT_CATEGORIES", "CategoryRepository", "ExpenseRepository"]

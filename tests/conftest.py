"""Shared fixtures for Expense Core tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from expense_core.config import get_settings
from expense_core.models.expense import Category, Expense
from expense_core.services.storage import InMemoryBackend, PersistentStore


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def store(backend):
    return PersistentStore(backend)


@pytest.fixture
def food():
    return Category(id="food", name="Food", icon="🍕", color="#F59E0B", budget=Decimal("200"))


@pytest.fixture
def transport():
    return Category(id="transport", name="Transport", icon="🚗", color="#8B5CF6")


@pytest.fixture
def make_expense(food):
    """Factory for expenses with sensible defaults."""
    counter = {"n": 0}

    def _make(amount="10.00", category=None, when=None, **extra):
        counter["n"] += 1
        return Expense(
            id=f"exp-{counter['n']}",
            amount=Decimal(str(amount)),
            category=category or food,
            date=when or datetime(2025, 8, 13, 12, 0),
            **extra,
        )

    return _make

"""
Core Data Models for Expense Core

These models define the schemas for expenses and the categories they
are filed under. They are designed to:
1. Enforce the id/amount invariants at runtime
2. Be serializable to plain JSON for the persistent store
3. Stay independent of the store (the store never imports them)

DESIGN DECISION: Categories are embedded in expenses BY VALUE.
Renaming a category does not touch historical expenses unless the
caller explicitly re-links them.
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS
# =============================================================================

class ExpensePeriod(str, Enum):
    """
    Calendar granularity used to bucket expenses for reporting.

    DESIGN DECISION: Periods are a closed set. Anything else is rejected
    by the date range calculator instead of silently falling back to a month.
    """
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class PaymentMethod(str, Enum):
    """
    Well-known payment methods.

    The expense field itself is an open string so new methods can be
    stored without a code change.
    """
    CARD = "card"
    CASH = "cash"
    TRANSFER = "transfer"


def _as_datetime(value: Any) -> Any:
    """Promote a plain date to midnight of that day."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


def wall_clock(value: datetime) -> datetime:
    """Drop tzinfo so naive and aware timestamps compare by local wall time."""
    return value.replace(tzinfo=None)


# =============================================================================
# CATEGORY
# =============================================================================

class Category(BaseModel):
    """
    Reference data an expense is filed under.

    icon and color are opaque tokens for the UI layer.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Stable slug, unique within the category set"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )
    icon: str = Field(
        default="",
        description="Identifier into the icon set"
    )
    color: str = Field(
        default="",
        description="Color token"
    )
    budget: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Monthly budget for the category, if any"
    )


# =============================================================================
# EXPENSE
# =============================================================================

class Expense(BaseModel):
    """
    A single spending record.

    CRITICAL: id is assigned once, before first persistence, and can
    never be reassigned. amount is never negative, including after
    an update.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        frozen=True,
        description="Unique id within the store"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Currency-agnostic magnitude"
    )
    category: Category
    description: str = Field(
        default="",
        description="Free text, never truncated"
    )
    date: datetime = Field(
        ...,
        description="When the expense happened (day precision or better)"
    )
    payment_method: str = Field(
        default=PaymentMethod.CARD.value,
        min_length=1,
        description="Payment method tag (card, cash, transfer, ...)"
    )

    # Optional extras
    receipt: Optional[str] = Field(
        default=None,
        description="URL of a receipt image"
    )
    location: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @field_validator('date', mode='before')
    @classmethod
    def promote_date(cls, v: Any) -> Any:
        return _as_datetime(v)

    @field_validator('payment_method', mode='before')
    @classmethod
    def normalize_payment_method(cls, v: Any) -> Any:
        """Store enum members by value and normalize case."""
        if isinstance(v, PaymentMethod):
            return v.value
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('tags')
    @classmethod
    def drop_blank_tags(cls, v: list[str]) -> list[str]:
        return [tag.strip() for tag in v if tag.strip()]

    def to_storage(self) -> dict[str, Any]:
        """
        Convert to a JSON-compatible dict for the persistent store.

        Dates become ISO-8601 strings and amounts become decimal strings.
        """
        return self.model_dump(mode="json")

    @classmethod
    def from_storage(cls, data: dict[str, Any]) -> 'Expense':
        """Rebuild an expense from its stored dict."""
        return cls.model_validate(data)


# =============================================================================
# DATE RANGE
# =============================================================================

class DateRange(BaseModel):
    """Inclusive [start, end] boundaries of a reporting period."""
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator('start', 'end', mode='before')
    @classmethod
    def promote_dates(cls, v: Any) -> Any:
        return _as_datetime(v)

    @model_validator(mode='after')
    def validate_order(self) -> 'DateRange':
        if self.end < self.start:
            raise ValueError("Range end cannot be before start")
        return self

    def contains(self, value: Union[date, datetime, str]) -> bool:
        """
        Check whether a timestamp falls inside the range (both ends inclusive).

        Plain dates are treated as midnight. When one side is timezone-aware
        and the other naive, the value's wall-clock time is compared.
        """
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        value = _as_datetime(value)

        if (value.tzinfo is None) != (self.start.tzinfo is None):
            value = value.replace(tzinfo=self.start.tzinfo)

        return self.start <= value <= self.end

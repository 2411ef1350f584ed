"""Pure helpers: ids, date ranges, formatting, percentages."""

from expense_core.utils.aggregation import calculate_percentage
from expense_core.utils.dates import (
    InvalidPeriodError,
    coerce_period,
    get_date_range,
    get_previous_range,
)
from expense_core.utils.formatting import FormatError, format_currency, format_date
from expense_core.utils.ids import generate_id, generate_uuid

__all__ = [
    "FormatError",
    "InvalidPeriodError",
    "calculate_percentage",
    "coerce_period",
    "format_currency",
    "format_date",
    "generate_id",
    "generate_uuid",
    "get_date_range",
    "get_previous_range",
]

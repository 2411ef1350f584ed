"""
Formatting Utilities

Renders money and dates for display under the single locale the
application is configured with (FormatSettings.locale).

Uses Babel (CLDR data) so grouping, decimal marks, currency symbol
placement and month/day names all follow the locale.
"""

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from babel.core import UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.dates import format_datetime as babel_format_datetime
from babel.numbers import UnknownCurrencyError, validate_currency
from babel.numbers import format_currency as babel_format_currency

from expense_core.config import get_settings


class FormatError(ValueError):
    """Input cannot be rendered (non-finite amount, invalid date, bad pattern)."""
    pass


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal, str)):
        raise FormatError(f"Amount must be numeric, got {type(amount).__name__}")
    try:
        value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    except InvalidOperation:
        raise FormatError(f"Amount is not a number: {amount!r}") from None
    if not value.is_finite():
        raise FormatError(f"Amount must be finite, got {amount!r}")
    return value


def format_currency(
    amount: Union[int, float, Decimal, str],
    currency_code: Optional[str] = None,
) -> str:
    """
    Render an amount as money with exactly two fraction digits.

    Args:
        amount: The value to render. Numeric strings are accepted.
        currency_code: ISO 4217 code. Defaults to FormatSettings.default_currency.

    Raises:
        FormatError: If amount is NaN, infinite or not numeric,
                     or the currency code is unknown
    """
    settings = get_settings().formatting
    value = _to_decimal(amount)
    code = (currency_code or settings.default_currency).upper()

    try:
        validate_currency(code)
        # currency_digits=False keeps the locale pattern's two decimals even
        # for currencies such as JPY whose default is zero.
        return babel_format_currency(
            value,
            code,
            locale=settings.locale,
            currency_digits=False,
        )
    except UnknownCurrencyError as e:
        raise FormatError(f"Unknown currency code: {code}") from e
    except UnknownLocaleError as e:
        raise FormatError(f"Unknown locale: {settings.locale}") from e


def _to_date(value) -> Union[date, datetime]:
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise FormatError(f"Not an ISO-8601 date: {value!r}") from None
    if isinstance(value, float) and math.isnan(value):
        raise FormatError("Date cannot be NaN")
    raise FormatError(f"Date must be a date, datetime or ISO string, got {type(value).__name__}")


def format_date(
    value: Union[date, datetime, str],
    pattern: Optional[str] = None,
) -> str:
    """
    Render a date using a CLDR pattern in the application locale.

    Args:
        value: date, datetime, or ISO-8601 string (as stored by callers)
        pattern: CLDR pattern such as "dd/MM/yyyy" or "d 'de' MMMM".
                 Defaults to FormatSettings.date_pattern.

    Raises:
        FormatError: If the date or the pattern is invalid
    """
    settings = get_settings().formatting
    parsed = _to_date(value)
    pattern = pattern or settings.date_pattern

    try:
        if isinstance(parsed, datetime):
            return babel_format_datetime(
                parsed,
                format=pattern,
                tzinfo=parsed.tzinfo,
                locale=settings.locale,
            )
        return babel_format_date(parsed, format=pattern, locale=settings.locale)
    except (ValueError, KeyError, AttributeError) as e:
        raise FormatError(f"Cannot format {parsed!r} with pattern {pattern!r}: {e}") from e

"""Percentage helper used by the summary views."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def calculate_percentage(part: Number, total: Number) -> int:
    """
    Return part as a whole-number percentage of total.

    Rounds half away from zero (12.5 -> 13, -12.5 -> -13).
    A zero total yields 0 instead of raising.
    """
    if total == 0:
        return 0
    ratio = Decimal(str(part)) * 100 / Decimal(str(total))
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

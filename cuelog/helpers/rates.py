"""Rate Calculator - Pure functions for rounded ratios and percentages."""

import math
from typing import Union

Number = Union[int, float]


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2).

    Python's round() uses banker's rounding, which would report 12.5% as 12.
    """
    return int(math.floor(value + 0.5))


def ratio(part: Number, whole: Number) -> int:
    """
    Rounded part / whole, or 0 when whole is zero.

    This is a PURE FUNCTION - it never raises on empty data.
    """
    if not whole:
        return 0
    return round_half_up(part / whole)


def percentage(part: Number, whole: Number) -> int:
    """
    Rounded integer percentage of part in whole, or 0 when whole is zero.

    Examples:
        percentage(6, 10) -> 60
        percentage(1, 8) -> 13
        percentage(5, 0) -> 0
    """
    if not whole:
        return 0
    return round_half_up(part * 100 / whole)

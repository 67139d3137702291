"""
Small numeric helpers shared by the scoring classes
"""
from __future__ import annotations

import math
from typing import Iterable


def divide(numerator: float, denominator: float) -> float:
    """
    Divide two numbers, returning 0 when the denominator is 0.

    Args:
        numerator: Dividend
        denominator: Divisor

    Returns:
        numerator / denominator, or 0.0 if denominator == 0
    """
    if denominator == 0:
        return 0.0
    return numerator / denominator


def limits(values: Iterable[float]) -> tuple[float, float]:
    """
    Get the (min, max) of a sequence of values.

    NaN values are ignored. An empty (or all-NaN) sequence gives (nan, nan).
    """
    lo = math.inf
    hi = -math.inf
    for value in values:
        if value < lo:
            lo = value
        if value > hi:
            hi = value
    if lo > hi:
        return math.nan, math.nan
    return lo, hi


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded towards +inf"""
    return math.floor(value + 0.5)

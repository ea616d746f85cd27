"""Numeric helpers."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(12.5) == 12); learner-facing
    percentages use the schoolbook rule (12.5 -> 13).
    """
    return math.floor(value + 0.5)


def percent(part: int, whole: int) -> int:
    """Half-up rounded percentage, 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)

"""
Rounding helpers.

Python's built-in ``round()`` uses banker's rounding (``round(0.5) == 0``).
Costs and scores in this project round half away from zero on the positive
axis (``0.5 -> 1``, ``2.345 -> 2.35`` at two places), which is what the
dashboard users expect when they compare numbers by hand.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round ``value`` to the nearest integer, halves rounding up."""
    return math.floor(value + 0.5)


def round_to(value: float, places: int) -> float:
    """Round ``value`` to ``places`` decimals, halves rounding up."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor

"""Numeric helpers shared by profiles and commands."""

from __future__ import annotations

import math
from fractions import Fraction


def multiples_within_range(step: int, start: int, end: int) -> tuple[int, ...]:
    """All multiples of `step` in the inclusive range [start, end], ascending."""
    first = -(-start // step) * step
    return tuple(range(first, end + 1, step))


def percentage_within_range(percentage: float, start: int, end: int) -> int:
    """Scale `percentage` (0-100) linearly into [start, end], rounding halves up."""
    scaled = start + Fraction(percentage) * (end - start) / 100
    return math.floor(scaled + Fraction(1, 2))

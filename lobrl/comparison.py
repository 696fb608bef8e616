"""Tolerant price comparison and clamping helpers."""

from __future__ import annotations

TOLERANCE = 10000


def price_key(value: float) -> int:
    """Return an integer key under which prices equal to 1/TOLERANCE compare equal."""
    return round(value * TOLERANCE)


def approx_equal(a: float, b: float) -> bool:
    return price_key(a) == price_key(b)


def ulb(value, lb, ub):
    """Clamp ``value`` into ``[lb, ub]``."""
    return max(min(value, ub), lb)
"""Scalar helpers shared by the geometry and drawable layers."""

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


def lerp(start: float, end: float, fraction: float) -> float:
    return start + fraction * (end - start)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going up (``127.5 -> 128``)."""
    return int(math.floor(value + 0.5))


__all__ = ["clamp", "lerp", "round_half_up"]

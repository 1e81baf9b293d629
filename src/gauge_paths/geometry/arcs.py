"""Polar helpers for dial geometry.

Angles are in degrees with 0 = east, 90 = north, 180 = west and 270 = south,
on a surface whose y axis points down.
"""

from __future__ import annotations

import math

import numpy as np

from .primitives import Path, Point2D, Rect2D

ARC_SAMPLES = 100


def point_on_arc(rect: Rect2D, degrees: float, offset: float = 0.0) -> Point2D:
    """Point on the ellipse inscribed in ``rect`` at ``degrees``.

    ``offset`` is added to both radii, so positive values move the point
    outwards from the ellipse.
    """
    center = rect.center
    rads = (math.pi / 180.0) * (degrees + 90.0)
    x = center.x + (offset + rect.width / 2.0) * math.sin(rads)
    y = center.y + (offset + rect.height / 2.0) * math.cos(rads)
    return Point2D(x, y)


def arc_points(
    rect: Rect2D, start_degrees: float, sweep_degrees: float, samples: int = ARC_SAMPLES
) -> np.ndarray:
    """``samples + 1`` points from ``start_degrees`` walking back by ``sweep_degrees``.

    Vectorised form of :func:`point_on_arc`; row ``i`` is the point at
    ``start_degrees - i * sweep_degrees / samples``.
    """
    if samples < 1:
        raise ValueError("samples must be at least 1")
    step = sweep_degrees / float(samples)
    degrees = start_degrees - np.arange(samples + 1, dtype=np.float64) * step
    rads = (math.pi / 180.0) * (degrees + 90.0)
    center = rect.center
    xs = center.x + (rect.width / 2.0) * np.sin(rads)
    ys = center.y + (rect.height / 2.0) * np.cos(rads)
    return np.column_stack([xs, ys])


def arc_path(rect: Rect2D, start_degrees: float, sweep_degrees: float) -> Path:
    """Open curve following the inscribed ellipse of ``rect``."""
    pts = arc_points(rect, start_degrees, sweep_degrees)
    path = Path()
    path.add_curve([(float(x), float(y)) for x, y in pts])
    return path


__all__ = ["ARC_SAMPLES", "arc_path", "arc_points", "point_on_arc"]

"""Outline, highlight and background shading for a gauge face."""

from __future__ import annotations

import enum
from typing import Union

from .arcs import arc_points
from .color import TRANSPARENT, Color
from .primitives import Path, Point2D, Rect2D
from .shading import LinearGradient, RadialGradient

ROUNDED_RECT_RADIUS_PERCENT = 0.05

SHINE_ARC_START = 180.0
SHINE_ARC_SWEEP = 142.0


class ControlShape(enum.Enum):
    RECT = "rect"
    ROUNDED_RECT = "rounded_rect"
    CIRCULAR = "circular"


def _inset(container: Rect2D) -> Rect2D:
    # Keep the right/bottom edges inside the pixel grid.
    return Rect2D(container.x, container.y, container.width - 1, container.height - 1)


def _corner_radius(rect: Rect2D) -> int:
    return int(min(rect.width, rect.height) * ROUNDED_RECT_RADIUS_PERCENT)


def shape_path(container: Rect2D, shape: ControlShape) -> Path:
    """Outline of a control face of the given ``shape``."""
    rect = _inset(container)
    path = Path()
    if shape is ControlShape.RECT:
        path.add_rectangle(rect)
    elif shape is ControlShape.ROUNDED_RECT:
        path.add_rounded_rectangle(rect, _corner_radius(rect))
    elif shape is ControlShape.CIRCULAR:
        path.add_ellipse(rect)
    else:
        raise ValueError(f"unsupported shape: {shape!r}")
    return path


def shine_path(container: Rect2D, shape: ControlShape) -> Path:
    """Glossy highlight over the upper part of a control face.

    Empty when the inset container has no area.
    """
    rect = _inset(container)
    path = Path()
    if rect.is_empty:
        return path

    half = Rect2D(rect.x, rect.y, rect.width, rect.height / 2.0)
    if shape is ControlShape.RECT:
        path.add_rectangle(half)
    elif shape is ControlShape.ROUNDED_RECT:
        path.add_rounded_rectangle(half, _corner_radius(half))
    elif shape is ControlShape.CIRCULAR:
        pts = arc_points(rect, SHINE_ARC_START, SHINE_ARC_SWEEP)
        arc = [(float(x), float(y)) for x, y in pts]
        path.add_curve(arc)
        x, y, w, h = container.x, container.y, container.width, container.height
        path.add_curve(
            [arc[-1], (x + w * 0.70, y + h * 0.33), (x + w * 0.25, y + h * 0.5), arc[0]]
        )
        path.close_figure()
    else:
        raise ValueError(f"unsupported shape: {shape!r}")
    return path


def gradient_fill(
    container: Rect2D, shape: ControlShape, color: Color
) -> Union[LinearGradient, RadialGradient]:
    """Background shading fading ``color`` out to transparent."""
    if shape in (ControlShape.RECT, ControlShape.ROUNDED_RECT):
        return LinearGradient(container, color, TRANSPARENT, vertical=True)
    if shape is ControlShape.CIRCULAR:
        return RadialGradient(
            container,
            color,
            TRANSPARENT,
            center_point=Point2D(
                container.left + container.width * 0.5,
                container.bottom + container.height,
            ),
        )
    raise ValueError(f"unsupported shape: {shape!r}")


__all__ = [
    "ControlShape",
    "ROUNDED_RECT_RADIUS_PERCENT",
    "gradient_fill",
    "shape_path",
    "shine_path",
]

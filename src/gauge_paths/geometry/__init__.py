"""Toolkit-independent geometry: primitives, polar helpers, shapes, colors."""

from .arcs import arc_path, arc_points, point_on_arc
from .color import BLACK, RED, TRANSPARENT, WHITE, Color, mix_color
from .primitives import FillRule, Path, PathPointType, Point2D, Rect2D, Region
from .shading import LinearGradient, RadialGradient
from .shapes import ControlShape, gradient_fill, shape_path, shine_path

__all__ = [
    "BLACK",
    "RED",
    "TRANSPARENT",
    "WHITE",
    "Color",
    "ControlShape",
    "FillRule",
    "LinearGradient",
    "Path",
    "PathPointType",
    "Point2D",
    "RadialGradient",
    "Rect2D",
    "Region",
    "arc_path",
    "arc_points",
    "gradient_fill",
    "mix_color",
    "point_on_arc",
    "shape_path",
    "shine_path",
]

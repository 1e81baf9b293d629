"""Gradient descriptions that hosts translate into their own brushes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..utils.geometry import clamp
from .color import Color, mix_color
from .primitives import Point2D, Rect2D


@dataclass(frozen=True)
class LinearGradient:
    """Blend from ``start_color`` to ``end_color`` across ``bounds``.

    Vertical gradients run top to bottom, horizontal ones left to right.
    """

    bounds: Rect2D
    start_color: Color
    end_color: Color
    vertical: bool = True

    def color_at(self, t: float) -> Color:
        return mix_color(self.start_color, self.end_color, clamp(t, 0.0, 1.0))


@dataclass(frozen=True)
class RadialGradient:
    """Blend from a center color out to the edge of an ellipse.

    ``focus_scale`` is the share of the radius that stays pure center color
    before blending towards ``surround_color`` begins.
    """

    bounds: Rect2D
    center_color: Color
    surround_color: Color
    center_point: Optional[Point2D] = None
    focus_scale: float = 0.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.focus_scale <= 1.0:
            raise ValueError(
                f"focus_scale must be within [0, 1], got {self.focus_scale!r}"
            )

    @property
    def center(self) -> Point2D:
        if self.center_point is not None:
            return self.center_point
        return self.bounds.center

    def color_at(self, t: float) -> Color:
        """Color at normalised distance ``t`` (0 = center, 1 = edge)."""
        t = clamp(t, 0.0, 1.0)
        if t <= self.focus_scale:
            return self.center_color
        span = 1.0 - self.focus_scale
        return mix_color(
            self.center_color, self.surround_color, (t - self.focus_scale) / span
        )


__all__ = ["LinearGradient", "RadialGradient"]

"""ARGB colors and channel blending."""

from __future__ import annotations

from dataclasses import dataclass
import operator
from typing import Tuple

from ..utils.geometry import lerp, round_half_up


@dataclass(frozen=True)
class Color:
    """An 8-bit ARGB color."""

    a: int = 255
    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        for name in ("a", "r", "g", "b"):
            value = operator.index(getattr(self, name))
            if not 0 <= value <= 255:
                raise ValueError(
                    f"color channel {name} must be in 0..255, got {value!r}"
                )
            object.__setattr__(self, name, int(value))

    def with_alpha(self, alpha: int) -> "Color":
        return Color(alpha, self.r, self.g, self.b)

    def scaled_alpha(self, opacity: float) -> "Color":
        """Same RGB with alpha ``round(255 * opacity)``."""
        if not 0.0 <= opacity <= 1.0:
            raise ValueError(f"opacity must be within [0, 1], got {opacity!r}")
        return self.with_alpha(round_half_up(255 * opacity))

    def mix(self, other: "Color", fraction: float) -> "Color":
        return mix_color(self, other, fraction)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.a, self.r, self.g, self.b)

    def to_hex(self) -> str:
        return f"#{self.a:02x}{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Color(255, 0, 0, 0)
WHITE = Color(255, 255, 255, 255)
RED = Color(255, 255, 0, 0)
TRANSPARENT = Color(0, 255, 255, 255)


def _mix_channel(start: int, end: int, fraction: float) -> int:
    return int(lerp(start, end, fraction))


def mix_color(start: Color, end: Color, fraction: float) -> Color:
    """Color ``fraction`` of the way from ``start`` to ``end``.

    Each channel is ``int(s + fraction * (e - s))``. For fractions in
    ``(0, 1]`` this is the same value as stepping up from the lower channel
    (or down from the higher one) by the scaled difference.
    """
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"fraction must be within [0, 1], got {fraction!r}")
    return Color(
        _mix_channel(start.a, end.a, fraction),
        _mix_channel(start.r, end.r, fraction),
        _mix_channel(start.g, end.g, fraction),
        _mix_channel(start.b, end.b, fraction),
    )


__all__ = ["Color", "BLACK", "WHITE", "RED", "TRANSPARENT", "mix_color"]

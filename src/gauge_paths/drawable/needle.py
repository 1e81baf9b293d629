"""Dial needle with a shaded hub and a drop shadow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..geometry import (
    BLACK,
    Color,
    FillRule,
    Path,
    RadialGradient,
    Rect2D,
    point_on_arc,
)
from ..models import NeedleSpec
from .base import Drawable, DrawOp, DrawOpKind

DROP_SHADOW_X = 0.01
DROP_SHADOW_Y = 0.01
HUB_BEVEL_PERCENT = 0.8
SHADOW_COLOR = BLACK.with_alpha(100)
OUTLINE_DARKEN = 0.75


@dataclass(frozen=True)
class NeedleGeometry:
    needle: Path
    hub: Path
    shadow: Path
    hub_rect: Rect2D


def _scaled_rect(container: Rect2D, percent: float) -> Rect2D:
    """``container`` shrunk around its center to ``percent`` of its size."""
    return container.deflated(
        container.width * (1.0 - percent) / 2.0,
        container.height * (1.0 - percent) / 2.0,
    )


def compute_needle_paths(container: Rect2D, spec: NeedleSpec) -> NeedleGeometry:
    """Needle blade, hub and shadow outlines for ``container``."""
    hub_rect = _scaled_rect(container, spec.hub_size_percent)
    needle_rect = _scaled_rect(container, spec.radius_percent)
    base_rect = _scaled_rect(container, spec.base_size_percent)
    tip_rect = needle_rect.inflated(
        container.width * spec.tip_extension_percent / 2.0,
        container.height * spec.tip_extension_percent / 2.0,
    )

    angle = spec.orientation_degrees
    half_tip = spec.tip_width_degrees / 2.0
    tip = point_on_arc(tip_rect, angle)
    tip_more = point_on_arc(needle_rect, angle + half_tip)
    tip_less = point_on_arc(needle_rect, angle - half_tip)
    base_more = point_on_arc(base_rect, angle + 90.0)
    base_less = point_on_arc(base_rect, angle - 90.0)
    base_ext = point_on_arc(base_rect, angle + 180.0)

    needle = Path()
    needle.add_curve([base_less, base_ext, base_more])
    needle.add_line(base_more, tip_more)
    needle.add_curve([tip_more, tip, tip_less])
    needle.close_figure()

    hub = Path()
    hub.add_ellipse(hub_rect)

    dx = container.width * DROP_SHADOW_X
    dy = container.height * DROP_SHADOW_Y
    shadow = Path(FillRule.WINDING)
    shadow.add_ellipse(hub_rect.enlarged(dx, dy))
    with needle.translated(dx, dy) as moved:
        shadow.add_path(moved, connect=True)

    return NeedleGeometry(needle, hub, shadow, hub_rect)


class Needle(Drawable[NeedleSpec, NeedleGeometry]):
    """A needle that owns its blade, hub and shadow paths."""

    def __init__(self, spec: Optional[NeedleSpec] = None) -> None:
        super().__init__(spec if spec is not None else NeedleSpec())
        self.calculate_paths(Rect2D())
        self._needs_layout = True

    @property
    def needle_path(self) -> Path:
        return self.geometry.needle

    @property
    def hub_path(self) -> Path:
        return self.geometry.hub

    @property
    def shadow_path(self) -> Path:
        return self.geometry.shadow

    @property
    def outline_color(self) -> Color:
        return self.spec.needle_color.mix(BLACK, OUTLINE_DARKEN)

    def hub_fill(self) -> RadialGradient:
        return RadialGradient(
            self.geometry.hub_rect,
            self.spec.hub_color,
            self.spec.hub_shade_color,
            focus_scale=HUB_BEVEL_PERCENT,
        )

    def _build_geometry(self, container: Rect2D) -> NeedleGeometry:
        return compute_needle_paths(container, self.spec)

    def _paths_of(self, geometry: NeedleGeometry) -> List[Path]:
        return [geometry.shadow, geometry.needle, geometry.hub]

    def draw_plan(self) -> List[DrawOp]:
        geo = self.geometry
        needle_ops = [
            DrawOp(DrawOpKind.FILL, geo.needle, self.spec.needle_color),
            DrawOp(DrawOpKind.STROKE, geo.needle, self.outline_color),
        ]
        hub_ops = [
            DrawOp(DrawOpKind.FILL, geo.hub, self.hub_fill()),
            DrawOp(DrawOpKind.STROKE, geo.hub, self.spec.hub_shade_color),
        ]
        ops: List[DrawOp] = []
        if self.spec.shadows_visible:
            ops.append(DrawOp(DrawOpKind.FILL, geo.shadow, SHADOW_COLOR))
        if self.spec.needle_above_hub:
            ops += hub_ops + needle_ops
        else:
            ops += needle_ops + hub_ops
        return ops


__all__ = [
    "DROP_SHADOW_X",
    "DROP_SHADOW_Y",
    "HUB_BEVEL_PERCENT",
    "Needle",
    "NeedleGeometry",
    "SHADOW_COLOR",
    "compute_needle_paths",
]

"""Single segment of an LED / seven-segment style bar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..geometry import Color, Path, Point2D, Rect2D
from ..models import BarSegmentSpec, SegmentCorners, SegmentOrientation
from .base import Drawable, DrawOp, DrawOpKind


@dataclass(frozen=True)
class SegmentGeometry:
    path: Path
    fill_color: Color


def segment_outline(container: Rect2D, spec: BarSegmentSpec) -> List[Point2D]:
    """Outline vertices of a segment, starting at the left-center point.

    Square corners contribute the rectangle corner itself; notched corners
    taper towards the neighbouring segment. A square top-left corner is
    repeated at the end to lead back to the start.
    """
    horizontal = spec.orientation is SegmentOrientation.HORIZONTAL
    if horizontal:
        rect = container.deflated(spec.padding, 0.0)
    else:
        rect = container.deflated(0.0, spec.padding)

    top_left = Point2D(rect.left, rect.top)
    top_right = Point2D(rect.right, rect.top)
    bottom_left = Point2D(rect.left, rect.bottom)
    bottom_right = Point2D(rect.right, rect.bottom)

    x_off = spec.tip_length if horizontal else 0.0
    y_off = 0.0 if horizontal else spec.tip_length

    top_left_off = Point2D(top_left.x + x_off, top_left.y + y_off)
    top_right_off = Point2D(top_right.x - x_off, top_right.y + y_off)
    bottom_left_off = Point2D(bottom_left.x + x_off, bottom_left.y - y_off)
    bottom_right_off = Point2D(bottom_right.x - x_off, bottom_right.y - y_off)

    top_center = Point2D(rect.left + rect.width / 2.0, rect.top + y_off / 2.0)
    left_center = Point2D(rect.left + x_off / 2.0, rect.top + rect.height / 2.0)
    bottom_center = Point2D(top_center.x, rect.bottom - y_off / 2.0)
    right_center = Point2D(rect.right - x_off / 2.0, left_center.y)

    corners = spec.corners
    points = [left_center]

    if SegmentCorners.TOP_LEFT in corners:
        points.append(top_left)
    else:
        points += [top_left_off, top_center]

    if SegmentCorners.TOP_RIGHT in corners:
        points.append(top_right)
    else:
        points.append(top_right_off)

    if SegmentCorners.BOTTOM_RIGHT in corners:
        points.append(bottom_right)
    else:
        points += [right_center, bottom_right_off]

    if SegmentCorners.BOTTOM_LEFT in corners:
        points.append(bottom_left)
    else:
        points += [bottom_center, bottom_left_off]

    if SegmentCorners.TOP_LEFT in corners:
        points.append(top_left)

    return points


def compute_segment_path(container: Rect2D, spec: BarSegmentSpec) -> SegmentGeometry:
    """Closed outline of one segment and the color to fill it with."""
    path = Path()
    path.add_lines(segment_outline(container, spec))
    path.close_figure()
    return SegmentGeometry(path, spec.fill_color)


class DigitalBar(Drawable[BarSegmentSpec, SegmentGeometry]):
    """A bar segment that owns its outline and redraw region."""

    def __init__(self, spec: Optional[BarSegmentSpec] = None) -> None:
        super().__init__(spec if spec is not None else BarSegmentSpec())
        self.calculate_paths(Rect2D())
        self._needs_layout = True

    @property
    def path(self) -> Path:
        return self.geometry.path

    @property
    def fill_color(self) -> Color:
        return self.spec.fill_color

    def _build_geometry(self, container: Rect2D) -> SegmentGeometry:
        return compute_segment_path(container, self.spec)

    def _paths_of(self, geometry: SegmentGeometry) -> List[Path]:
        return [geometry.path]

    def draw_plan(self) -> List[DrawOp]:
        return [DrawOp(DrawOpKind.FILL, self.path, self.fill_color)]


__all__ = ["DigitalBar", "SegmentGeometry", "compute_segment_path", "segment_outline"]

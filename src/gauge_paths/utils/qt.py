"""Qt helpers that present core geometry on a ``QPainter``."""

from typing import Iterable, Union

from PySide6 import QtCore, QtGui

from ..drawable.base import Drawable, DrawOp, DrawOpKind, Paint
from ..geometry import (
    Color,
    FillRule,
    LinearGradient,
    Path,
    PathPointType,
    RadialGradient,
    Rect2D,
    Region,
)


def to_qcolor(color: Color) -> QtGui.QColor:
    return QtGui.QColor(color.r, color.g, color.b, color.a)


def to_qrectf(rect: Rect2D) -> QtCore.QRectF:
    return QtCore.QRectF(rect.x, rect.y, rect.width, rect.height)


def to_rect2d(rect: Union[QtCore.QRect, QtCore.QRectF]) -> Rect2D:
    return Rect2D(
        float(rect.x()), float(rect.y()), float(rect.width()), float(rect.height())
    )


def to_qpainter_path(path: Path) -> QtGui.QPainterPath:
    """Convert a :class:`~gauge_paths.geometry.Path` into a ``QPainterPath``."""
    qpath = QtGui.QPainterPath()
    if path.fill_rule is FillRule.WINDING:
        qpath.setFillRule(QtCore.Qt.FillRule.WindingFill)
    else:
        qpath.setFillRule(QtCore.Qt.FillRule.OddEvenFill)
    for figure in path.figures():
        pts = figure.points
        types = figure.types
        qpath.moveTo(float(pts[0, 0]), float(pts[0, 1]))
        i = 1
        while i < len(types):
            if types[i] == PathPointType.BEZIER and i + 2 < len(types):
                qpath.cubicTo(
                    float(pts[i, 0]),
                    float(pts[i, 1]),
                    float(pts[i + 1, 0]),
                    float(pts[i + 1, 1]),
                    float(pts[i + 2, 0]),
                    float(pts[i + 2, 1]),
                )
                i += 3
            else:
                qpath.lineTo(float(pts[i, 0]), float(pts[i, 1]))
                i += 1
        if figure.closed:
            qpath.closeSubpath()
    return qpath


def to_qregion(region: Union[Region, Iterable[Rect2D]]) -> QtGui.QRegion:
    """Coarse ``QRegion`` made of the bounding boxes of the region's pieces.

    Boxes are grown by a pixel so antialiased edges are repainted too.
    """
    rects = region.rects() if isinstance(region, Region) else list(region)
    qregion = QtGui.QRegion()
    for rect in rects:
        aligned = to_qrectf(rect.inflated(1.0, 1.0)).toAlignedRect()
        if not aligned.isEmpty():
            qregion = qregion.united(aligned)
    return qregion


def _relative(rect: Rect2D, x: float, y: float) -> QtCore.QPointF:
    w = rect.width or 1.0
    h = rect.height or 1.0
    return QtCore.QPointF((x - rect.x) / w, (y - rect.y) / h)


def to_qbrush(paint: Paint) -> QtGui.QBrush:
    """Brush for a flat color or a gradient description.

    Gradients use object-bounding coordinates so they follow whatever path
    they fill.
    """
    if isinstance(paint, Color):
        return QtGui.QBrush(to_qcolor(paint))
    if isinstance(paint, LinearGradient):
        end = QtCore.QPointF(0.0, 1.0) if paint.vertical else QtCore.QPointF(1.0, 0.0)
        linear = QtGui.QLinearGradient(QtCore.QPointF(0.0, 0.0), end)
        linear.setCoordinateMode(QtGui.QGradient.CoordinateMode.ObjectBoundingMode)
        linear.setColorAt(0.0, to_qcolor(paint.start_color))
        linear.setColorAt(1.0, to_qcolor(paint.end_color))
        return QtGui.QBrush(linear)
    if isinstance(paint, RadialGradient):
        center = _relative(paint.bounds, paint.center.x, paint.center.y)
        radial = QtGui.QRadialGradient(center, 0.5)
        radial.setCoordinateMode(QtGui.QGradient.CoordinateMode.ObjectBoundingMode)
        radial.setColorAt(0.0, to_qcolor(paint.center_color))
        if paint.focus_scale > 0.0:
            radial.setColorAt(paint.focus_scale, to_qcolor(paint.center_color))
        radial.setColorAt(1.0, to_qcolor(paint.surround_color))
        return QtGui.QBrush(radial)
    raise TypeError(f"unsupported paint: {paint!r}")


def execute(painter: QtGui.QPainter, op: DrawOp) -> None:
    qpath = to_qpainter_path(op.path)
    if op.kind is DrawOpKind.FILL:
        painter.fillPath(qpath, to_qbrush(op.paint))
    else:
        pen = QtGui.QPen(to_qbrush(op.paint), op.width)
        painter.strokePath(qpath, pen)


def paint_drawable(painter: QtGui.QPainter, drawable: Drawable) -> None:
    """Run a drawable's draw plan in order."""
    for op in drawable.draw_plan():
        execute(painter, op)


__all__ = [
    "execute",
    "paint_drawable",
    "to_qbrush",
    "to_qcolor",
    "to_qpainter_path",
    "to_qrectf",
    "to_qregion",
    "to_rect2d",
]

"""Toolkit-independent points, rectangles, paths and redraw regions."""

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Iterable, Iterator, List, NamedTuple, Sequence, Tuple

import numpy as np

PointLike = Tuple[float, float]

# Cubic Bezier handle length for a quarter ellipse.
KAPPA = 0.5522847498307936

CLOSE_MARKER = 0x80
TYPE_MASK = 0x07

DEFAULT_BEZIER_STEPS = 16


class PathPointType(enum.IntEnum):
    """Role of a point inside a :class:`Path` figure."""

    START = 0
    LINE = 1
    BEZIER = 3


class FillRule(enum.Enum):
    ALTERNATE = "alternate"
    WINDING = "winding"


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point2D":
        return Point2D(self.x + dx, self.y + dy)

    def as_tuple(self) -> PointLike:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect2D:
    """Axis-aligned rectangle in screen coordinates (y grows downwards)."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point2D:
        return Point2D(self.x + self.width / 2.0, self.y + self.height / 2.0)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inflated(self, dx: float, dy: float) -> "Rect2D":
        """Grow by ``dx``/``dy`` on every side; negative values shrink."""
        return Rect2D(
            self.x - dx, self.y - dy, self.width + 2.0 * dx, self.height + 2.0 * dy
        )

    def deflated(self, dx: float, dy: float) -> "Rect2D":
        return self.inflated(-dx, -dy)

    def enlarged(self, dw: float, dh: float) -> "Rect2D":
        """Grow width and height while keeping the top-left corner in place."""
        return Rect2D(self.x, self.y, self.width + dw, self.height + dh)

    def translated(self, dx: float, dy: float) -> "Rect2D":
        return Rect2D(self.x + dx, self.y + dy, self.width, self.height)

    def united(self, other: "Rect2D") -> "Rect2D":
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect2D(left, top, right - left, bottom - top)

    @classmethod
    def bounding(cls, points: np.ndarray) -> "Rect2D":
        """Smallest rectangle containing every row of an ``(N, 2)`` array."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if pts.shape[0] == 0:
            return cls()
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        size = hi - lo
        return cls(float(lo[0]), float(lo[1]), float(size[0]), float(size[1]))


class Figure(NamedTuple):
    points: np.ndarray  # (N, 2) float64
    types: np.ndarray  # (N,) uint8 without the close marker
    closed: bool


def _as_xy(p: "Point2D | PointLike") -> PointLike:
    if isinstance(p, Point2D):
        return (float(p.x), float(p.y))
    return (float(p[0]), float(p[1]))


def cardinal_to_bezier(
    points: Sequence[PointLike], tension: float = 0.5
) -> List[PointLike]:
    """Control points of the cubic Beziers that make up a cardinal spline.

    Returns ``3 * (len(points) - 1)`` points: two handles and the end point
    for every span. End spans reuse the end point as their missing neighbour.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    n = pts.shape[0]
    out: List[PointLike] = []
    k = tension / 3.0
    for i in range(n - 1):
        prev_pt = pts[max(i - 1, 0)]
        p1 = pts[i]
        p2 = pts[i + 1]
        next_pt = pts[min(i + 2, n - 1)]
        c1 = p1 + k * (p2 - prev_pt)
        c2 = p2 - k * (next_pt - p1)
        out.append((float(c1[0]), float(c1[1])))
        out.append((float(c2[0]), float(c2[1])))
        out.append((float(p2[0]), float(p2[1])))
    return out


def _flatten_bezier(
    p0: np.ndarray, c1: np.ndarray, c2: np.ndarray, p3: np.ndarray, steps: int
) -> np.ndarray:
    t = np.linspace(0.0, 1.0, steps + 1)[1:, None]
    mt = 1.0 - t
    return (
        (mt**3) * p0 + 3.0 * (mt**2) * t * c1 + 3.0 * mt * (t**2) * c2 + (t**3) * p3
    )


class Path:
    """An ordered list of line and cubic Bezier figures.

    Points are kept with a type code per point (start, line, Bezier); the
    last point of a closed figure carries :data:`CLOSE_MARKER`. Adding
    geometry to an open figure connects it with a straight line unless the
    new start coincides with the current end point.

    A path owns no external resources, but it follows the release protocol
    of the drawing surfaces it feeds: after :meth:`release` any use raises
    ``ValueError`` and a second release does nothing.
    """

    def __init__(self, fill_rule: FillRule = FillRule.ALTERNATE) -> None:
        self.fill_rule = fill_rule
        self._points: List[PointLike] = []
        self._types: List[int] = []
        self._new_figure = True
        self._released = False

    # ----------------------------- Lifecycle ----------------------------------

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        self._points = []
        self._types = []
        self._released = True

    def __enter__(self) -> "Path":
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def _check(self) -> None:
        if self._released:
            raise ValueError("operation on a released path")

    # ----------------------------- Building -----------------------------------

    def start_figure(self) -> None:
        self._check()
        self._new_figure = True

    def _connect(self, pt: PointLike) -> None:
        if self._new_figure or not self._points:
            self._points.append(pt)
            self._types.append(PathPointType.START)
            self._new_figure = False
        elif self._points[-1] != pt:
            self._points.append(pt)
            self._types.append(PathPointType.LINE)

    def add_lines(self, points: Iterable["Point2D | PointLike"]) -> None:
        self._check()
        pts = [_as_xy(p) for p in points]
        if not pts:
            raise ValueError("add_lines needs at least one point")
        self._connect(pts[0])
        for pt in pts[1:]:
            self._points.append(pt)
            self._types.append(PathPointType.LINE)

    def add_line(
        self, start: "Point2D | PointLike", end: "Point2D | PointLike"
    ) -> None:
        self.add_lines([start, end])

    def add_bezier(
        self,
        start: "Point2D | PointLike",
        c1: "Point2D | PointLike",
        c2: "Point2D | PointLike",
        end: "Point2D | PointLike",
    ) -> None:
        self._check()
        self._connect(_as_xy(start))
        for pt in (c1, c2, end):
            self._points.append(_as_xy(pt))
            self._types.append(PathPointType.BEZIER)

    def add_curve(
        self, points: Sequence["Point2D | PointLike"], tension: float = 0.5
    ) -> None:
        """Append a cardinal spline passing through every point."""
        self._check()
        pts = [_as_xy(p) for p in points]
        if len(pts) < 2:
            raise ValueError("a curve needs at least two points")
        self._connect(pts[0])
        for pt in cardinal_to_bezier(pts, tension):
            self._points.append(pt)
            self._types.append(PathPointType.BEZIER)

    def add_rectangle(self, rect: Rect2D) -> None:
        self.start_figure()
        self.add_lines(
            [
                (rect.left, rect.top),
                (rect.right, rect.top),
                (rect.right, rect.bottom),
                (rect.left, rect.bottom),
            ]
        )
        self.close_figure()

    def add_rounded_rectangle(self, rect: Rect2D, radius: float) -> None:
        radius = min(radius, abs(rect.width) / 2.0, abs(rect.height) / 2.0)
        if radius <= 0:
            self.add_rectangle(rect)
            return
        h = radius * KAPPA
        left, top, right, bottom = rect.left, rect.top, rect.right, rect.bottom
        self.start_figure()
        self.add_lines([(left + radius, top), (right - radius, top)])
        self.add_bezier(
            (right - radius, top),
            (right - radius + h, top),
            (right, top + radius - h),
            (right, top + radius),
        )
        self.add_lines([(right, top + radius), (right, bottom - radius)])
        self.add_bezier(
            (right, bottom - radius),
            (right, bottom - radius + h),
            (right - radius + h, bottom),
            (right - radius, bottom),
        )
        self.add_lines([(right - radius, bottom), (left + radius, bottom)])
        self.add_bezier(
            (left + radius, bottom),
            (left + radius - h, bottom),
            (left, bottom - radius + h),
            (left, bottom - radius),
        )
        self.add_lines([(left, bottom - radius), (left, top + radius)])
        self.add_bezier(
            (left, top + radius),
            (left, top + radius - h),
            (left + radius - h, top),
            (left + radius, top),
        )
        self.close_figure()

    def add_ellipse(self, rect: Rect2D) -> None:
        """Ellipse inscribed in ``rect`` as four Bezier quarters, starting east."""
        cx = rect.x + rect.width / 2.0
        cy = rect.y + rect.height / 2.0
        rx = rect.width / 2.0
        ry = rect.height / 2.0
        kx = rx * KAPPA
        ky = ry * KAPPA
        self.start_figure()
        self._connect((cx + rx, cy))
        quarters = (
            ((cx + rx, cy + ky), (cx + kx, cy + ry), (cx, cy + ry)),
            ((cx - kx, cy + ry), (cx - rx, cy + ky), (cx - rx, cy)),
            ((cx - rx, cy - ky), (cx - kx, cy - ry), (cx, cy - ry)),
            ((cx + kx, cy - ry), (cx + rx, cy - ky), (cx + rx, cy)),
        )
        for quarter in quarters:
            for pt in quarter:
                self._points.append(pt)
                self._types.append(PathPointType.BEZIER)
        self.close_figure()

    def add_path(self, other: "Path", connect: bool = False) -> None:
        """Append a copy of ``other``.

        With ``connect`` the first figure of ``other`` continues the current
        figure when that one is still open.
        """
        self._check()
        other._check()
        if not other._points:
            return
        points = list(other._points)
        types = list(other._types)
        if connect and not self._new_figure and self._points:
            if points[0] == self._points[-1]:
                points = points[1:]
                types = types[1:]
            else:
                types[0] = PathPointType.LINE
        self._points.extend(points)
        self._types.extend(types)
        self._new_figure = bool(types) and bool(types[-1] & CLOSE_MARKER)

    def close_figure(self) -> None:
        self._check()
        if self._points and not self._types[-1] & CLOSE_MARKER:
            self._types[-1] |= CLOSE_MARKER
        self._new_figure = True

    # ----------------------------- Queries ------------------------------------

    @property
    def points(self) -> np.ndarray:
        self._check()
        return np.array(self._points, dtype=np.float64).reshape(-1, 2)

    @property
    def types(self) -> np.ndarray:
        self._check()
        return np.array(self._types, dtype=np.uint8)

    @property
    def point_count(self) -> int:
        self._check()
        return len(self._points)

    def figures(self) -> Iterator[Figure]:
        self._check()
        pts = self.points
        types = self.types
        start = 0
        n = len(types)
        for i in range(n):
            ends = i + 1 == n or (types[i + 1] & TYPE_MASK) == PathPointType.START
            if ends:
                closed = bool(types[i] & CLOSE_MARKER)
                yield Figure(
                    pts[start : i + 1].copy(), types[start : i + 1] & TYPE_MASK, closed
                )
                start = i + 1

    @property
    def is_closed(self) -> bool:
        figures = list(self.figures())
        return bool(figures) and all(f.closed for f in figures)

    def flatten(self, bezier_steps: int = DEFAULT_BEZIER_STEPS) -> List[np.ndarray]:
        """Polyline approximation, one ``(N, 2)`` array per figure.

        Closed figures repeat their first point at the end.
        """
        polys: List[np.ndarray] = []
        for fig in self.figures():
            chunks = [fig.points[:1]]
            i = 1
            while i < len(fig.types):
                if fig.types[i] == PathPointType.BEZIER and i + 2 < len(fig.types):
                    chunks.append(
                        _flatten_bezier(
                            fig.points[i - 1],
                            fig.points[i],
                            fig.points[i + 1],
                            fig.points[i + 2],
                            bezier_steps,
                        )
                    )
                    i += 3
                else:
                    chunks.append(fig.points[i : i + 1])
                    i += 1
            if fig.closed:
                chunks.append(fig.points[:1])
            polys.append(np.vstack(chunks))
        return polys

    def bounds(self) -> Rect2D:
        polys = self.flatten()
        if not polys:
            return Rect2D()
        return Rect2D.bounding(np.vstack(polys))

    # ----------------------------- Copies -------------------------------------

    def clone(self) -> "Path":
        self._check()
        copy = Path(self.fill_rule)
        copy._points = list(self._points)
        copy._types = list(self._types)
        copy._new_figure = self._new_figure
        return copy

    def transformed(self, matrix: np.ndarray) -> "Path":
        """Copy with every point mapped through a 2x3 affine ``matrix``."""
        m = np.asarray(matrix, dtype=np.float64).reshape(2, 3)
        copy = self.clone()
        pts = self.points
        if pts.shape[0]:
            mapped = pts @ m[:, :2].T + m[:, 2]
            copy._points = [(float(x), float(y)) for x, y in mapped]
        return copy

    def translated(self, dx: float, dy: float) -> "Path":
        return self.transformed(translation_matrix(dx, dy))

    def __repr__(self) -> str:
        if self._released:
            return "Path(<released>)"
        return f"Path(points={len(self._points)}, fill_rule={self.fill_rule.value})"


def translation_matrix(dx: float, dy: float) -> np.ndarray:
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy]], dtype=np.float64)


class Region:
    """Coarse area a host has to repaint, built from path unions."""

    def __init__(self) -> None:
        self._polygons: List[np.ndarray] = []
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        self._polygons = []
        self._released = True

    def __enter__(self) -> "Region":
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def _check(self) -> None:
        if self._released:
            raise ValueError("operation on a released region")

    def union(self, path: Path) -> None:
        self._check()
        self._polygons.extend(path.flatten())

    @property
    def polygons(self) -> List[np.ndarray]:
        self._check()
        return [p.copy() for p in self._polygons]

    @property
    def is_empty(self) -> bool:
        return self.bounds().is_empty

    def rects(self) -> List[Rect2D]:
        self._check()
        return [Rect2D.bounding(p) for p in self._polygons]

    def bounds(self) -> Rect2D:
        self._check()
        if not self._polygons:
            return Rect2D()
        return Rect2D.bounding(np.vstack(self._polygons))


__all__ = [
    "CLOSE_MARKER",
    "Figure",
    "FillRule",
    "KAPPA",
    "Path",
    "PathPointType",
    "Point2D",
    "PointLike",
    "Rect2D",
    "Region",
    "cardinal_to_bezier",
    "translation_matrix",
]

"""Gauge face outlines, highlight and background shading."""

from __future__ import annotations

from numpy.testing import assert_allclose
import pytest

from gauge_paths.geometry import (
    BLACK,
    RED,
    TRANSPARENT,
    WHITE,
    ControlShape,
    LinearGradient,
    Point2D,
    RadialGradient,
    Rect2D,
    gradient_fill,
    shape_path,
    shine_path,
)


def _bounds_tuple(rect: Rect2D) -> tuple[float, float, float, float]:
    return (rect.x, rect.y, rect.width, rect.height)


@pytest.mark.parametrize("shape", list(ControlShape))
def test_shape_path_is_inset_by_one_pixel(shape: ControlShape) -> None:
    path = shape_path(Rect2D(0.0, 0.0, 101.0, 51.0), shape)
    assert path.is_closed
    assert_allclose(_bounds_tuple(path.bounds()), (0.0, 0.0, 100.0, 50.0), atol=1e-9)


def test_shape_point_counts() -> None:
    container = Rect2D(0.0, 0.0, 101.0, 51.0)
    assert shape_path(container, ControlShape.RECT).point_count == 4
    assert shape_path(container, ControlShape.CIRCULAR).point_count == 13


def test_rounded_rect_uses_percentage_radius() -> None:
    path = shape_path(Rect2D(0.0, 0.0, 201.0, 101.0), ControlShape.ROUNDED_RECT)
    # radius int(min(200, 100) * 0.05) = 5
    assert_allclose(path.points[0], (5.0, 0.0))


@pytest.mark.parametrize("shape", list(ControlShape))
def test_shine_is_empty_for_degenerate_container(shape: ControlShape) -> None:
    assert shine_path(Rect2D(0.0, 0.0, 1.0, 1.0), shape).point_count == 0


@pytest.mark.parametrize("shape", (ControlShape.RECT, ControlShape.ROUNDED_RECT))
def test_rect_shine_covers_upper_half(shape: ControlShape) -> None:
    path = shine_path(Rect2D(0.0, 0.0, 101.0, 101.0), shape)
    assert path.is_closed
    assert_allclose(_bounds_tuple(path.bounds()), (0.0, 0.0, 100.0, 50.0), atol=1e-9)


def test_circular_shine_is_single_closed_figure() -> None:
    path = shine_path(Rect2D(0.0, 0.0, 101.0, 101.0), ControlShape.CIRCULAR)
    figures = list(path.figures())
    assert len(figures) == 1
    assert figures[0].closed
    # arc spline plus the three spans of the closing swoosh
    assert path.point_count == 1 + 3 * 100 + 3 * 3


def test_gradient_fill_for_rect_shapes_fades_vertically() -> None:
    container = Rect2D(0.0, 0.0, 100.0, 60.0)
    fill = gradient_fill(container, ControlShape.ROUNDED_RECT, WHITE)
    assert isinstance(fill, LinearGradient)
    assert fill.vertical
    assert fill.start_color == WHITE
    assert fill.end_color == TRANSPARENT
    assert fill.color_at(0.0) == WHITE
    assert fill.color_at(5.0) == TRANSPARENT


def test_gradient_fill_for_circle_centers_below_face() -> None:
    container = Rect2D(10.0, 20.0, 100.0, 80.0)
    fill = gradient_fill(container, ControlShape.CIRCULAR, WHITE)
    assert isinstance(fill, RadialGradient)
    assert fill.center == Point2D(60.0, 180.0)
    assert fill.surround_color == TRANSPARENT


def test_radial_gradient_holds_center_color_inside_focus() -> None:
    gradient = RadialGradient(
        Rect2D(0.0, 0.0, 10.0, 10.0), RED, BLACK, focus_scale=0.8
    )
    assert gradient.center == Point2D(5.0, 5.0)
    assert gradient.color_at(0.0) == RED
    assert gradient.color_at(0.8) == RED
    assert gradient.color_at(1.0) == BLACK
    assert 0 < gradient.color_at(0.9).r < 255


def test_radial_gradient_rejects_bad_focus() -> None:
    with pytest.raises(ValueError):
        RadialGradient(Rect2D(), RED, BLACK, focus_scale=1.5)

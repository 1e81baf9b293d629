"""Bar segment outlines, change notifications and resource ownership."""

from __future__ import annotations

import math
from typing import List, Tuple

from hypothesis import given
from hypothesis import strategies as st
from numpy.testing import assert_allclose, assert_array_equal
import pytest

from gauge_paths import (
    BarSegmentSpec,
    ChangeKind,
    DigitalBar,
    SegmentCorners,
    SegmentOrientation,
)
from gauge_paths.drawable import (
    DrawOpKind,
    SegmentGeometry,
    compute_segment_path,
    segment_outline,
)
from gauge_paths.geometry import RED, Rect2D

CONTAINER = Rect2D(0.0, 0.0, 40.0, 10.0)


def _expected_point_count(corners: SegmentCorners) -> int:
    count = 8
    if SegmentCorners.BOTTOM_RIGHT in corners:
        count -= 1
    if SegmentCorners.BOTTOM_LEFT in corners:
        count -= 1
    return count


@pytest.mark.parametrize("value", range(16))
@pytest.mark.parametrize("orientation", list(SegmentOrientation))
def test_point_count_for_every_corner_combination(
    value: int, orientation: SegmentOrientation
) -> None:
    corners = SegmentCorners(value)
    spec = BarSegmentSpec(orientation=orientation, corners=corners, tip_length=5.0)
    geometry = compute_segment_path(CONTAINER, spec)

    assert geometry.path.point_count == _expected_point_count(corners)
    assert geometry.path.is_closed
    assert len(list(geometry.path.figures())) == 1


def test_notched_horizontal_outline() -> None:
    spec = BarSegmentSpec(tip_length=5.0)
    points = [p.as_tuple() for p in segment_outline(CONTAINER, spec)]
    assert points == [
        (2.5, 5.0),
        (5.0, 0.0),
        (20.0, 0.0),
        (35.0, 0.0),
        (37.5, 5.0),
        (35.0, 10.0),
        (20.0, 10.0),
        (5.0, 10.0),
    ]


def test_square_outline_returns_to_top_left() -> None:
    spec = BarSegmentSpec(corners=SegmentCorners.ALL, tip_length=5.0)
    points = [p.as_tuple() for p in segment_outline(CONTAINER, spec)]
    assert points == [
        (2.5, 5.0),
        (0.0, 0.0),
        (40.0, 0.0),
        (40.0, 10.0),
        (0.0, 10.0),
        (0.0, 0.0),
    ]


def test_vertical_outline_tapers_along_y() -> None:
    spec = BarSegmentSpec(
        orientation=SegmentOrientation.VERTICAL, tip_length=4.0, padding=1.0
    )
    container = Rect2D(0.0, 0.0, 8.0, 40.0)
    points = [p.as_tuple() for p in segment_outline(container, spec)]
    # padding trims the long (y) axis, the tip offsets move along y
    assert points[0] == (0.0, 20.0)
    assert points[1] == (0.0, 5.0)
    assert points[2] == (4.0, 3.0)
    assert points[-1] == (0.0, 35.0)


def test_zero_container_does_not_fail() -> None:
    bar = DigitalBar()
    assert bar.needs_layout
    assert bar.path.point_count == 8
    bar.calculate_paths(Rect2D())
    assert not bar.needs_layout
    assert bar.redraw_region().bounds().is_empty


@given(
    st.integers(min_value=0, max_value=15),
    st.floats(min_value=0.0, max_value=50.0),
    st.floats(min_value=0.0, max_value=20.0),
)
def test_recalculation_is_idempotent(value: int, padding: float, tip: float) -> None:
    spec = BarSegmentSpec(
        corners=SegmentCorners(value), padding=padding, tip_length=tip
    )
    with DigitalBar(spec) as bar:
        bar.calculate_paths(Rect2D(3.0, 4.0, 120.0, 30.0))
        first = bar.path.points
        bar.calculate_paths(Rect2D(3.0, 4.0, 120.0, 30.0))
        assert_array_equal(bar.path.points, first)


def test_padding_change_is_a_layout_change() -> None:
    bar = DigitalBar(BarSegmentSpec(tip_length=5.0))
    bar.calculate_paths(CONTAINER)
    before = bar.path.points

    assert bar.update(padding=4.0) is ChangeKind.LAYOUT
    assert bar.needs_layout
    bar.calculate_paths(CONTAINER)
    assert_allclose(bar.path.points[0], (6.5, 5.0))
    assert not (bar.path.points == before).all()


def test_color_change_keeps_outline() -> None:
    bar = DigitalBar(BarSegmentSpec(tip_length=5.0))
    bar.calculate_paths(CONTAINER)
    path = bar.path

    assert bar.update(color=RED) is ChangeKind.APPEARANCE
    assert not bar.needs_layout
    assert bar.path is path
    (op,) = bar.draw_plan()
    assert op.kind is DrawOpKind.FILL
    assert op.paint == RED


def test_off_segment_uses_scaled_alpha() -> None:
    spec = BarSegmentSpec(color=RED, is_on=False, opacity_when_off=0.5)
    assert spec.fill_color.to_tuple() == (128, 255, 0, 0)
    assert BarSegmentSpec(color=RED).fill_color == RED


def test_listeners_receive_change_kinds() -> None:
    bar = DigitalBar()
    seen: List[Tuple[DigitalBar, ChangeKind]] = []
    bar.subscribe(lambda drawable, kind: seen.append((drawable, kind)))

    bar.update(is_on=False)
    bar.update(tip_length=3.0, color=RED)
    assert bar.update(tip_length=3.0) is None

    assert [kind for _, kind in seen] == [ChangeKind.APPEARANCE, ChangeKind.LAYOUT]
    assert all(drawable is bar for drawable, _ in seen)


def test_unsubscribe_stops_notifications() -> None:
    bar = DigitalBar()
    seen: List[ChangeKind] = []

    def listener(drawable: DigitalBar, kind: ChangeKind) -> None:
        seen.append(kind)

    bar.subscribe(listener)
    bar.unsubscribe(listener)
    bar.update(is_on=False)
    assert seen == []


def test_recalculation_replaces_region_and_path() -> None:
    bar = DigitalBar(BarSegmentSpec(corners=SegmentCorners.ALL, tip_length=2.0))
    bar.calculate_paths(CONTAINER)
    old_region = bar.redraw_region()
    old_path = bar.path

    bar.calculate_paths(Rect2D(100.0, 0.0, 40.0, 10.0))
    assert old_region.released
    assert old_path.released
    assert bar.redraw_region().bounds() == Rect2D(100.0, 0.0, 40.0, 10.0)


def test_invalid_updates_leave_spec_untouched() -> None:
    bar = DigitalBar()
    with pytest.raises(TypeError):
        bar.update(bogus=1)
    with pytest.raises(ValueError):
        bar.update(padding=-1.0)
    with pytest.raises(ValueError):
        bar.update(opacity_when_off=1.5)
    assert bar.spec == BarSegmentSpec()


def test_spec_coerces_enum_values() -> None:
    spec = BarSegmentSpec(orientation="vertical", corners=5)  # type: ignore[arg-type]
    assert spec.orientation is SegmentOrientation.VERTICAL
    assert spec.corners == SegmentCorners.BOTH_TOP


def test_release_is_idempotent() -> None:
    bar = DigitalBar()
    path = bar.path
    bar.release()
    bar.release()
    assert bar.released
    assert path.released
    with pytest.raises(ValueError):
        bar.path
    with pytest.raises(ValueError):
        bar.update(is_on=False)


@pytest.mark.parametrize("field", ("padding", "tip_length"))
@pytest.mark.parametrize("value", (math.inf, math.nan))
def test_non_finite_lengths_are_rejected(field: str, value: float) -> None:
    with pytest.raises(ValueError):
        BarSegmentSpec(**{field: value})


def test_non_finite_container_keeps_previous_paths() -> None:
    bar = DigitalBar(BarSegmentSpec(corners=SegmentCorners.ALL))
    bar.calculate_paths(CONTAINER)
    path = bar.path
    region = bar.redraw_region()

    with pytest.raises(ValueError):
        bar.calculate_paths(Rect2D(0.0, 0.0, math.inf, 10.0))
    assert bar.path is path
    assert not path.released
    assert bar.redraw_region() is region
    assert region.bounds() == CONTAINER


class _FlakyBar(DigitalBar):
    failing = False

    def _build_geometry(self, container: Rect2D) -> SegmentGeometry:
        if self.failing:
            raise RuntimeError("layout failed")
        return super()._build_geometry(container)


def test_failed_layout_leaves_an_empty_region() -> None:
    bar = _FlakyBar()
    bar.calculate_paths(CONTAINER)
    old_path = bar.path
    old_region = bar.redraw_region()

    bar.failing = True
    with pytest.raises(RuntimeError):
        bar.calculate_paths(CONTAINER)
    assert old_path.released
    assert old_region.released
    assert bar.needs_layout
    assert bar.redraw_region().is_empty
    with pytest.raises(ValueError):
        bar.path

    bar.failing = False
    bar.calculate_paths(CONTAINER)
    assert not bar.needs_layout
    assert bar.draw_plan()[0].path is bar.path

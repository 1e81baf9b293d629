"""Conversion of core geometry into Qt painting objects."""

from __future__ import annotations

from pathlib import Path as FsPath

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")
QtGui = pytest.importorskip("PySide6.QtGui")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from gauge_paths import app  # noqa: E402
from gauge_paths.geometry import (  # noqa: E402
    RED,
    WHITE,
    FillRule,
    LinearGradient,
    Path,
    RadialGradient,
    Rect2D,
    Region,
)
from gauge_paths.models import ViewerConfig  # noqa: E402
from gauge_paths.utils import qt as qt_utils  # noqa: E402


def test_color_and_rect_conversion() -> None:
    color = qt_utils.to_qcolor(RED.with_alpha(128))
    assert (color.red(), color.green(), color.blue(), color.alpha()) == (
        255,
        0,
        0,
        128,
    )
    rect = Rect2D(1.0, 2.0, 3.0, 4.0)
    assert qt_utils.to_rect2d(qt_utils.to_qrectf(rect)) == rect


def test_painter_path_keeps_geometry_and_fill_rule() -> None:
    path = Path(FillRule.WINDING)
    path.add_ellipse(Rect2D(0.0, 0.0, 40.0, 20.0))
    path.add_rectangle(Rect2D(50.0, 0.0, 10.0, 10.0))

    qpath = qt_utils.to_qpainter_path(path)
    assert qpath.fillRule() == QtCore.Qt.FillRule.WindingFill
    bounds = qpath.boundingRect()
    assert bounds.left() == pytest.approx(0.0)
    assert bounds.top() == pytest.approx(0.0)
    assert bounds.right() == pytest.approx(60.0)
    assert bounds.bottom() == pytest.approx(20.0)


def test_region_is_grown_by_a_pixel() -> None:
    path = Path()
    path.add_rectangle(Rect2D(10.0, 10.0, 20.0, 20.0))
    with Region() as region:
        region.union(path)
        qregion = qt_utils.to_qregion(region)
    rect = qregion.boundingRect()
    assert (rect.x(), rect.y()) == (9, 9)
    assert not qregion.isEmpty()


def test_brushes_for_every_paint() -> None:
    bounds = Rect2D(0.0, 0.0, 10.0, 10.0)
    solid = qt_utils.to_qbrush(WHITE)
    assert solid.color().alpha() == 255

    linear = qt_utils.to_qbrush(LinearGradient(bounds, WHITE, RED))
    assert linear.gradient().type() == QtGui.QGradient.Type.LinearGradient

    radial = qt_utils.to_qbrush(RadialGradient(bounds, WHITE, RED, focus_scale=0.8))
    stops = [stop[0] for stop in radial.gradient().stops()]
    assert stops == pytest.approx([0.0, 0.8, 1.0])

    with pytest.raises(TypeError):
        qt_utils.to_qbrush("red")  # type: ignore[arg-type]


def test_dial_angle_mapping() -> None:
    assert app.value_to_degrees(0.0) == 225.0
    assert app.value_to_degrees(100.0) == -45.0
    assert app.value_to_degrees(50.0) == 90.0
    assert app.value_to_degrees(500.0) == -45.0


def test_seven_segment_cells_stay_inside_digit() -> None:
    cell = Rect2D(0.0, 0.0, 50.0, 90.0)
    rects = app.seven_segment_rects(cell)
    assert sorted(rects) == list("abcdefg")
    for rect in rects.values():
        assert rect.left >= cell.left and rect.right <= cell.right + 1e-9
        assert rect.top >= cell.top and rect.bottom <= cell.bottom + 1e-9


def test_config_round_trip(tmp_path: FsPath) -> None:
    path = tmp_path / "config.json"
    cfg = ViewerConfig(digit_count=4, show_redraw_regions=True)
    app.save_config(cfg, path)
    assert app.load_config(path) == cfg


def test_broken_config_falls_back_to_defaults(tmp_path: FsPath) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert app.load_config(path) == ViewerConfig()
    assert app.load_config(tmp_path / "missing.json") == ViewerConfig()

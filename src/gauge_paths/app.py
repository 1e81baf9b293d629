"""Qt demo viewer: a needle dial and a seven-segment readout."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Dict, List, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from . import __version__ as APP_VERSION
from .drawable import DigitalBar, Drawable, DrawOp, DrawOpKind, Needle
from .geometry import WHITE, Color, ControlShape, Rect2D
from .geometry import Path as GeoPath
from .geometry import arc_path, gradient_fill, point_on_arc, shape_path, shine_path
from .models import (
    BarSegmentSpec,
    ChangeKind,
    NeedleSpec,
    SegmentCorners,
    SegmentOrientation,
    ViewerConfig,
)
from .utils import clamp, get_logger, setup_logging
from .utils.qt import execute, paint_drawable, to_qrectf, to_qregion, to_rect2d

log = get_logger(__name__)

DIAL_START_DEGREES = 225.0
DIAL_SWEEP_DEGREES = 270.0
DIAL_MAX_VALUE = 100.0
MAJOR_TICKS = 10
SCALE_INSET = 0.1

FACE_COLOR = Color(255, 40, 44, 52)
FACE_SHADING = WHITE.with_alpha(50)
SHINE_COLOR = WHITE.with_alpha(28)
SCALE_COLOR = Color(255, 220, 220, 220)
SEGMENT_COLOR = Color(255, 255, 64, 32)
BAR_COLOR = Color(255, 40, 200, 120)

# Lit segments (a..g) per character.
DIGIT_SEGMENTS: Dict[str, str] = {
    "0": "abcdef",
    "1": "bc",
    "2": "abdeg",
    "3": "abcdg",
    "4": "bcfg",
    "5": "acdfg",
    "6": "acdefg",
    "7": "abc",
    "8": "abcdefg",
    "9": "abcdfg",
    " ": "",
}


def value_to_degrees(value: float) -> float:
    fraction = clamp(value, 0.0, DIAL_MAX_VALUE) / DIAL_MAX_VALUE
    return DIAL_START_DEGREES - DIAL_SWEEP_DEGREES * fraction


def seven_segment_rects(cell: Rect2D) -> Dict[str, Rect2D]:
    """Containers of segments a..g inside one digit cell.

    Neighbouring containers overlap by a full segment thickness so notched
    tips meet on the center line of the crossing segment.
    """
    t = cell.width * 0.18
    x, y, w, h = cell.x, cell.y, cell.width, cell.height
    half = h / 2.0 + t / 2.0
    mid = y + h / 2.0 - t / 2.0
    return {
        "a": Rect2D(x, y, w, t),
        "b": Rect2D(x + w - t, y, t, half),
        "c": Rect2D(x + w - t, mid, t, half),
        "d": Rect2D(x, y + h - t, w, t),
        "e": Rect2D(x, mid, t, half),
        "f": Rect2D(x, y, t, half),
        "g": Rect2D(x, mid, w, t),
    }


def _qpoint(x: float, y: float) -> QtCore.QPointF:
    return QtCore.QPointF(x, y)


# ------------------------------- Dial Widget ----------------------------------


class DialWidget(QtWidgets.QWidget):
    """Round dial face with a needle that repaints only what it covers."""

    def __init__(
        self, cfg: ViewerConfig, parent: Optional[QtWidgets.QWidget] = None
    ) -> None:
        super().__init__(parent)
        self.setMinimumSize(200, 200)
        self._show_regions = cfg.show_redraw_regions
        self._value = 0.0
        self._face_rect = Rect2D()
        self._face_paths: List[GeoPath] = []

        self.needle = Needle(
            NeedleSpec(
                orientation_degrees=value_to_degrees(self._value),
                hub_color=Color(255, 90, 90, 90),
                shadows_visible=cfg.shadows_visible,
                needle_above_hub=cfg.needle_above_hub,
            )
        )
        self.needle.subscribe(self._on_needle_changed)

    # ----------------------------- Properties ---------------------------------

    def set_value(self, value: float) -> None:
        self._value = clamp(float(value), 0.0, DIAL_MAX_VALUE)
        self.needle.update(orientation_degrees=value_to_degrees(self._value))

    def set_show_regions(self, enabled: bool) -> None:
        self._show_regions = bool(enabled)
        self.update()

    def _dial_rect(self) -> Rect2D:
        side = float(min(self.width(), self.height()))
        x = (self.width() - side) / 2.0
        y = (self.height() - side) / 2.0
        return Rect2D(x, y, side, side)

    # ----------------------------- Layout -------------------------------------

    def _on_needle_changed(self, needle: Drawable, kind: ChangeKind) -> None:
        stale = to_qregion(needle.redraw_region())
        if kind is ChangeKind.LAYOUT:
            needle.calculate_paths(self._dial_rect())
        if self._show_regions:
            self.update()
        else:
            self.update(stale.united(to_qregion(needle.redraw_region())))

    def _release_face(self) -> None:
        for path in self._face_paths:
            path.release()
        self._face_paths = []

    def resizeEvent(self, e: QtGui.QResizeEvent) -> None:
        self._release_face()
        rect = self._dial_rect()
        self._face_rect = rect
        scale_rect = rect.deflated(rect.width * SCALE_INSET, rect.height * SCALE_INSET)
        self._face_paths = [
            shape_path(rect, ControlShape.CIRCULAR),
            shine_path(rect, ControlShape.CIRCULAR),
            arc_path(scale_rect, DIAL_START_DEGREES, DIAL_SWEEP_DEGREES),
        ]
        self.needle.calculate_paths(rect)
        super().resizeEvent(e)

    # ----------------------------- Painting -----------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        if self.needle.released:
            return
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        if self.needle.needs_layout:
            self.needle.calculate_paths(self._dial_rect())

        if self._face_paths:
            face, shine, scale = self._face_paths
            shading = gradient_fill(
                self._face_rect, ControlShape.CIRCULAR, FACE_SHADING
            )
            execute(painter, DrawOp(DrawOpKind.FILL, face, FACE_COLOR))
            execute(painter, DrawOp(DrawOpKind.FILL, face, shading))
            execute(painter, DrawOp(DrawOpKind.FILL, shine, SHINE_COLOR))
            execute(painter, DrawOp(DrawOpKind.STROKE, scale, SCALE_COLOR, 2.0))
            self._paint_ticks(painter)

        paint_drawable(painter, self.needle)

        if self._show_regions:
            painter.setPen(QtGui.QPen(QtGui.QColor(0, 200, 255, 180), 1))
            painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
            for rect in self.needle.redraw_region().rects():
                painter.drawRect(to_qrectf(rect))
        painter.end()

    def _paint_ticks(self, painter: QtGui.QPainter) -> None:
        face = self._face_rect
        rect = face.deflated(face.width * SCALE_INSET, face.height * SCALE_INSET)
        tick_len = rect.width * 0.05
        painter.setPen(QtGui.QPen(QtGui.QColor(*SCALE_COLOR.to_tuple()[1:]), 2))
        for i in range(MAJOR_TICKS + 1):
            degrees = value_to_degrees(DIAL_MAX_VALUE * i / MAJOR_TICKS)
            outer = point_on_arc(rect, degrees)
            inner = point_on_arc(rect, degrees, -tick_len)
            painter.drawLine(_qpoint(outer.x, outer.y), _qpoint(inner.x, inner.y))

    def release(self) -> None:
        self._release_face()
        self.needle.release()


# ------------------------------ Segment Display -------------------------------


class SegmentDisplay(QtWidgets.QWidget):
    """Seven-segment digits above a chevron level bar."""

    def __init__(
        self, cfg: ViewerConfig, parent: Optional[QtWidgets.QWidget] = None
    ) -> None:
        super().__init__(parent)
        self.setMinimumHeight(120)
        self._laying_out = False
        self._released = False
        self._digit_count = max(1, cfg.digit_count)
        self._digits: List[Dict[str, DigitalBar]] = []
        for _ in range(self._digit_count):
            digit: Dict[str, DigitalBar] = {}
            for name in "abcdefg":
                if name in "adg":
                    orientation = SegmentOrientation.HORIZONTAL
                else:
                    orientation = SegmentOrientation.VERTICAL
                spec = BarSegmentSpec(orientation=orientation, color=SEGMENT_COLOR)
                digit[name] = DigitalBar(spec)
            self._digits.append(digit)

        self._bars: List[DigitalBar] = []
        count = max(1, cfg.bar_segments)
        for i in range(count):
            corners = SegmentCorners.NONE
            if i == 0:
                corners |= SegmentCorners.BOTH_LEFT
            if i == count - 1:
                corners |= SegmentCorners.BOTH_RIGHT
            spec = BarSegmentSpec(corners=corners, color=BAR_COLOR)
            self._bars.append(DigitalBar(spec))

        for drawable in self._all():
            drawable.subscribe(self._on_segment_changed)

    def _all(self) -> List[DigitalBar]:
        out = [bar for digit in self._digits for bar in digit.values()]
        return out + self._bars

    def set_value(self, value: float) -> None:
        n = self._digit_count
        text = f"{int(round(value)):>{n}d}"[-n:]
        for digit, char in zip(self._digits, text):
            lit = DIGIT_SEGMENTS.get(char, "")
            for name, bar in digit.items():
                bar.update(is_on=name in lit)
        level = clamp(value, 0.0, DIAL_MAX_VALUE) / DIAL_MAX_VALUE
        lit_bars = int(round(level * len(self._bars)))
        for i, bar in enumerate(self._bars):
            bar.update(is_on=i < lit_bars)

    def _on_segment_changed(self, bar: Drawable, kind: ChangeKind) -> None:
        if self._laying_out:
            return
        stale = to_qregion(bar.redraw_region())
        if kind is ChangeKind.LAYOUT:
            bar.calculate_paths(bar.container)
        self.update(stale.united(to_qregion(bar.redraw_region())))

    def resizeEvent(self, e: QtGui.QResizeEvent) -> None:
        self._laying_out = True
        try:
            self._layout_segments(to_rect2d(self.rect()).deflated(8.0, 8.0))
        finally:
            self._laying_out = False
        super().resizeEvent(e)

    def _layout_segments(self, area: Rect2D) -> None:
        n = self._digit_count
        digits_h = area.height * 0.7
        cell_w = min(area.width / (n * 1.4), digits_h * 0.55)
        gap = cell_w * 0.4
        x0 = area.x + (area.width - n * (cell_w + gap) + gap) / 2.0
        for i, digit in enumerate(self._digits):
            cell = Rect2D(x0 + i * (cell_w + gap), area.y, cell_w, digits_h)
            thickness = cell.width * 0.18
            for name, rect in seven_segment_rects(cell).items():
                bar = digit[name]
                bar.update(padding=thickness * 0.12, tip_length=thickness)
                bar.calculate_paths(rect)

        bar_h = area.height * 0.2
        bar_w = area.width / len(self._bars)
        top = area.bottom - bar_h
        for i, bar in enumerate(self._bars):
            bar.update(padding=bar_w * 0.05, tip_length=bar_h / 2.0)
            bar.calculate_paths(Rect2D(area.x + i * bar_w, top, bar_w, bar_h))

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        if self._released:
            return
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QtGui.QColor(16, 16, 16))
        for bar in self._all():
            paint_drawable(painter, bar)
        painter.end()

    def release(self) -> None:
        for bar in self._all():
            bar.release()
        self._released = True


# ------------------------------- Main Window ----------------------------------


class MainWindow(QtWidgets.QWidget):
    def __init__(self, cfg: ViewerConfig) -> None:
        super().__init__(None)
        self.cfg = cfg
        self.setWindowTitle(f"gauge_paths {APP_VERSION}")
        self.resize(cfg.window_width, cfg.window_height)

        self.dial = DialWidget(cfg, self)
        self.display = SegmentDisplay(cfg, self)

        self.slider = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal, self)
        self.slider.setRange(0, int(DIAL_MAX_VALUE))
        self.chk_sweep = QtWidgets.QCheckBox("Sweep", self)
        self.chk_shadows = QtWidgets.QCheckBox("Shadows", self)
        self.chk_shadows.setChecked(cfg.shadows_visible)
        self.chk_above = QtWidgets.QCheckBox("Needle above hub", self)
        self.chk_above.setChecked(cfg.needle_above_hub)
        self.chk_regions = QtWidgets.QCheckBox("Show redraw regions", self)
        self.chk_regions.setChecked(cfg.show_redraw_regions)

        controls = QtWidgets.QHBoxLayout()
        controls.addWidget(self.slider, 1)
        for box in (self.chk_sweep, self.chk_shadows, self.chk_above, self.chk_regions):
            controls.addWidget(box)
        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.dial, 3)
        layout.addWidget(self.display, 1)
        layout.addLayout(controls)

        self._sweep_step = 1
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(max(5, cfg.sweep_interval_ms))
        self._timer.timeout.connect(self._on_tick)

        self.slider.valueChanged.connect(self._on_value)
        self.chk_sweep.toggled.connect(self._on_sweep_toggle)
        self.chk_shadows.toggled.connect(self._on_shadows_toggle)
        self.chk_above.toggled.connect(self._on_above_toggle)
        self.chk_regions.toggled.connect(self._on_regions_toggle)

        self._on_value(self.slider.value())

    # ---------------------------- Event Handlers ------------------------------

    def _on_value(self, value: int) -> None:
        self.dial.set_value(value)
        self.display.set_value(value)

    def _on_tick(self) -> None:
        lo, hi = self.slider.minimum(), self.slider.maximum()
        value = self.slider.value() + self._sweep_step
        if value >= hi or value <= lo:
            self._sweep_step = -self._sweep_step
        self.slider.setValue(int(clamp(value, lo, hi)))

    def _on_sweep_toggle(self, enabled: bool) -> None:
        if enabled:
            self._timer.start()
        else:
            self._timer.stop()

    def _on_shadows_toggle(self, enabled: bool) -> None:
        self.cfg.shadows_visible = bool(enabled)
        self.dial.needle.update(shadows_visible=self.cfg.shadows_visible)

    def _on_above_toggle(self, enabled: bool) -> None:
        self.cfg.needle_above_hub = bool(enabled)
        self.dial.needle.update(needle_above_hub=self.cfg.needle_above_hub)

    def _on_regions_toggle(self, enabled: bool) -> None:
        self.cfg.show_redraw_regions = bool(enabled)
        self.dial.set_show_regions(enabled)

    def closeEvent(self, e: QtGui.QCloseEvent) -> None:
        self._timer.stop()
        self.cfg.window_width = self.width()
        self.cfg.window_height = self.height()
        self.dial.release()
        self.display.release()
        super().closeEvent(e)


# ------------------------------- Config I/O -----------------------------------


def config_path() -> Path:
    return Path.home() / ".gauge_paths_config.json"


def load_config(path: Path) -> ViewerConfig:
    """Read viewer preferences, falling back to defaults on any problem."""
    if path.exists():
        try:
            return ViewerConfig.from_json(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            log.warning("Ignoring unreadable config %s: %s", path, exc)
    return ViewerConfig()


def save_config(cfg: ViewerConfig, path: Path) -> None:
    try:
        path.write_text(cfg.to_json(), encoding="utf-8")
    except OSError as exc:
        log.warning("Could not save config %s: %s", path, exc)


# ---------------------------------- Main --------------------------------------


def main() -> None:
    path = config_path()
    cfg = load_config(path)
    try:
        setup_logging(cfg.log_level)
    except ValueError:
        setup_logging()
        log.warning("Unknown log level %r in config, using INFO", cfg.log_level)
    log.info("Starting gauge_paths viewer %s", APP_VERSION)

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("gauge_paths")
    app.setApplicationVersion(APP_VERSION)

    window = MainWindow(cfg)
    window.show()
    ret = app.exec()

    save_config(cfg, path)
    sys.exit(ret)


__all__ = [
    "DialWidget",
    "MainWindow",
    "SegmentDisplay",
    "load_config",
    "main",
    "save_config",
    "seven_segment_rects",
    "value_to_degrees",
]


if __name__ == "__main__":
    main()

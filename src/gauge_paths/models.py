"""Dataclasses describing drawable parameters and viewer configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
import enum
import json
import math
from typing import Any, Dict

from .geometry.color import BLACK, RED, Color


class ChangeKind(enum.Enum):
    """What a host must do after a parameter changed."""

    LAYOUT = "layout"  # recompute paths, then repaint
    APPEARANCE = "appearance"  # repaint only


class SegmentOrientation(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class SegmentCorners(enum.IntFlag):
    """Corners drawn square; unset corners are notched to meet a neighbour."""

    NONE = 0x0
    TOP_LEFT = 0x1
    BOTTOM_LEFT = 0x2
    TOP_RIGHT = 0x4
    BOTTOM_RIGHT = 0x8
    ALL = 0xF
    BOTH_TOP = 0x5
    BOTH_RIGHT = 0xC
    BOTH_BOTTOM = 0xA
    BOTH_LEFT = 0x3


def _layout(default: Any) -> Any:
    return field(default=default, metadata={"change": ChangeKind.LAYOUT})


def _appearance(default: Any) -> Any:
    return field(default=default, metadata={"change": ChangeKind.APPEARANCE})


def change_kind(spec_type: type, name: str) -> ChangeKind:
    """Classify a field of a spec dataclass."""
    for f in fields(spec_type):
        if f.name == name:
            return f.metadata["change"]
    raise TypeError(f"{spec_type.__name__} has no field {name!r}")


def _check_ratio(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value!r}")


def _check_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")


def _check_non_negative(name: str, value: float) -> None:
    _check_finite(name, value)
    if value < 0.0:
        raise ValueError(f"{name} must be >= 0, got {value!r}")


@dataclass(frozen=True)
class BarSegmentSpec:
    """Parameters of one segment of a digital bar."""

    orientation: SegmentOrientation = _layout(SegmentOrientation.HORIZONTAL)
    corners: SegmentCorners = _layout(SegmentCorners.NONE)
    padding: float = _layout(0.0)  # trimmed off both ends of the long axis
    tip_length: float = _layout(0.0)  # usually the segment thickness
    color: Color = _appearance(BLACK)
    opacity_when_off: float = _appearance(0.1)
    is_on: bool = _appearance(True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "orientation", SegmentOrientation(self.orientation))
        object.__setattr__(self, "corners", SegmentCorners(self.corners))
        _check_non_negative("padding", self.padding)
        _check_non_negative("tip_length", self.tip_length)
        _check_ratio("opacity_when_off", self.opacity_when_off)

    @property
    def off_color(self) -> Color:
        return self.color.scaled_alpha(self.opacity_when_off)

    @property
    def fill_color(self) -> Color:
        return self.color if self.is_on else self.off_color


@dataclass(frozen=True)
class NeedleSpec:
    """Parameters of a dial needle and its hub.

    Sizes are fractions of the container; ``orientation_degrees`` uses
    0 = east, 90 = north, 180 = west, 270 = south.
    """

    orientation_degrees: float = _layout(90.0)
    radius_percent: float = _layout(0.85)
    base_size_percent: float = _layout(0.02)
    hub_size_percent: float = _layout(0.13)
    tip_width_degrees: float = _layout(1.0)
    tip_extension_percent: float = _layout(0.01)
    needle_color: Color = _appearance(RED)
    hub_color: Color = _appearance(BLACK)
    hub_shade_color: Color = _appearance(BLACK)
    shadows_visible: bool = _appearance(True)
    needle_above_hub: bool = _appearance(False)

    def __post_init__(self) -> None:
        _check_finite("orientation_degrees", self.orientation_degrees)
        _check_ratio("radius_percent", self.radius_percent)
        _check_ratio("base_size_percent", self.base_size_percent)
        _check_ratio("hub_size_percent", self.hub_size_percent)
        _check_ratio("tip_extension_percent", self.tip_extension_percent)
        _check_non_negative("tip_width_degrees", self.tip_width_degrees)


@dataclass
class ViewerConfig:
    """Preferences of the demo viewer, persisted between runs."""

    window_width: int = 520
    window_height: int = 420
    sweep_interval_ms: int = 40
    digit_count: int = 3
    bar_segments: int = 12
    shadows_visible: bool = True
    needle_above_hub: bool = False
    show_redraw_regions: bool = False
    log_level: str = "INFO"

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @staticmethod
    def from_json(text: str) -> "ViewerConfig":
        data: Dict = json.loads(text)
        defaults = ViewerConfig()
        return ViewerConfig(
            window_width=int(data.get("window_width", defaults.window_width)),
            window_height=int(data.get("window_height", defaults.window_height)),
            sweep_interval_ms=int(
                data.get("sweep_interval_ms", defaults.sweep_interval_ms)
            ),
            digit_count=max(1, int(data.get("digit_count", defaults.digit_count))),
            bar_segments=max(1, int(data.get("bar_segments", defaults.bar_segments))),
            shadows_visible=bool(data.get("shadows_visible", defaults.shadows_visible)),
            needle_above_hub=bool(
                data.get("needle_above_hub", defaults.needle_above_hub)
            ),
            show_redraw_regions=bool(
                data.get("show_redraw_regions", defaults.show_redraw_regions)
            ),
            log_level=str(data.get("log_level", defaults.log_level)),
        )


__all__ = [
    "BarSegmentSpec",
    "ChangeKind",
    "NeedleSpec",
    "SegmentCorners",
    "SegmentOrientation",
    "ViewerConfig",
    "change_kind",
]

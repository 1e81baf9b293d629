"""Gauge drawables: bar segments and dial needles."""

from .base import ChangeListener, Drawable, DrawOp, DrawOpKind, Paint
from .digital_bar import (
    DigitalBar,
    SegmentGeometry,
    compute_segment_path,
    segment_outline,
)
from .needle import Needle, NeedleGeometry, compute_needle_paths

__all__ = [
    "ChangeListener",
    "DigitalBar",
    "DrawOp",
    "DrawOpKind",
    "Drawable",
    "Needle",
    "NeedleGeometry",
    "Paint",
    "SegmentGeometry",
    "compute_needle_paths",
    "compute_segment_path",
    "segment_outline",
]

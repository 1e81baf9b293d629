"""gauge_paths: vector geometry for digital bar segments and dial needles."""

from __future__ import annotations

from ._version import get_version
from .drawable import DigitalBar, Needle, compute_needle_paths, compute_segment_path
from .models import (
    BarSegmentSpec,
    ChangeKind,
    NeedleSpec,
    SegmentCorners,
    SegmentOrientation,
)

__version__ = get_version()


def main() -> None:
    """Entry point for ``python -m gauge_paths`` and console scripts."""
    from .app import main as _main

    _main()


__all__ = [
    "BarSegmentSpec",
    "ChangeKind",
    "DigitalBar",
    "Needle",
    "NeedleSpec",
    "SegmentCorners",
    "SegmentOrientation",
    "compute_needle_paths",
    "compute_segment_path",
    "main",
    "__version__",
    "get_version",
]

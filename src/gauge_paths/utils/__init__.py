"""Small helpers that do not belong to a specific drawable."""

from .geometry import clamp, lerp, round_half_up
from .log import get_logger, setup_logging

__all__ = ["clamp", "lerp", "round_half_up", "get_logger", "setup_logging"]

"""Shared behaviour of the gauge drawables.

A drawable owns a spec, the paths computed from it and the redraw region
covering them. Hosts change the spec through :meth:`Drawable.update`, listen
for :class:`~gauge_paths.models.ChangeKind` notifications (or poll
``needs_layout``), call :meth:`Drawable.calculate_paths` when the layout is
stale and paint :meth:`Drawable.draw_plan` in order.
"""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass, replace
import enum
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from ..geometry import Color, LinearGradient, Path, RadialGradient, Rect2D, Region
from ..models import ChangeKind, change_kind
from ..utils.log import get_logger

log = get_logger(__name__)

SpecT = TypeVar("SpecT")
GeometryT = TypeVar("GeometryT")
Paint = Union[Color, LinearGradient, RadialGradient]
ChangeListener = Callable[["Drawable[Any, Any]", ChangeKind], None]


class DrawOpKind(enum.Enum):
    FILL = "fill"
    STROKE = "stroke"


@dataclass(frozen=True)
class DrawOp:
    """One paint call: fill or outline ``path`` with ``paint``."""

    kind: DrawOpKind
    path: Path
    paint: Paint
    width: float = 1.0


def _check_container(container: Rect2D) -> None:
    values = (container.x, container.y, container.width, container.height)
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"container must have finite coordinates, got {container}")


class Drawable(abc.ABC, Generic[SpecT, GeometryT]):
    def __init__(self, spec: SpecT) -> None:
        self._spec = spec
        self._listeners: List[ChangeListener] = []
        self._geometry: Optional[GeometryT] = None
        self._region: Optional[Region] = None
        self._container = Rect2D()
        self._needs_layout = True
        self._released = False

    # ----------------------------- Spec ---------------------------------------

    @property
    def spec(self) -> SpecT:
        return self._spec

    @property
    def container(self) -> Rect2D:
        return self._container

    @property
    def needs_layout(self) -> bool:
        return self._needs_layout

    def update(self, **changes: Any) -> Optional[ChangeKind]:
        """Replace spec fields and notify listeners.

        The new spec is validated as a whole before anything is stored, so a
        rejected value leaves the drawable untouched. Returns the reported
        change kind, or ``None`` when no value actually changed.
        """
        self._check()
        new_spec = replace(self._spec, **changes)  # type: ignore[type-var]
        kinds = {
            change_kind(type(new_spec), name)
            for name in changes
            if getattr(new_spec, name) != getattr(self._spec, name)
        }
        if not kinds:
            return None
        self._spec = new_spec
        if ChangeKind.LAYOUT in kinds:
            kind = ChangeKind.LAYOUT
            self._needs_layout = True
        else:
            kind = ChangeKind.APPEARANCE
        self._notify(kind)
        return kind

    # ----------------------------- Notifications ------------------------------

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, kind: ChangeKind) -> None:
        for listener in list(self._listeners):
            listener(self, kind)

    # ----------------------------- Geometry -----------------------------------

    def calculate_paths(self, container: Rect2D) -> None:
        """Rebuild every owned path for ``container`` and refresh the region.

        The previous paths and region are released before the new ones are
        built. Should building fail, the drawable is left without paths, with
        an empty region and ``needs_layout`` set.
        """
        self._check()
        _check_container(container)
        self._release_geometry()
        self._container = container
        self._needs_layout = True
        self._region = Region()
        geometry = self._build_geometry(container)
        for path in self._paths_of(geometry):
            self._region.union(path)
        self._geometry = geometry
        self._needs_layout = False
        log.debug("%s recalculated for %s", type(self).__name__, container)

    @property
    def geometry(self) -> GeometryT:
        self._check()
        if self._geometry is None:
            raise ValueError(f"{type(self).__name__} has no calculated paths")
        return self._geometry

    def redraw_region(self) -> Region:
        self._check()
        if self._region is None:
            raise ValueError(f"{type(self).__name__} has no redraw region")
        return self._region

    def _release_geometry(self) -> None:
        if self._geometry is not None:
            for path in self._paths_of(self._geometry):
                path.release()
            self._geometry = None
        if self._region is not None:
            self._region.release()
            self._region = None

    @abc.abstractmethod
    def _build_geometry(self, container: Rect2D) -> GeometryT:
        """Compute fresh geometry for ``container`` from the current spec."""

    @abc.abstractmethod
    def _paths_of(self, geometry: GeometryT) -> List[Path]:
        """Paths owned by ``geometry``, in redraw region order."""

    @abc.abstractmethod
    def draw_plan(self) -> List[DrawOp]:
        """Paint operations in the order they have to be executed."""

    # ----------------------------- Lifecycle ----------------------------------

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._release_geometry()
        self._listeners.clear()
        self._released = True

    def __enter__(self) -> "Drawable[SpecT, GeometryT]":
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()

    def _check(self) -> None:
        if self._released:
            raise ValueError(f"operation on a released {type(self).__name__}")


__all__ = ["ChangeListener", "DrawOp", "DrawOpKind", "Drawable", "Paint"]

"""
displaced_path.py
-----------------

Assembly of midpoint displaced points into Matplotlib paths.

Two edge types are supported:

    STRAIGHT_EDGED          - MOVETO + LINETO through the displaced points;
    COMPOSITE_BEZIER_CURVE  - the points smoothed by a composite Bezier curve.

Core API:

    points_to_path(points, edge_type) -> mplPath

    midpoint_displaced_path(displacement, start, end, seed, edge_type) -> mplPath
        One displaced segment, reproducible from ``seed``.

    DisplacedPathBuilder(displacement, edge_type, seed=None)
        Turtle-style builder holding a single evolving random stream:
            builder.move_to((0, 0))
            builder.displaced_line_to((100, 0))
            builder.displaced_line_to((100, 100))
            builder.close()
            ax.add_patch(builder.to_patch(facecolor="none"))
"""

from __future__ import annotations

__all__ = [
    "EdgeType", "points_to_path", "midpoint_displaced_path", "DisplacedPathBuilder",
]

import logging
from enum import IntEnum
from numbers import Integral
from typing import Any, Optional, Sequence, Union

import numpy as np
from matplotlib.axes import Axes
from matplotlib.patches import PathPatch
from matplotlib.path import Path as mplPath

from .composite_curve import CompositeBezierCurve
from .midpoint_displacement import MidpointDisplacement
from .rng import RNG
from .vector2d import PointXY, Vector2D

logger = logging.getLogger(__name__)

DisplacementLike = Union[MidpointDisplacement, tuple[int, float, float]]


class EdgeType(IntEnum):
    STRAIGHT_EDGED = 0
    COMPOSITE_BEZIER_CURVE = 1

    @classmethod
    def parse(cls, value: Any) -> EdgeType:
        """Resolve a member, its integer value or its (case-insensitive) name.

        Raises:
            ValueError: For anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            if key in cls.__members__:
                return cls[key]
        elif isinstance(value, Integral) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(
            f"Invalid edge type: {value!r}. "
            f"Expected one of {[m.name for m in cls]} or {[m.value for m in cls]}."
        )


def _as_displacement(displacement: DisplacementLike) -> MidpointDisplacement:
    if displacement is None:
        raise ValueError("displacement cannot be None")
    if isinstance(displacement, MidpointDisplacement):
        return displacement
    if isinstance(displacement, (tuple, list)) and len(displacement) == 3:
        return MidpointDisplacement(*displacement)
    raise TypeError(
        "displacement must be a MidpointDisplacement or a "
        f"(steps, maximum_displacement, roughness) triple, got {type(displacement).__name__}"
    )


def _edge_vertices(points: Sequence[PointXY], edge_type: EdgeType) -> tuple[list, list]:
    """Vertices and codes of an edge, excluding its first point."""
    if edge_type is EdgeType.COMPOSITE_BEZIER_CURVE:
        verts, codes = [], []
        for seg in CompositeBezierCurve(points):
            verts.extend([seg.control1, seg.control2, seg.end_anchor])
            codes.extend([mplPath.CURVE4] * 3)
        return verts, codes
    return list(points[1:]), [mplPath.LINETO] * (len(points) - 1)


def points_to_path(points: Sequence[PointXY], edge_type: Any = EdgeType.STRAIGHT_EDGED) -> mplPath:
    """Convert an ordered point sequence to a Matplotlib Path.

    Raises:
        ValueError: If fewer than two points are given or ``edge_type`` is invalid.
    """
    edge_type = EdgeType.parse(edge_type)
    if points is None or len(points) < 2:
        raise ValueError("At least two points are required to build a path.")
    points = [Vector2D.of(p, f"points[{i}]").as_tuple() for i, p in enumerate(points)]
    verts, codes = _edge_vertices(points, edge_type)
    return mplPath(np.array([points[0]] + verts, dtype=float),
                   np.array([mplPath.MOVETO] + codes, dtype=np.uint8))


def midpoint_displaced_path(
        displacement : DisplacementLike,
        start        : PointXY,
        end          : PointXY,
        seed         : Optional[int]  = None,
        edge_type    : Any            = EdgeType.STRAIGHT_EDGED,
    ) -> mplPath:
    """Generate one displaced line from ``start`` to ``end`` as a Path.

    Args:
        displacement: Configured ``MidpointDisplacement`` or its
            ``(steps, maximum_displacement, roughness)`` triple.
        start: Line start (x, y).
        end: Line end (x, y).
        seed: Seed for the random stream (None -> non-reproducible).
        edge_type: ``EdgeType`` member, its value or its name.

    Returns:
        mplPath: Straight-edged or curved path.

    Raises:
        ValueError: On None arguments or an unrecognized edge type.
    """
    edge_type = EdgeType.parse(edge_type)
    points = _as_displacement(displacement).generate(start, end, seed)
    return points_to_path(points, edge_type)


class DisplacedPathBuilder:
    """Incremental builder of midpoint displaced paths.

    The builder owns its vertex/code buffers and one random stream seeded once;
    every ``displaced_line_to`` call draws fresh values from that stream, so a
    whole multi-edge path is reproducible from the builder seed.

    Args:
        displacement: Configured ``MidpointDisplacement`` or its triple.
        edge_type: How each displaced edge is rendered.
        seed: Seed of the builder stream (None -> entropy).
    """

    def __init__(self,
                 displacement: DisplacementLike,
                 edge_type: Any = EdgeType.STRAIGHT_EDGED,
                 seed: Optional[int] = None) -> None:
        self.displacement = _as_displacement(displacement)
        self.edge_type = EdgeType.parse(edge_type)
        self.rng = RNG(seed)
        self.reset()
        logger.debug(
            f"DisplacedPathBuilder created: {self.displacement!r}, "
            f"edge_type={self.edge_type.name}, seed={self.rng.seed_value}"
        )

    def reset(self, seed: Optional[int] = None) -> DisplacedPathBuilder:
        """Clear the path. A non-None ``seed`` also restarts the stream."""
        if seed is not None:
            self.rng.seed(seed)
        self._verts: list[PointXY] = []
        self._codes: list[int] = []
        self._current: Optional[Vector2D] = None
        self._subpath_start: Optional[Vector2D] = None
        return self

    # -------------------------------------------------------------------------
    # State accessors
    # -------------------------------------------------------------------------
    @property
    def seed(self) -> int:
        return self.rng.seed_value

    @property
    def current_point(self) -> Optional[PointXY]:
        return None if self._current is None else self._current.as_tuple()

    @property
    def path(self) -> mplPath:
        """Snapshot of the accumulated path."""
        if not self._verts:
            return mplPath(np.empty((0, 2), dtype=float))
        return mplPath(np.array(self._verts, dtype=float),
                       np.array(self._codes, dtype=np.uint8))

    def __len__(self) -> int:
        return len(self._verts)

    # -------------------------------------------------------------------------
    # Drawing commands
    # -------------------------------------------------------------------------
    def move_to(self, point: PointXY) -> DisplacedPathBuilder:
        p = Vector2D.of(point, "point")
        self._verts.append(p.as_tuple())
        self._codes.append(mplPath.MOVETO)
        self._current = self._subpath_start = p
        return self

    def line_to(self, point: PointXY) -> DisplacedPathBuilder:
        """Append a plain straight edge."""
        p = Vector2D.of(point, "point")
        self._require_current()
        self._verts.append(p.as_tuple())
        self._codes.append(mplPath.LINETO)
        self._current = p
        return self

    def displaced_line_to(self, point: PointXY) -> DisplacedPathBuilder:
        """Append a displaced edge from the current point to ``point``."""
        target = Vector2D.of(point, "point")
        self._require_current()
        points = self.displacement.generate_with_rng(self._current, target, self.rng)
        verts, codes = _edge_vertices(points, self.edge_type)
        self._verts.extend(verts)
        self._codes.extend(codes)
        self._current = target
        return self

    def close(self) -> DisplacedPathBuilder:
        """Displaced edge back to the sub-path start, then CLOSEPOLY."""
        self._require_current()
        if self._current != self._subpath_start:
            self.displaced_line_to(self._subpath_start)
        self._verts.append(self._subpath_start.as_tuple())
        self._codes.append(mplPath.CLOSEPOLY)
        self._current = self._subpath_start
        return self

    def _require_current(self) -> None:
        if self._current is None:
            raise ValueError("No current point; call move_to() first.")

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def to_patch(self, **kwargs: Any) -> PathPatch:
        """Wrap the accumulated path into a PathPatch (no fill by default)."""
        kwargs.setdefault("facecolor", "none")
        return PathPatch(self.path, **kwargs)

    def draw(self, ax: Axes, **kwargs: Any) -> PathPatch:
        if not isinstance(ax, Axes):
            raise TypeError(f"ax must be a Matplotlib Axes, not {type(ax).__name__}")
        patch = self.to_patch(**kwargs)
        ax.add_patch(patch)
        return patch

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} {self.displacement!r} "
            f"edge_type={self.edge_type.name} vertices={len(self._verts)}>"
        )

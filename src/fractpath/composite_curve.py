"""
composite_curve.py
------------------

Composite cubic Bezier curve through an ordered sequence of points.

For points P0..Pn the tangent at each anchor is estimated from chords:

    t(P0) = P1 - P0
    t(Pi) = P(i+1) - P(i-1)        for 0 < i < n
    t(Pn) = t(P(n-1))

and segment i (Pi -> P(i+1)) gets the control points

    control1 = Pi     + t(Pi) / 3
    control2 = P(i+1) - t(P(i+1)) / 3

Consecutive segments share their anchors (C0). The chord estimate gives a
visually smooth chain; it is not a C1 spline.
"""

from __future__ import annotations

__all__ = ["CurveSegment", "CompositeBezierCurve", "fit"]

import logging
from typing import Iterator, NamedTuple, Sequence

import numpy as np
from numpy.typing import NDArray
from matplotlib.path import Path as mplPath

from .vector2d import PointXY, Vector2D

logger = logging.getLogger(__name__)


class CurveSegment(NamedTuple):
    """One cubic Bezier piece: anchors plus two control points."""
    start_anchor: PointXY
    end_anchor: PointXY
    control1: PointXY
    control2: PointXY

    @property
    def bezier_points(self) -> tuple[PointXY, PointXY, PointXY, PointXY]:
        """Control polygon in Bezier order (P0, P1, P2, P3)."""
        return (self.start_anchor, self.control1, self.control2, self.end_anchor)

    def point_at(self, t: float) -> PointXY:
        """Evaluate the segment at parameter ``t`` in [0, 1]."""
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"t must be within [0, 1], got {t}")
        s = 1.0 - t
        b0, b1, b2, b3 = s * s * s, 3 * s * s * t, 3 * s * t * t, t * t * t
        (x0, y0), (x1, y1), (x2, y2), (x3, y3) = self.bezier_points
        return (b0 * x0 + b1 * x1 + b2 * x2 + b3 * x3,
                b0 * y0 + b1 * y1 + b2 * y2 + b3 * y3)

    def sample(self, n: int = 16) -> NDArray[np.float64]:
        """Return ``n`` evenly parameterized points as an (n, 2) array."""
        if n < 2:
            raise ValueError("At least two samples are required.")
        t = np.linspace(0.0, 1.0, n)[:, None]
        s = 1.0 - t
        P = np.asarray(self.bezier_points, dtype=float)
        return s**3 * P[0] + 3 * s**2 * t * P[1] + 3 * s * t**2 * P[2] + t**3 * P[3]


def fit(points: Sequence[PointXY]) -> list[CurveSegment]:
    """Fit a chain of cubic Bezier segments through ``points``.

    Args:
        points: Ordered sequence of at least two (x, y) pairs.

    Returns:
        list[CurveSegment]: ``len(points) - 1`` segments in path order.

    Raises:
        TypeError: If ``points`` is not a sequence of pairs.
        ValueError: If fewer than two points are given or a point is None.
    """
    if points is None:
        raise ValueError("points cannot be None")
    if isinstance(points, (str, bytes)) or not hasattr(points, "__len__"):
        raise TypeError("'points' must be a sequence of (x, y) pairs.")
    if len(points) < 2:
        raise ValueError(f"At least two points are required to fit a curve, got {len(points)}.")

    anchors = [Vector2D.of(p, f"points[{i}]") for i, p in enumerate(points)]
    segments: list[CurveSegment] = []

    def add_segment(a: Vector2D, b: Vector2D, tangent_a: Vector2D, tangent_b: Vector2D) -> None:
        segments.append(CurveSegment(
            start_anchor=a.as_tuple(),
            end_anchor=b.as_tuple(),
            control1=(a + tangent_a / 3).as_tuple(),
            control2=(b - tangent_b / 3).as_tuple(),
        ))

    previous, current = anchors[0], anchors[1]
    tangent_in = current - previous
    for nxt in anchors[2:]:
        tangent_out = nxt - previous
        add_segment(previous, current, tangent_in, tangent_out)
        tangent_in = tangent_out
        previous, current = current, nxt

    # Last anchor has no successor: reuse the last available tangent.
    add_segment(previous, current, tangent_in, tangent_in)

    logger.debug(f"Fitted {len(segments)} Bezier segments through {len(anchors)} points")
    return segments


class CompositeBezierCurve:
    """Owns the fitted segments of a composite Bezier curve.

    Example:
        >>> curve = CompositeBezierCurve([(0, 0), (10, 0), (10, 10)])
        >>> len(curve)
        2
        >>> patch = PathPatch(curve.to_path(), facecolor="none")
    """

    __slots__ = ("_segments",)

    def __init__(self, points: Sequence[PointXY]) -> None:
        self._segments: tuple[CurveSegment, ...] = tuple(fit(points))

    @property
    def segments(self) -> list[CurveSegment]:
        return list(self._segments)

    @property
    def anchors(self) -> list[PointXY]:
        return [self._segments[0].start_anchor] + [s.end_anchor for s in self._segments]

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[CurveSegment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> CurveSegment:
        return self._segments[index]

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------
    def to_path(self) -> mplPath:
        """Matplotlib Path: one MOVETO followed by three CURVE4 per segment."""
        verts = [self._segments[0].start_anchor]
        codes = [mplPath.MOVETO]
        for seg in self._segments:
            verts.extend([seg.control1, seg.control2, seg.end_anchor])
            codes.extend([mplPath.CURVE4, mplPath.CURVE4, mplPath.CURVE4])
        return mplPath(np.array(verts, dtype=float), np.array(codes, dtype=np.uint8))

    def sample(self, samples_per_segment: int = 16) -> NDArray[np.float64]:
        """Flatten the curve to a polyline; shared anchors appear once."""
        parts = [self._segments[0].sample(samples_per_segment)]
        parts.extend(seg.sample(samples_per_segment)[1:] for seg in self._segments[1:])
        return np.concatenate(parts)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} segments={len(self._segments)}>"

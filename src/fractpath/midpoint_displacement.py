"""
midpoint_displacement.py
------------------------

Midpoint displacement of a straight line segment.

The segment [start, end] is recursively bisected. At every level the midpoint
is pushed along the unit perpendicular of its parent chord by a uniform random
amount in [-magnitude, magnitude], and the magnitude decays by a factor of
``2 ** -roughness`` before recursing into both halves. Points are emitted by an
in-order traversal, so the output runs from ``start`` to ``end``.

    roughness > 1  -> displacement decays faster, smoother line
    roughness < 1  -> slower decay, rougher line

With ``steps = k`` the result holds at most ``2**k + 1`` points.

Core API:

    MidpointDisplacement(steps, maximum_displacement, roughness)
        .generate(start, end, seed=None) -> list[PointXY]
        .generate_with_rng(start, end, rng) -> list[PointXY]
"""

from __future__ import annotations

__all__ = ["MidpointDisplacement"]

import math
import logging
from numbers import Integral, Real
from typing import Optional

from .rng import RNG
from .vector2d import PointXY, Vector2D, numeric

logger = logging.getLogger(__name__)


class MidpointDisplacement:
    """Immutable midpoint displacement configuration.

    One instance is created per configuration and reused for any number of
    ``generate`` calls; it keeps no state between calls.

    Args:
        steps: Recursion depth (non-negative integer).
        maximum_displacement: Displacement magnitude at the first level (>= 0).
        roughness: Exponent of the per-level magnitude decay ``2 ** -roughness``.

    Raises:
        TypeError: If ``steps`` is not an integer or the reals are not numeric.
        ValueError: On negative ``steps`` / ``maximum_displacement`` or
            non-finite values.
    """

    __slots__ = ("_steps", "_maximum_displacement", "_roughness", "_decay")

    def __init__(self, steps: int, maximum_displacement: numeric, roughness: numeric) -> None:
        if isinstance(steps, bool) or not isinstance(steps, Integral):
            raise TypeError(f"steps must be an integer, got {type(steps).__name__}")
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")
        for name, val in {"maximum_displacement": maximum_displacement,
                          "roughness": roughness}.items():
            if isinstance(val, bool) or not isinstance(val, Real):
                raise TypeError(f"{name} must be numeric, got {type(val).__name__}")
            if not math.isfinite(val):
                raise ValueError(f"{name} must be finite, got {val}")
        if maximum_displacement < 0:
            raise ValueError(
                f"maximum_displacement must be non-negative, got {maximum_displacement}"
            )

        self._steps = int(steps)
        self._maximum_displacement = float(maximum_displacement)
        self._roughness = float(roughness)
        try:
            self._decay = 2.0 ** -self._roughness
            # Largest magnitude drawn at any level; uniform() needs 2 * magnitude finite
            deepest = self._maximum_displacement * self._decay ** max(self._steps - 1, 0)
            peak = 2.0 * max(self._maximum_displacement, deepest)
        except OverflowError:
            raise ValueError(
                f"roughness={roughness} overflows the displacement magnitude "
                f"over {steps} steps"
            ) from None
        if not math.isfinite(peak):
            raise ValueError(
                f"roughness={roughness} overflows the displacement magnitude "
                f"over {steps} steps"
            )

    # -------------------------------------------------------------------------
    # Configuration accessors
    # -------------------------------------------------------------------------
    @property
    def steps(self) -> int: return self._steps

    @property
    def maximum_displacement(self) -> float: return self._maximum_displacement

    @property
    def roughness(self) -> float: return self._roughness

    @property
    def max_points(self) -> int:
        """Upper bound on the number of points a single call produces."""
        return 2 ** self._steps + 1

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------
    def generate(self, start: PointXY, end: PointXY, seed: Optional[int] = None) -> list[PointXY]:
        """Generate displaced points from ``start`` to ``end``.

        Args:
            start: Line start (x, y).
            end: Line end (x, y).
            seed: Seed of the random stream for this call. ``None`` draws the
                seed from process/time entropy, so the result is not
                reproducible.

        Returns:
            list[PointXY]: Ordered points, first ``start`` and last ``end``.

        Raises:
            ValueError: If either endpoint is None.
        """
        a = Vector2D.of(start, "start")
        b = Vector2D.of(end, "end")
        rng = RNG(seed)
        if seed is None:
            logger.debug(f"Unseeded generate(); using entropy seed {rng.seed_value}")
        return self._generate(a, b, rng)

    def generate_with_rng(self, start: PointXY, end: PointXY, rng: RNG) -> list[PointXY]:
        """Same as :meth:`generate`, drawing from a caller-owned stream.

        The stream advances by exactly one draw per emitted interior point.
        """
        a = Vector2D.of(start, "start")
        b = Vector2D.of(end, "end")
        if rng is None:
            raise ValueError("rng cannot be None")
        return self._generate(a, b, rng)

    def _generate(self, start: Vector2D, end: Vector2D, rng: RNG) -> list[PointXY]:
        points: list[PointXY] = [start.as_tuple()]
        self._displace(points, start, end, rng, self._steps, self._maximum_displacement)
        points.append(end.as_tuple())
        logger.debug(
            f"Generated {len(points)} points {start.as_tuple()} -> {end.as_tuple()} "
            f"(steps={self._steps}, max={self._maximum_displacement}, "
            f"roughness={self._roughness})"
        )
        return points

    def _displace(self, points: list[PointXY], a: Vector2D, b: Vector2D,
                  rng: RNG, steps: int, magnitude: float) -> None:
        if steps == 0 or magnitude <= 0:
            return

        mid = (a + b) / 2
        direction = b - a

        # The draw is consumed even for a degenerate chord, keeping the stream
        # order independent of geometry.
        offset = rng.uniform(-magnitude, magnitude)
        if direction.is_zero():
            new_point = mid
        else:
            new_point = mid + direction.perp().normalized() * offset

        magnitude *= self._decay
        steps -= 1

        self._displace(points, a, new_point, rng, steps, magnitude)
        points.append(new_point.as_tuple())
        self._displace(points, new_point, b, rng, steps, magnitude)

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(steps={self._steps}, "
            f"maximum_displacement={self._maximum_displacement}, "
            f"roughness={self._roughness})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MidpointDisplacement):
            return NotImplemented
        return (self._steps, self._maximum_displacement, self._roughness) == (
            other._steps, other._maximum_displacement, other._roughness)

    def __hash__(self) -> int:
        return hash((self._steps, self._maximum_displacement, self._roughness))

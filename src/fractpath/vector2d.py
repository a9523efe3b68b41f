"""
vector2d.py
-----------

Minimal immutable 2D vector used by the displacement and curve fitting code.
"""

from __future__ import annotations

__all__ = ["Vector2D", "PointXY", "numeric"]

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator, TypeAlias, Union

numeric: TypeAlias = Union[int, float]
PointXY: TypeAlias = tuple[float, float]

ZERO_LENGTH_EPS = 0.0


@dataclass(frozen=True, slots=True)
class Vector2D:
    x: float
    y: float

    @classmethod
    def of(cls, point, name: str = "point") -> Vector2D:
        """Build a vector from any (x, y) pair.

        Raises:
            ValueError: If ``point`` is None or does not hold exactly two values.
            TypeError: If ``point`` is not a sequence or a coordinate is not real.
        """
        if point is None:
            raise ValueError(f"{name} cannot be None")
        if isinstance(point, Vector2D):
            return point
        if isinstance(point, (str, bytes)):
            raise TypeError(f"{name} must be an (x, y) pair, got {type(point).__name__}")
        try:
            x, y = point
        except TypeError:
            raise TypeError(
                f"{name} must be an (x, y) pair, got {type(point).__name__}"
            ) from None
        except ValueError:
            raise ValueError(f"{name} must have exactly two coordinates") from None
        for c in (x, y):
            if isinstance(c, bool) or not isinstance(c, Real):
                raise TypeError(f"{name} coordinates must be real numbers, got {type(c).__name__}")
        return cls(float(x), float(y))

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------
    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, k: numeric) -> Vector2D:
        return Vector2D(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: numeric) -> Vector2D:
        return Vector2D(self.x / k, self.y / k)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------
    def perp(self) -> Vector2D:
        """Counter-clockwise perpendicular (rotation by +90 degrees)."""
        return Vector2D(-self.y, self.x)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_zero(self, eps: float = ZERO_LENGTH_EPS) -> bool:
        return self.length() <= eps

    def normalized(self) -> Vector2D:
        """Unit-length copy.

        Raises:
            ZeroDivisionError: For a zero-length vector.
        """
        n = self.length()
        if n == 0.0:
            raise ZeroDivisionError("Cannot normalize a zero-length vector.")
        return Vector2D(self.x / n, self.y / n)

    def as_tuple(self) -> PointXY:
        return (self.x, self.y)

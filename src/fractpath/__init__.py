from .vector2d import Vector2D, PointXY
from .rng import RNGBackend, RNG, get_rng
from .midpoint_displacement import MidpointDisplacement
from .composite_curve import CurveSegment, CompositeBezierCurve, fit
from .displaced_path import (
    EdgeType, points_to_path, midpoint_displaced_path, DisplacedPathBuilder,
)
from .logging_utils import configure_logging

__version__ = "0.1.0"

__all__ = [
    "Vector2D", "PointXY",
    "RNGBackend", "RNG", "get_rng",
    "MidpointDisplacement",
    "CurveSegment", "CompositeBezierCurve", "fit",
    "EdgeType", "points_to_path", "midpoint_displaced_path", "DisplacedPathBuilder",
    "configure_logging",
]

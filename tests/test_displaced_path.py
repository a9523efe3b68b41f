"""
test_displaced_path.py
----------------------
Unit tests for displaced_path.py
"""

import numpy as np
import pytest
from matplotlib.patches import PathPatch
from matplotlib.path import Path as mplPath

from fractpath.displaced_path import (
    DisplacedPathBuilder, EdgeType, midpoint_displaced_path, points_to_path,
)
from fractpath.midpoint_displacement import MidpointDisplacement
from fractpath.rng import RNG


# ---------------------------------------------------------------------------
# EdgeType
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    (EdgeType.STRAIGHT_EDGED, EdgeType.STRAIGHT_EDGED),
    (0, EdgeType.STRAIGHT_EDGED),
    (1, EdgeType.COMPOSITE_BEZIER_CURVE),
    ("straight_edged", EdgeType.STRAIGHT_EDGED),
    ("Composite-Bezier-Curve", EdgeType.COMPOSITE_BEZIER_CURVE),
])
def test_edge_type_parse(value, expected):
    assert EdgeType.parse(value) is expected


def test_edge_type_parse_accepts_numpy_integers():
    assert EdgeType.parse(np.int64(1)) is EdgeType.COMPOSITE_BEZIER_CURVE
    assert EdgeType.parse(np.uint8(0)) is EdgeType.STRAIGHT_EDGED
    with pytest.raises(ValueError):
        EdgeType.parse(np.int64(5))


@pytest.mark.parametrize("value", [2, -1, "curved", None, True, 1.0])
def test_edge_type_parse_rejects_unknown(value):
    with pytest.raises(ValueError):
        EdgeType.parse(value)


# ---------------------------------------------------------------------------
# points_to_path / midpoint_displaced_path
# ---------------------------------------------------------------------------

def test_points_to_path_straight():
    pts = [(0, 0), (1, 2), (3, 1)]
    path = points_to_path(pts, EdgeType.STRAIGHT_EDGED)
    assert list(path.codes) == [mplPath.MOVETO, mplPath.LINETO, mplPath.LINETO]
    assert np.allclose(path.vertices, pts)


def test_points_to_path_curved():
    pts = [(0, 0), (1, 2), (3, 1)]
    path = points_to_path(pts, "composite_bezier_curve")
    assert len(path.vertices) == 1 + 3 * 2
    assert path.codes[0] == mplPath.MOVETO
    assert np.allclose(path.vertices[-1], (3, 1))


def test_points_to_path_invalid():
    with pytest.raises(ValueError):
        points_to_path([(0, 0)])
    with pytest.raises(ValueError):
        points_to_path([(0, 0), None])
    with pytest.raises(ValueError):
        points_to_path([(0, 0), (1, 1)], edge_type=7)


def test_midpoint_displaced_path_is_reproducible():
    md = MidpointDisplacement(4, 3.0, 1.0)
    p1 = midpoint_displaced_path(md, (0, 0), (40, 0), seed=5)
    p2 = midpoint_displaced_path(md, (0, 0), (40, 0), seed=5)
    assert np.array_equal(p1.vertices, p2.vertices)
    assert np.allclose(p1.vertices, md.generate((0, 0), (40, 0), seed=5))


def test_midpoint_displaced_path_accepts_config_triple():
    path = midpoint_displaced_path((3, 2.0, 1.0), (0, 0), (8, 0), seed=1,
                                   edge_type=EdgeType.COMPOSITE_BEZIER_CURVE)
    assert len(path.vertices) == 1 + 3 * 8


@pytest.mark.parametrize("kwargs", [
    dict(displacement=None, start=(0, 0), end=(1, 1)),
    dict(displacement=(3, 1.0, 1.0), start=None, end=(1, 1)),
    dict(displacement=(3, 1.0, 1.0), start=(0, 0), end=None),
    dict(displacement=(3, 1.0, 1.0), start=(0, 0), end=(1, 1), edge_type="wavy"),
])
def test_midpoint_displaced_path_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        midpoint_displaced_path(**kwargs)


def test_midpoint_displaced_path_bad_displacement_type():
    with pytest.raises(TypeError):
        midpoint_displaced_path("steps", (0, 0), (1, 1))


# ---------------------------------------------------------------------------
# DisplacedPathBuilder
# ---------------------------------------------------------------------------

def test_builder_requires_move_to(displacement):
    builder = DisplacedPathBuilder(displacement, seed=1)
    with pytest.raises(ValueError):
        builder.displaced_line_to((1, 1))
    with pytest.raises(ValueError):
        builder.close()
    assert len(builder.path.vertices) == 0


def test_builder_straight_edges(displacement):
    builder = DisplacedPathBuilder(displacement, EdgeType.STRAIGHT_EDGED, seed=3)
    builder.move_to((0, 0)).displaced_line_to((50, 0)).displaced_line_to((50, 50))
    path = builder.path
    per_edge = displacement.max_points - 1
    assert len(path.vertices) == 1 + 2 * per_edge
    assert path.codes[0] == mplPath.MOVETO
    assert all(c == mplPath.LINETO for c in path.codes[1:])
    assert builder.current_point == (50, 50)
    assert np.allclose(path.vertices[per_edge], (50, 0))


def test_builder_curved_edges(displacement):
    builder = DisplacedPathBuilder(displacement, "composite_bezier_curve", seed=3)
    builder.move_to((0, 0)).displaced_line_to((50, 0))
    path = builder.path
    assert len(path.vertices) == 1 + 3 * (displacement.max_points - 1)
    assert all(c == mplPath.CURVE4 for c in path.codes[1:])


def test_builder_single_stream_matches_generate_with_rng(displacement):
    builder = DisplacedPathBuilder(displacement, seed=21)
    builder.move_to((0, 0)).displaced_line_to((30, 0)).displaced_line_to((60, 0))

    rng = RNG(21)
    expected = displacement.generate_with_rng((0, 0), (30, 0), rng)
    expected += displacement.generate_with_rng((30, 0), (60, 0), rng)[1:]
    assert np.allclose(builder.path.vertices, expected)


def test_builder_does_not_reseed_per_edge(displacement):
    builder = DisplacedPathBuilder(displacement, seed=21)
    builder.move_to((0, 0)).displaced_line_to((30, 0)).displaced_line_to((60, 0))
    verts = builder.path.vertices
    k = displacement.max_points - 1
    first_offsets = verts[1:k, 1]
    second_offsets = verts[k + 1:2 * k, 1]
    assert not np.allclose(first_offsets, second_offsets)


def test_builder_reproducible_and_reset(displacement):
    def build(seed):
        b = DisplacedPathBuilder(displacement, seed=seed)
        b.move_to((0, 0)).displaced_line_to((10, 10)).line_to((20, 0))
        return b

    b1, b2 = build(8), build(8)
    assert np.array_equal(b1.path.vertices, b2.path.vertices)
    assert b1.seed == 8

    b1.reset(8)
    assert len(b1) == 0 and b1.current_point is None
    b1.move_to((0, 0)).displaced_line_to((10, 10)).line_to((20, 0))
    assert np.array_equal(b1.path.vertices, b2.path.vertices)


def test_builder_close(displacement):
    builder = DisplacedPathBuilder(displacement, seed=4)
    builder.move_to((0, 0)).displaced_line_to((10, 0)).displaced_line_to((5, 8)).close()
    path = builder.path
    assert path.codes[-1] == mplPath.CLOSEPOLY
    assert np.allclose(path.vertices[-2], (0, 0))
    assert builder.current_point == (0, 0)


def test_builder_none_point_rejected(displacement):
    builder = DisplacedPathBuilder(displacement, seed=4).move_to((0, 0))
    with pytest.raises(ValueError):
        builder.displaced_line_to(None)


def test_builder_draw_adds_patch(fig_ax, displacement):
    _, ax = fig_ax
    builder = DisplacedPathBuilder(displacement, seed=2)
    builder.move_to((0, 0)).displaced_line_to((1, 1))
    before = len(ax.patches)
    patch = builder.draw(ax, edgecolor="black")
    assert isinstance(patch, PathPatch)
    assert len(ax.patches) == before + 1
    with pytest.raises(TypeError):
        builder.draw(object())

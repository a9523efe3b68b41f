"""
-------
conftest.py
-------
Shared pytest fixtures for displaced path tests.
"""

import pytest
import matplotlib
matplotlib.use("Agg")  # ensure headless backend for CI and multiprocessing
import matplotlib.pyplot as plt

from fractpath.midpoint_displacement import MidpointDisplacement
from fractpath.rng import RNG


# -----------------------------------------------------------------------------
# Core Matplotlib fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(scope="function")
def fig_ax():
    """
    Create and yield an isolated Matplotlib Figure/Axes pair.

    The figure is automatically closed after the test to avoid memory leaks.
    """
    fig, ax = plt.subplots(figsize=(4, 3))
    yield fig, ax
    plt.close(fig)


# -----------------------------------------------------------------------------
# Generator fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def displacement():
    """Moderate configuration: 4 levels, magnitude 5, roughness 1."""
    return MidpointDisplacement(steps=4, maximum_displacement=5.0, roughness=1.0)


@pytest.fixture
def fixed_rng():
    """Deterministic RNG instance."""
    return RNG(seed=123)

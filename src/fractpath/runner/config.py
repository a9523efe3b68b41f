"""
config.py - Configuration dataclass for batch rendering of displaced paths.

Multiprocessing machinery pickles it, passes it to each pool worker, and
PathWorker rebuilds its MidpointDisplacement from it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Tuple

from ..displaced_path import EdgeType
from ..midpoint_displacement import MidpointDisplacement


@dataclass(frozen=True)
class RenderConfig:
    """Immutable configuration passed to each PathWorker process."""
    logger_level: int = logging.INFO
    steps: int = 6
    maximum_displacement: float = 40.0
    roughness: float = 1.0
    edge_type: Any = EdgeType.COMPOSITE_BEZIER_CURVE
    sides: int = 5
    img_size: Tuple[int, int] = (1024, 1024)
    dpi: int = 100
    base_seed: int = 0
    output_dir: Path = Path("./out")

    def __post_init__(self):
        # Fail fast in the parent process instead of inside every worker
        self.displacement()
        object.__setattr__(self, "edge_type", EdgeType.parse(self.edge_type))
        if not isinstance(self.sides, int) or self.sides < 3:
            raise ValueError(f"sides must be an integer >= 3, got {self.sides!r}")
        if len(self.img_size) != 2 or min(self.img_size) <= 0:
            raise ValueError(f"img_size must be a positive (width, height) pair, got {self.img_size!r}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi!r}")
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def displacement(self) -> MidpointDisplacement:
        return MidpointDisplacement(self.steps, self.maximum_displacement, self.roughness)

"""
worker.py
---------

Per-process drawing worker used by orchestration.py.

Responsibilities:
- create and own a Matplotlib figure/axes for this process
- build one closed displaced polygon per job from the job seed
- collect per-image JSON metadata
- save the image to disk and return (path, json)
"""

import os
import json
import math
import time
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple, Union

import matplotlib
matplotlib.use("Agg")  # safe for multiprocessing workers
import matplotlib.pyplot as plt

from ..displaced_path import DisplacedPathBuilder
from ..vector2d import PointXY
from .config import RenderConfig

PathLike = Union[str, os.PathLike]
LOGGER_NAME = "fractpath.worker"


class PathWorker:
    """
    Per-process displaced path renderer.

    Each process:
    - has its own figure and axes
    - has its own reusable DisplacedPathBuilder
    - has its own image-level metadata dict
    """
    def __init__(self, config: Optional[RenderConfig] = None) -> None:
        self.pid = os.getpid()
        self.logger = logging.getLogger(LOGGER_NAME)
        self.config = config or RenderConfig()
        self.img_size = self.config.img_size
        self.dpi = self.config.dpi
        self.builder = DisplacedPathBuilder(
            self.config.displacement(), self.config.edge_type, seed=self.config.base_seed
        )
        self._create_canvas()
        self.plot_reset(self.config.base_seed)
        self.logger.info(f"Initialized PathWorker PID-{self.pid}")

    def _create_canvas(self) -> None:
        width_in = self.img_size[0] / self.dpi
        height_in = self.img_size[1] / self.dpi
        self.fig, self.ax = plt.subplots(figsize=(width_in, height_in), frameon=False)

    # -------------------------------------------------------------------------
    # per-job lifecycle
    # -------------------------------------------------------------------------
    def plot_reset(self, seed: int) -> None:
        """Reset axes to a blank image and restart the builder stream at ``seed``."""
        self.ax.cla()
        self.ax.set_xlim(0, self.img_size[0])
        self.ax.set_ylim(0, self.img_size[1])
        self.ax.set_aspect("equal")
        self.ax.axis("off")
        self.builder.reset(seed)
        self._meta = {
            "pid": self.pid,
            "seed": seed,
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime()),
            "config": asdict(self.config),
            "draw_ops": [],
        }

    # -------------------------------------------------------------------------
    # draw ops
    # -------------------------------------------------------------------------
    def polygon_vertices(self) -> list[PointXY]:
        """Regular polygon centered on the canvas."""
        w, h = self.img_size
        r = 0.35 * min(w, h)
        n = self.config.sides
        return [
            (w / 2 + r * math.cos(2 * math.pi * k / n + math.pi / 2),
             h / 2 + r * math.sin(2 * math.pi * k / n + math.pi / 2))
            for k in range(n)
        ]

    def draw_polygon(self, **kwargs) -> None:
        """Draw the closed displaced polygon. Extra kwargs go to PathPatch."""
        vertices = self.polygon_vertices()
        self.builder.move_to(vertices[0])
        for v in vertices[1:]:
            self.builder.displaced_line_to(v)
        self.builder.close()
        kwargs.setdefault("linewidth", 1.5)
        kwargs.setdefault("edgecolor", "black")
        self.builder.draw(self.ax, **kwargs)
        self._append_meta("DisplacedPolygon", {
            "corners": vertices,
            "edge_type": self.builder.edge_type.name,
            "vertex_count": len(self.builder),
        })

    def _append_meta(self, shape_type: str, data: dict) -> None:
        self._meta["draw_ops"].append({shape_type: data})

    # -------------------------------------------------------------------------
    # output
    # -------------------------------------------------------------------------
    def save_image(self, output_path: PathLike) -> Tuple[Path, str]:
        """
        Save current figure as PNG and return (path, json_str).
        Orchestration layer will collect this JSON into batch file.
        """
        out = Path(output_path)
        self.fig.savefig(
            out,
            dpi=self.dpi,
            format="png",
            bbox_inches=None,
            pad_inches=0,
        )
        return out, json.dumps(self._meta, indent=2, ensure_ascii=False, default=str)

    # -------------------------------------------------------------------------
    # teardown
    # -------------------------------------------------------------------------
    def close(self) -> None:
        try:
            plt.close(self.fig)
        finally:
            self.logger.info(f"Worker PID={self.pid} closed figure and released resources.")

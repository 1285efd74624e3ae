"""Smooth NGC exporter: 2D toolpaths -> simplified G-code program.

Each path is milled as: retract to the safety height, rapid to the path
start, then one or more passes at cutting depth.  Cut points are fed to
:class:`GcodeEmitter`, which merges dense runs into lines and arcs.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, TextIO

from ..core.mill import Cutter, Mill, compute_z_levels
from ..core.paths import Path2D
from ..core.toolpath.base import Move, Plane
from ..core.units import Units
from . import gcode_writer as gw
from .emitter import GcodeEmitter

logger = logging.getLogger(__name__)


@dataclass
class ExporterConfig:
    """Settings for one exported program."""

    mill: Mill = field(default_factory=Mill)
    tolerance: float = 0.001
    units: Units = Units.INCH
    plane: Plane = Plane.XY
    header: list[str] = field(default_factory=list)


def corner_points(path: Path2D) -> list[tuple[float, float]]:
    """Drop interior points lying on an axis-aligned run.

    A point is kept if it starts or ends the path, or if it is not in
    line with both neighbours along x or along y.
    """
    kept = []
    n = len(path)
    for i, (x, y) in enumerate(path):
        if i == 0 or i == n - 1:
            kept.append((x, y))
            continue
        (lx, ly), (nx, ny) = path[i - 1], path[i + 1]
        x_aligned = lx == x == nx
        y_aligned = ly == y == ny
        if not (x_aligned or y_aligned):
            kept.append((x, y))
    return kept


class SmoothNgcExporter:
    """Writes a complete program for a list of 2D toolpaths."""

    def __init__(self, config: ExporterConfig):
        self.config = config

    def z_levels(self) -> list[float]:
        """Cutting depths for each path, shallowest first."""
        mill = self.config.mill
        if isinstance(mill, Cutter) and mill.do_steps:
            return compute_z_levels(mill.zwork, mill.stepsize)
        return [mill.zwork]

    def write(self, paths: Sequence[Path2D], sink: TextIO) -> None:
        cfg = self.config
        mill = cfg.mill

        for line in cfg.header:
            sink.write(gw.comment(line) + "\n")
        if cfg.header:
            sink.write("\n")

        gc = GcodeEmitter(
            home_height=mill.zchange,
            safety_height=mill.zsafe,
            tolerance=cfg.tolerance,
            spindle_speed=mill.speed,
            units=cfg.units,
            sink=sink,
        )
        gc.begin()
        gc.continuous(cfg.tolerance)
        gc.set_plane(cfg.plane)

        levels = self.z_levels()
        for i, path in enumerate(paths):
            if not path:
                logger.debug("export: skipping empty path %d", i)
                continue

            gc.go_to_safety()
            x0, y0 = path[0]
            gc.rapid_move(Move(x=x0, y=y0))

            points = corner_points(path)
            for z in levels:
                gc.set_feed(mill.feed)
                gc.append(Move(z=z))
                for x, y in points:
                    gc.append(Move(x=x, y=y))

        gc.go_to_safety()
        gc.end()

    def get_lines(self, paths: Sequence[Path2D]) -> list[str]:
        """Return the program as a list of lines."""
        buf = io.StringIO()
        self.write(paths, buf)
        return buf.getvalue().splitlines()

    def generate(self, paths: Sequence[Path2D], output: Path) -> None:
        """Write the program to *output*."""
        output = Path(output)
        with output.open("w") as f:
            self.write(paths, f)
        logger.info("Wrote %s", output)

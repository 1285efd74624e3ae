"""Buffered G-code emitter.

Cut moves are collected in a buffer and run through the arc-fitting
simplifier whenever the path is interrupted: a feed change, a rapid, a
retract, the end of the program, or a single step larger than the
tolerance.  Only axis and mode words that differ from the last emitted
state are written.
"""

from __future__ import annotations

import logging
import math
import sys
from typing import Optional, TextIO

from ..core.toolpath.base import MotionMode, Move, Plane, Point3
from ..core.toolpath.simplify import simplify
from ..core.units import Units
from . import gcode_writer as gw

logger = logging.getLogger(__name__)


class GcodeEmitter:
    """Writes deduplicated motion commands to *sink*.

    Parameters
    ----------
    home_height:
        Z for :meth:`go_home` (tool change height).
    safety_height:
        Z for :meth:`go_to_safety` and the program preamble.
    tolerance:
        Maximum deviation of the simplified path.  Also the largest
        per-axis step that may join the current buffer.
    spindle_speed:
        RPM for the preamble ``S`` word.
    units:
        Units for the preamble modal word.
    sink:
        Text stream receiving the program.
    """

    def __init__(
        self,
        home_height: float = 1.5,
        safety_height: float = 0.04,
        tolerance: float = 0.001,
        spindle_speed: float = 1000,
        units: Units = Units.INCH,
        sink: Optional[TextIO] = None,
    ):
        self.home_height = home_height
        self.safety_height = safety_height
        self.tolerance = tolerance
        self.spindle_speed = spindle_speed
        self.units = units
        self._sink = sink if sink is not None else sys.stdout

        self.plane = Plane.XY
        self.last_x = math.nan
        self.last_y = math.nan
        self.last_z = math.nan
        self.last_gc: Optional[MotionMode] = None
        self._cuts: list[Point3] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def pending(self) -> int:
        """Number of buffered cut points."""
        return len(self._cuts)

    @property
    def buffered(self) -> tuple[Point3, ...]:
        """Buffered cut points, oldest first."""
        return tuple(self._cuts)

    @property
    def is_idle(self) -> bool:
        return not self._cuts

    @property
    def last_position(self) -> tuple[float, float, float]:
        return (self.last_x, self.last_y, self.last_z)

    def _write(self, line: str) -> None:
        self._sink.write(line + "\n")

    # ------------------------------------------------------------------
    # Program structure
    # ------------------------------------------------------------------

    def begin(self) -> None:
        """Write the program preamble and start the spindle."""
        self._write(self.units.gcode_modal)
        self._write(f"{MotionMode.RAPID.value} {gw.coord('Z', self.safety_height)}")
        self.last_z = self.safety_height
        self.last_gc = MotionMode.RAPID
        self._write(f"{Plane.XY.gcode} G40")
        self.plane = Plane.XY
        self._write("G80 G90 G94")
        self._write(f"S{gw.fmt(self.spindle_speed)} M3")
        self._write("G04 P3")   # spindle spin-up dwell

    def end(self) -> None:
        """Commit pending cuts, retract and end the program."""
        self.flush()
        self.go_to_safety()
        self._write("M2")

    def set_plane(self, plane: Plane) -> None:
        """Select the arc plane.  Change it only between paths."""
        if plane is not self.plane:
            self.plane = plane
            self._write(plane.gcode)

    def exactpath(self) -> None:
        self._write("G61")

    def continuous(self, tolerance: float = 0.0) -> None:
        self._write(gw.continuous(tolerance))

    def set_feed(self, f: float) -> None:
        self.flush()
        self._write(gw.feed(f))

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------

    def rapid_move(self, move: Move) -> None:
        """Unbuffered G00 traverse."""
        self.flush()
        self._move_common(move, MotionMode.RAPID)

    def go_home(self) -> None:
        self.flush()
        self.rapid_move(Move(z=self.home_height, comment="home height"))

    def go_to_safety(self) -> None:
        self.flush()
        self.rapid_move(Move(z=self.safety_height, comment="safety height"))

    def append(self, move: Move) -> None:
        """Buffer a cut, flushing first if it jumps more than the tolerance."""
        if self._cuts:
            lx, ly, lz = self._cuts[-1].as_tuple()
        else:
            lx, ly, lz = self.last_position
        x = lx if move.x is None else move.x
        y = ly if move.y is None else move.y
        z = lz if move.z is None else move.z

        # NaN never compares greater, so a move from an unknown position
        # joins the buffer
        if (abs(lx - x) > self.tolerance
                or abs(ly - y) > self.tolerance
                or abs(lz - z) > self.tolerance):
            self.flush()
        self._cuts.append(Point3(x, y, z))

    def flush(self) -> None:
        """Simplify and write all buffered cuts, leaving the buffer empty."""
        if not self._cuts:
            return
        cuts, self._cuts = self._cuts, []
        logger.debug("flush: flushing %d cuts", len(cuts))

        if len(cuts) > 1 and cuts[0] == cuts[-1]:
            # A closed path would collapse onto its own endpoint
            half = len(cuts) // 2
            logger.debug("flush: same endpoints, splitting %d cuts at %d",
                         len(cuts), half)
            moves = simplify(cuts[:half], self.tolerance, self.plane)
            moves += simplify(cuts[half:], self.tolerance, self.plane)
        else:
            moves = simplify(cuts, self.tolerance, self.plane)

        for move in moves:
            if move.is_arc:
                self._write(gw.arc(move.gc, move.x, move.y, move.z, move.offsets))
                self.last_x, self.last_y, self.last_z = move.x, move.y, move.z
                # Arcs are written in full, so the next line restates its mode
                self.last_gc = None
            else:
                self._move_common(move, MotionMode.LINEAR)

    def _move_common(self, move: Move, gc: MotionMode) -> None:
        """Write only the axes and mode that changed; drop no-op moves."""
        words: list[str] = []
        resolved = (
            ("X", self.last_x if move.x is None else move.x, "last_x"),
            ("Y", self.last_y if move.y is None else move.y, "last_y"),
            ("Z", self.last_z if move.z is None else move.z, "last_z"),
        )
        for letter, value, attr in resolved:
            if math.isnan(value):
                continue
            if value != getattr(self, attr):
                words.append(gw.coord(letter, value))
                setattr(self, attr, value)

        if not words:
            return
        if gc is not self.last_gc:
            words.insert(0, gc.value)
            self.last_gc = gc
        if move.comment:
            words.append(gw.comment(move.comment))
        self._write(" ".join(words))

"""Douglas-Peucker path simplification with circular arc fitting.

Algorithm per point range
-------------------------
1. A single point is returned as is.
2. Measure every point's distance to the chord (first, last) and the
   circumradius of the triangle (first, point, last) in the arc plane.
3. Fit a candidate arc around the smallest finite circumradius and
   measure how far the range strays from it.
4. Emit one arc if it is within tolerance and beats the chord; otherwise
   split at the worst chord point and recurse while the chord is out of
   tolerance; otherwise the chord alone is good enough.

Adjacent sub-ranges share their split point, so only the outermost call
emits the path's own first and last points for straight or split
results.  Arcs always carry both of their endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from .base import MotionMode, Move, Plane, Point2, Point3
from .geometry import (
    arc_deviation,
    circumcenter,
    circumradius,
    distance_to_segment,
    format_arc_offsets,
    project,
    quadrant_consistent,
    sweep_is_ccw,
)

logger = logging.getLogger(__name__)


class CallContext(Enum):
    """Whether a simplification call owns the path's boundary points."""
    OUTERMOST = "outermost"
    INTERIOR = "interior"


@dataclass
class ArcFit:
    """Best arc candidate for a point range."""
    center: Point2
    radius: float
    sample: Point3          # middle point used for the center and direction
    deviation: float        # worst radial deviation over the range


def simplify(
    points: Sequence[Point3],
    tolerance: float,
    plane: Optional[Plane] = None,
    context: CallContext = CallContext.OUTERMOST,
) -> list[Move]:
    """Reduce *points* to straight and arc moves within *tolerance*.

    Parameters
    ----------
    points:
        Ordered, non-empty cut positions.
    tolerance:
        Maximum allowed deviation from the input polyline (>= 0).
    plane:
        Plane to fit arcs in, or None for straight moves only.  Movement
        normal to the plane distorts arcs, so pick a plane only when the
        path moves in two axes.
    context:
        OUTERMOST for callers; INTERIOR is used by the recursion.

    Raises
    ------
    ValueError:
        If *points* is empty or *tolerance* is negative.
    """
    if len(points) == 0:
        raise ValueError("cannot simplify an empty point range")
    if tolerance < 0:
        raise ValueError("tolerance must be non-negative")
    return _simplify_range(points, 0, len(points) - 1, tolerance, plane, context)


def _simplify_range(
    points: Sequence[Point3],
    start: int,
    end: int,
    tolerance: float,
    plane: Optional[Plane],
    context: CallContext,
) -> list[Move]:
    """Simplify the inclusive index range points[start..end]."""
    ps = points[start]
    if start == end:
        return [Move.from_point(ps)]

    pe = points[end]
    if ps == pe:
        logger.debug("simplify: endpoints are equal at %s", ps.as_tuple())

    chord = np.array([
        distance_to_segment(ps, pe, points[i]) for i in range(start, end + 1)
    ])
    worst_i = int(np.argmax(chord))
    worst_dist = float(chord[worst_i])

    arc = _fit_arc(points, start, end, plane) if plane is not None else None

    if arc is not None and arc.deviation < tolerance and arc.deviation < worst_dist:
        ccw = sweep_is_ccw(plane, arc.center, ps, arc.sample, pe)
        # XZ (G18) reports the opposite sense; kept as observed
        if plane is Plane.XZ:
            ccw = not ccw
        logger.debug(
            "simplify: arc over %d points, r=%.6f, %s",
            end - start + 1, arc.radius, "ccw" if ccw else "cw",
        )
        return [
            Move.from_point(ps),
            Move.from_point(
                pe,
                gc=MotionMode.CCW_ARC if ccw else MotionMode.CW_ARC,
                offsets=format_arc_offsets(plane, arc.center, ps),
            ),
        ]

    outermost = context is CallContext.OUTERMOST
    moves: list[Move] = []

    if worst_dist > tolerance:
        split = start + worst_i
        if outermost:
            moves.append(Move.from_point(ps))
        moves.extend(_simplify_range(
            points, start, split, tolerance, plane, CallContext.INTERIOR))
        moves.append(Move.from_point(points[split]))
        moves.extend(_simplify_range(
            points, split, end, tolerance, plane, CallContext.INTERIOR))
        if outermost:
            moves.append(Move.from_point(pe))
    elif outermost:
        moves.append(Move.from_point(ps))
        moves.append(Move.from_point(pe))

    return moves


def _fit_arc(
    points: Sequence[Point3],
    start: int,
    end: int,
    plane: Plane,
) -> ArcFit | None:
    """Arc through the range endpoints around the tightest bend, if any."""
    ps, pe = points[start], points[end]
    q1, q3 = project(plane, ps), project(plane, pe)

    radii = np.array([
        _or_inf(circumradius(q1, project(plane, points[i]), q3))
        for i in range(start, end + 1)
    ])
    min_i = int(np.argmin(radii))
    min_radius = float(radii[min_i])
    if not np.isfinite(min_radius):
        return None

    # The center is taken from the point just before the tightest one.
    # TODO: re-verify geometrically why the sample sits one index early
    sample = points[start + min_i - 1]
    center = circumcenter(q1, project(plane, sample), q3)
    if center is None:
        return None
    if not quadrant_consistent(plane, center, ps, sample, pe):
        return None

    # The written arc runs at the start point's radius, which can differ
    # from the tightest one; both must hold the range
    cut_radius = (q1 - center).mag()
    deviation = max(
        max(arc_deviation(plane, center, points[i], min_radius),
            arc_deviation(plane, center, points[i], cut_radius))
        for i in range(start, end + 1)
    )
    return ArcFit(center=center, radius=min_radius, sample=sample,
                  deviation=deviation)


def _or_inf(radius: float | None) -> float:
    return np.inf if radius is None else radius

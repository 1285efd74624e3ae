"""Geometry helpers for straight/arc path fitting.

Everything here is pure.  Degenerate triangles (collinear or coincident
points) produce ``None`` instead of a radius or a center, and callers
treat ``None`` as worse than any real candidate.
"""

from __future__ import annotations

import math

import numpy as np

from .base import ArcOffsets, Plane, Point2, Point3

# Zero band for signs and triangle areas (single precision epsilon)
EPSILON = float(np.finfo(np.float32).eps)


def distance_to_segment(a: Point3, b: Point3, p: Point3) -> float:
    """3D distance from *p* to the segment *a*..*b* (0 if a == b)."""
    dx, dy, dz = b.x - a.x, b.y - a.y, b.z - a.z
    d2 = dx * dx + dy * dy + dz * dz
    if d2 == 0:
        return 0.0
    t = (dx * (p.x - a.x) + dy * (p.y - a.y) + dz * (p.z - a.z)) / d2
    t = max(0.0, min(1.0, t))
    return math.sqrt(
        (p.x - a.x - t * dx) ** 2
        + (p.y - a.y - t * dy) ** 2
        + (p.z - a.z - t * dz) ** 2
    )


def project(plane: Plane, p: Point3) -> Point2:
    """Drop the coordinate normal to *plane*."""
    if plane is Plane.XY:
        return Point2(p.x, p.y)
    if plane is Plane.XZ:
        return Point2(p.x, p.z)
    return Point2(p.y, p.z)


def circumradius(p1: Point2, p2: Point2, p3: Point2) -> float | None:
    """Radius of the circle through three points, or None if degenerate."""
    d12 = p1 - p2
    d23 = p2 - p3
    d31 = p3 - p1
    den = abs(d12.cross(d23))
    if den < EPSILON:
        return None
    return d12.mag() * d23.mag() * d31.mag() / 2 / den


def circumcenter(p1: Point2, p2: Point2, p3: Point2) -> Point2 | None:
    """Center of the circle through three points, or None if degenerate.

    Uses the barycentric weights of the circumcenter:
    ``alpha = |p2-p3|^2 (p1-p2).(p1-p3) / (2 |(p1-p2)x(p2-p3)|^2)`` and
    likewise for beta and gamma.
    """
    den = abs((p1 - p2).cross(p2 - p3))
    if den < EPSILON:
        return None
    k = 2 * den * den
    alpha = (p2 - p3).mag2() * (p1 - p2).dot(p1 - p3) / k
    beta = (p1 - p3).mag2() * (p2 - p1).dot(p2 - p3) / k
    gamma = (p1 - p2).mag2() * (p3 - p1).dot(p3 - p2) / k
    return p1 * alpha + p2 * beta + p3 * gamma


def _sign(v: float) -> int:
    if abs(v) < EPSILON:
        return 0
    return -1 if v < 0 else 1


def quadrant_consistent(
    plane: Plane,
    center: Point2,
    p1: Point3,
    p2: Point3,
    p3: Point3,
) -> bool:
    """True if the three points lie in a single quadrant around *center*.

    A point sitting on an axis through the center borders two quadrants
    and is absorbed by whichever diagonal quadrant it touches.
    """
    signs = set()
    for p in (p1, p2, p3):
        q = project(plane, p)
        signs.add((_sign(q.x - center.x), _sign(q.y - center.y)))

    if len(signs) == 1:
        return True

    for sx, sy in ((1, 1), (1, -1), (-1, 1), (-1, -1)):
        if (sx, sy) in signs:
            signs.discard((sx, 0))
            signs.discard((0, sy))

    return len(signs) == 1


def sweep_is_ccw(
    plane: Plane,
    center: Point2,
    p1: Point3,
    p2: Point3,
    p3: Point3,
) -> bool:
    """True if the arc p1 -> p2 -> p3 around *center* runs counter-clockwise.

    The polar angles are unwrapped so they never decrease; a CCW arc
    then sweeps less than a full turn while a CW one needs more.
    """
    a1, a2, a3 = (project(plane, p) - center for p in (p1, p2, p3))
    theta_start = math.atan2(a1.y, a1.x)
    theta_mid = math.atan2(a2.y, a2.x)
    theta_end = math.atan2(a3.y, a3.x)

    if theta_mid < theta_start:
        theta_mid += 2 * math.pi
    while theta_end < theta_mid:
        theta_end += 2 * math.pi

    return theta_end - theta_start < 2 * math.pi


def arc_deviation(plane: Plane, center: Point2, p: Point3, radius: float) -> float:
    """Radial distance from *p* to the circle (center, radius)."""
    return abs((project(plane, p) - center).mag() - radius)


def format_arc_offsets(plane: Plane, center: Point2, start: Point3) -> ArcOffsets:
    """Arc center relative to *start*, as I/J, I/K or J/K offsets."""
    offset = center - project(plane, start)
    return ArcOffsets(offset.x, offset.y, plane.offset_letters)

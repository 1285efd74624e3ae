"""Toolpath loading: WKT geometry -> 2D polylines.

Each non-blank line of the input holds one WKT geometry; ``#`` starts a
comment.  LineStrings become open paths, polygon rings become closed
paths (last point == first point), and collections are flattened.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPolygon,
    Polygon,
)
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

Path2D = list[tuple[float, float]]


def iter_polygons(geom: Polygon | MultiPolygon) -> Iterator[Polygon]:
    """Yield individual Polygon objects from a possibly Multi geometry."""
    if isinstance(geom, Polygon):
        if not geom.is_empty:
            yield geom
    elif isinstance(geom, MultiPolygon):
        for p in geom.geoms:
            if not p.is_empty:
                yield p


def _ring_coords(ring: LinearRing) -> Path2D:
    return [(float(x), float(y)) for x, y, *_ in ring.coords]


def geometry_to_paths(geom: BaseGeometry) -> list[Path2D]:
    """Flatten *geom* into a list of 2D polylines.

    Raises
    ------
    ValueError:
        For geometry types that have no toolpath meaning (points).
    """
    if geom.is_empty:
        return []

    if isinstance(geom, (Polygon, MultiPolygon)):
        if not geom.is_valid:
            geom = make_valid(geom)
            if not isinstance(geom, (Polygon, MultiPolygon)):
                return geometry_to_paths(geom)
        paths: list[Path2D] = []
        for poly in iter_polygons(geom):
            paths.append(_ring_coords(poly.exterior))
            for interior in poly.interiors:
                paths.append(_ring_coords(interior))
        return paths

    if isinstance(geom, (LineString, LinearRing)):
        return [_ring_coords(geom)]

    if isinstance(geom, (MultiLineString, GeometryCollection)):
        paths = []
        for part in geom.geoms:
            # make_valid may leave stray points or lines behind
            if part.geom_type in ("Point", "MultiPoint"):
                continue
            paths.extend(geometry_to_paths(part))
        return paths

    raise ValueError(f"Unsupported geometry for a toolpath: {geom.geom_type}")


def parse_paths(text: str) -> list[Path2D]:
    """Parse WKT *text*, one geometry per line."""
    paths: list[Path2D] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            geom = wkt.loads(line)
        except ShapelyError as exc:
            raise ValueError(f"line {lineno}: invalid WKT ({exc})") from exc
        try:
            paths.extend(geometry_to_paths(geom))
        except ValueError as exc:
            raise ValueError(f"line {lineno}: {exc}") from exc
    return paths


def load_paths(path: Path) -> list[Path2D]:
    """Load toolpaths from a WKT file.

    Raises FileNotFoundError or ValueError on failure.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Toolpath file not found: {path}")
    return parse_paths(path.read_text())

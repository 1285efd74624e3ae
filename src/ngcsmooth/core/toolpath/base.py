"""Core toolpath data structures."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Plane(Enum):
    """Projection plane used for arc fitting (G17 / G18 / G19)."""
    XY = 17
    XZ = 18
    YZ = 19

    @property
    def gcode(self) -> str:
        return f"G{self.value}"

    @property
    def offset_letters(self) -> tuple[str, str]:
        """Arc-center offset words for this plane."""
        return _OFFSET_LETTERS[self]


_OFFSET_LETTERS: dict[Plane, tuple[str, str]] = {
    Plane.XY: ("I", "J"),
    Plane.XZ: ("I", "K"),
    Plane.YZ: ("J", "K"),
}


class MotionMode(str, Enum):
    """Modal motion words."""
    RAPID = "G00"
    LINEAR = "G01"
    CW_ARC = "G02"
    CCW_ARC = "G03"


@dataclass(frozen=True)
class Point3:
    """A tool position.  Equality is exact, component-wise."""
    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Point2:
    """A point (or vector) in one of the projection planes."""
    x: float
    y: float

    def __sub__(self, other: Point2) -> Point2:
        return Point2(self.x - other.x, self.y - other.y)

    def __add__(self, other: Point2) -> Point2:
        return Point2(self.x + other.x, self.y + other.y)

    def __mul__(self, k: float) -> Point2:
        return Point2(self.x * k, self.y * k)

    def dot(self, other: Point2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point2) -> float:
        """Z component of the cross product."""
        return self.x * other.y - self.y * other.x

    def mag(self) -> float:
        return math.hypot(self.x, self.y)

    def mag2(self) -> float:
        return self.x * self.x + self.y * self.y


@dataclass(frozen=True)
class ArcOffsets:
    """Arc center relative to the arc start, tagged with its axis letters."""
    first: float
    second: float
    letters: tuple[str, str]

    def words(self) -> str:
        a, b = self.letters
        return f"{a}{self.first:.6f} {b}{self.second:.6f}"


@dataclass
class Move:
    """A sparse motion update.

    ``None`` on an axis means "unchanged from the last emitted position",
    which is different from an axis that is given but happens to equal
    the previous value.
    """
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    gc: Optional[MotionMode] = None   # None → reuse the current mode
    offsets: Optional[ArcOffsets] = None
    comment: str = ""

    @classmethod
    def from_point(cls, p: Point3, **kwargs) -> Move:
        return cls(x=p.x, y=p.y, z=p.z, **kwargs)

    @property
    def is_arc(self) -> bool:
        return self.offsets is not None

"""Toolpath simplification package."""

from .base import ArcOffsets, MotionMode, Move, Plane, Point2, Point3
from .simplify import CallContext, simplify

__all__ = [
    "ArcOffsets", "CallContext", "MotionMode", "Move", "Plane",
    "Point2", "Point3", "simplify",
]

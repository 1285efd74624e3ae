"""Low-level G-code word formatting helpers."""

from __future__ import annotations

from typing import Optional

from ..core.toolpath.base import ArcOffsets, MotionMode


def fmt(value: float, decimals: int = 4) -> str:
    """Format a float for G-code, stripping trailing zeros."""
    return f"{value:.{decimals}f}".rstrip("0").rstrip(".")


def coord(letter: str, value: float) -> str:
    """Position word with the fixed six-decimal format."""
    return f"{letter}{value:.6f}"


def arc(
    mode: MotionMode,
    x: float,
    y: float,
    z: float,
    offsets: ArcOffsets,
) -> str:
    """G2/G3 arc, always restating the full end position."""
    return " ".join([
        mode.value,
        coord("X", x), coord("Y", y), coord("Z", z),
        offsets.words(),
    ])


def feed(f: float) -> str:
    return f"F{fmt(f)}"


def continuous(tolerance: Optional[float] = None) -> str:
    """G64 path blending, with a maximum deviation when one is given."""
    if tolerance is not None and tolerance > 0:
        return f"G64 P{fmt(tolerance, 6)}"
    return "G64"


def comment(text: str) -> str:
    """Wrap *text* in an NGC parenthetical comment."""
    # NGC comments cannot nest, strip existing parens
    cleaned = text.replace("(", "").replace(")", "")
    return f"({cleaned})"

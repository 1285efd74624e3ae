"""Default mill presets.

These are conservative starting points for FR4 boards with small
engraving bits; users should adjust to their specific tooling.
"""

from __future__ import annotations

from ..core.mill import Cutter, Isolator, Mill
from ..core.units import Units

DEFAULT_TOLERANCE = 0.001  # inch


def build_default_mills(units: Units = Units.INCH) -> dict[str, Mill]:
    """Return the built-in presets, converted from inches to *units*."""
    u = units.from_inch
    return {
        "isolation": Isolator(
            feed=u(10.0),
            speed=12000,
            zchange=u(1.5),
            zsafe=u(0.04),
            zwork=u(-0.002),
            tool_diameter=u(0.01),
            extra_passes=0,
        ),
        "outline": Cutter(
            feed=u(6.0),
            speed=12000,
            zchange=u(1.5),
            zsafe=u(0.04),
            zwork=u(-0.062),
            tool_diameter=u(0.0625),
            do_steps=True,
            stepsize=u(0.02),
        ),
    }


def default_tolerance(units: Units = Units.INCH) -> float:
    return units.from_inch(DEFAULT_TOLERANCE)

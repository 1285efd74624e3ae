"""Milling parameter records.

All dimensions are in the job's native units (inch or mm).  Z=0 is the
top of the board; ``zwork`` is negative and ``zsafe``/``zchange`` are
heights above it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum


class MillKind(Enum):
    ISOLATOR = "isolator"
    CUTTER = "cutter"
    DRILLER = "driller"


@dataclass
class Mill:
    """Feeds, speed and clearance heights shared by every mill."""
    feed: float = 10.0
    speed: int = 12000
    zchange: float = 1.5     # tool change / home height
    zsafe: float = 0.04      # retract height between paths
    zwork: float = -0.002    # cutting depth

    kind = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["kind"] = self.kind.value if self.kind else None
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Mill:
        d = dict(d)
        kind = d.pop("kind", None)
        target = _KINDS.get(MillKind(kind), cls) if kind else cls
        names = {f.name for f in fields(target)}
        return target(**{k: v for k, v in d.items() if k in names})


@dataclass
class RoutingMill(Mill):
    tool_diameter: float = 0.01

    @property
    def tool_radius(self) -> float:
        return self.tool_diameter / 2.0


@dataclass
class Isolator(RoutingMill):
    extra_passes: int = 0

    kind = MillKind.ISOLATOR


@dataclass
class Cutter(RoutingMill):
    do_steps: bool = False
    stepsize: float = 0.02

    kind = MillKind.CUTTER


@dataclass
class Driller(Mill):
    kind = MillKind.DRILLER


_KINDS: dict[MillKind, type[Mill]] = {
    MillKind.ISOLATOR: Isolator,
    MillKind.CUTTER: Cutter,
    MillKind.DRILLER: Driller,
}


def compute_z_levels(zwork: float, stepsize: float) -> list[float]:
    """Pass depths for cutting down to *zwork* in *stepsize* increments.

    Passes are ``zwork + k * stepsize`` for k counting down from the
    largest whole k with ``k * stepsize <= |zwork|``; the final pass is
    always exactly *zwork*.

    Parameters
    ----------
    zwork:
        Final cutting depth (usually negative).
    stepsize:
        Positive axial depth of cut per pass.

    Returns
    -------
    List of Z values in descending order (most shallow first).
    """
    if stepsize <= 0:
        raise ValueError("stepsize must be positive")

    steps = abs(int(zwork / stepsize))
    levels = [round(zwork + stepsize * k, 10) for k in range(steps, 0, -1)]
    levels.append(zwork)
    return levels

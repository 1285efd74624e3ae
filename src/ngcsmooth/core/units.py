"""Unit system enum and conversion helpers."""

from __future__ import annotations

from enum import Enum


class Units(Enum):
    INCH = "inch"
    MM = "mm"

    def from_inch(self, value: float) -> float:
        if self is Units.INCH:
            return value
        return value * 25.4

    def to_inch(self, value: float) -> float:
        if self is Units.INCH:
            return value
        return value / 25.4

    def label(self) -> str:
        return "in" if self is Units.INCH else "mm"

    @property
    def gcode_modal(self) -> str:
        """G-code modal group 6 word."""
        return "G20" if self is Units.INCH else "G21"

    @property
    def feed_label(self) -> str:
        return "inches per minute" if self is Units.INCH else "mm per minute"

    @classmethod
    def parse(cls, text: str) -> Units:
        """Accept ``inch``/``in``/``G20`` or ``mm``/``G21`` (any case)."""
        key = text.strip().lower()
        if key in ("inch", "in", "g20"):
            return cls.INCH
        if key in ("mm", "g21"):
            return cls.MM
        raise ValueError(f"Unknown units: {text!r}")

"""Application preferences (persisted to disk)."""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional

from ..core.mill import Mill
from ..core.toolpath.base import Plane
from ..core.units import Units


@dataclass
class AppSettings:
    """User preferences, serialized to ~/.ngcsmooth/settings.json."""

    default_units: str = Units.INCH.value
    default_mill: str = "isolation"
    default_plane: str = Plane.XY.name
    tolerance: Optional[float] = None   # None → preset for the units
    last_output_dir: str = ""
    mills: dict[str, dict] = field(default_factory=dict)  # saved presets

    @staticmethod
    def _path() -> Path:
        return Path.home() / ".ngcsmooth" / "settings.json"

    @property
    def units(self) -> Units:
        return Units.parse(self.default_units)

    @property
    def plane(self) -> Plane:
        return Plane[self.default_plane.upper()]

    def get_mill(self, name: str) -> Optional[Mill]:
        """Saved mill preset *name*, or None."""
        d = self.mills.get(name)
        return Mill.from_dict(d) if d is not None else None

    def put_mill(self, name: str, mill: Mill) -> None:
        self.mills[name] = mill.to_dict()

    def save(self) -> None:
        p = self._path()
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(asdict(self), indent=2))

    @classmethod
    def load(cls) -> "AppSettings":
        p = cls._path()
        if p.exists():
            data = json.loads(p.read_text())
            return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        return cls()

"""Input validation and sanity checks.

Checks toolpaths and mill parameters for problems that would produce a
broken or dangerous program before any G-code is written.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..core.mill import Cutter, Mill
from ..core.paths import Path2D


@dataclass
class ValidationIssue:
    """A single validation problem found in the input."""

    severity: str  # "error" or "warning"
    message: str
    path_index: Optional[int] = None


@dataclass
class ValidationResult:
    """Result of validating toolpaths and parameters."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == "warning" for i in self.issues)

    @property
    def is_ok(self) -> bool:
        return len(self.issues) == 0

    def error(self, message: str, path_index: Optional[int] = None) -> None:
        self.issues.append(ValidationIssue("error", message, path_index))

    def warning(self, message: str, path_index: Optional[int] = None) -> None:
        self.issues.append(ValidationIssue("warning", message, path_index))


def validate_paths(
    paths: Sequence[Path2D],
    mill: Mill,
    tolerance: float,
) -> ValidationResult:
    """Check *paths*, *mill* and *tolerance* before export.

    Checks performed:
    - Tolerance is non-negative
    - Safety height is above the cutting depth
    - Tool change height is not below the safety height
    - Depth stepping has a positive step size
    - Every coordinate is finite
    - Paths are non-empty
    """
    result = ValidationResult()

    if tolerance < 0:
        result.error(f"Tolerance {tolerance} must not be negative")

    if mill.zsafe <= mill.zwork:
        result.error(
            f"Safety height {mill.zsafe:.4f} must be above "
            f"cutting depth {mill.zwork:.4f}"
        )
    if mill.zchange < mill.zsafe:
        result.warning(
            f"Tool change height {mill.zchange:.4f} is below "
            f"safety height {mill.zsafe:.4f}"
        )
    if isinstance(mill, Cutter) and mill.do_steps and mill.stepsize <= 0:
        result.error(f"Step size {mill.stepsize} must be positive")

    all_empty = True
    for i, path in enumerate(paths):
        if not path:
            result.warning(f"Path {i} is empty and will be skipped", i)
            continue
        all_empty = False

        for x, y in path:
            if not (math.isfinite(x) and math.isfinite(y)):
                result.error(f"Path {i} has a non-finite point ({x}, {y})", i)
                break

    if all_empty:
        result.warning("All toolpaths are empty, no cuts will be generated")

    return result

"""Tests for pre-export validation."""

import math

import pytest

from ngcsmooth.core.mill import Cutter, Isolator
from ngcsmooth.gcode.validate import validate_paths


@pytest.fixture
def isolator() -> Isolator:
    return Isolator(feed=10.0, speed=12000, zchange=1.5, zsafe=0.04, zwork=-0.002)


@pytest.fixture
def square() -> list[tuple[float, float]]:
    return [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)]


class TestValidation:
    def test_valid_input_passes(self, isolator, square):
        result = validate_paths([square], isolator, 0.001)
        assert result.is_ok

    def test_negative_tolerance(self, isolator, square):
        result = validate_paths([square], isolator, -0.001)
        assert result.has_errors

    def test_safety_below_work(self, isolator, square):
        isolator.zsafe = -0.01
        result = validate_paths([square], isolator, 0.001)
        assert result.has_errors

    def test_change_below_safety_is_warning(self, isolator, square):
        isolator.zchange = 0.01
        result = validate_paths([square], isolator, 0.001)
        assert result.has_warnings
        assert not result.has_errors

    def test_bad_stepsize(self, square):
        cutter = Cutter(zwork=-0.06, do_steps=True, stepsize=0.0)
        result = validate_paths([square], cutter, 0.001)
        assert result.has_errors

    def test_stepsize_ignored_without_steps(self, square):
        cutter = Cutter(zwork=-0.06, do_steps=False, stepsize=0.0)
        result = validate_paths([square], cutter, 0.001)
        assert not result.has_errors

    def test_non_finite_point(self, isolator, square):
        bad = square[:2] + [(math.nan, 1.0)]
        result = validate_paths([square, bad], isolator, 0.001)
        assert result.has_errors
        errors = [i for i in result.issues if i.severity == "error"]
        assert errors[0].path_index == 1

    def test_empty_path_is_warning(self, isolator, square):
        result = validate_paths([[], square], isolator, 0.001)
        assert result.has_warnings
        assert not result.has_errors
        assert result.issues[0].path_index == 0

    def test_no_paths_is_warning(self, isolator):
        result = validate_paths([], isolator, 0.001)
        assert result.has_warnings
        assert not result.has_errors

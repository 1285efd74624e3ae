"""Tests for the smooth NGC exporter output."""

import math

import pytest

from ngcsmooth.core.mill import Cutter, Isolator
from ngcsmooth.core.toolpath.base import Plane
from ngcsmooth.core.units import Units
from ngcsmooth.gcode.exporter import ExporterConfig, SmoothNgcExporter, corner_points


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _square() -> list[tuple[float, float]]:
    return [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)]


def _isolator() -> Isolator:
    return Isolator(feed=10.0, speed=12000, zchange=1.5, zsafe=0.04, zwork=-0.002)


def _cutter() -> Cutter:
    return Cutter(feed=6.0, speed=12000, zchange=1.5, zsafe=0.04, zwork=-0.062,
                  do_steps=True, stepsize=0.02)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestCornerPoints:
    def test_drops_points_on_axis_runs(self):
        path = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
        assert corner_points(path) == [(0, 0), (2, 0), (2, 2)]

    def test_keeps_diagonal_points(self):
        path = [(0, 0), (1, 1), (2, 2)]
        assert corner_points(path) == path

    def test_keeps_endpoints(self):
        assert corner_points([(0, 0)]) == [(0, 0)]
        assert corner_points([(0, 0), (1, 0)]) == [(0, 0), (1, 0)]


class TestSmoothNgcExporter:
    def test_preamble_contains_required_codes(self):
        exp = SmoothNgcExporter(ExporterConfig(mill=_isolator(), units=Units.INCH))
        lines = exp.get_lines([_square()])

        assert lines[:6] == [
            "G20",
            "G00 Z0.040000",
            "G17 G40",
            "G80 G90 G94",
            "S12000 M3",
            "G04 P3",
        ]
        assert lines[6] == "G64 P0.001"

    def test_mm_mode_uses_g21(self):
        exp = SmoothNgcExporter(ExporterConfig(mill=_isolator(), units=Units.MM))
        assert exp.get_lines([_square()])[0] == "G21"

    def test_header_comments(self):
        cfg = ExporterConfig(mill=_isolator(), header=["board (top)", "layer 1"])
        lines = SmoothNgcExporter(cfg).get_lines([_square()])
        assert lines[:3] == ["(board top)", "(layer 1)", ""]

    def test_plane_selection(self):
        cfg = ExporterConfig(mill=_isolator(), plane=Plane.XZ)
        lines = SmoothNgcExporter(cfg).get_lines([_square()])
        assert "G18" in lines

    def test_single_pass_square(self):
        exp = SmoothNgcExporter(ExporterConfig(mill=_isolator()))
        lines = exp.get_lines([_square()])

        assert lines[7:] == [
            "X0.000000 Y0.000000",
            "F10",
            "G01 Z-0.002000",
            "X1.000000",
            "Y1.000000",
            "X0.000000",
            "Y0.000000",
            "G00 Z0.040000 (safety height)",
            "M2",
        ]

    def test_program_ends_with_m2(self):
        exp = SmoothNgcExporter(ExporterConfig(mill=_isolator()))
        lines = exp.get_lines([_square(), [(2.0, 2.0), (3.0, 2.0)]])
        assert lines[-1] == "M2"
        assert lines.count("G00 Z0.040000 (safety height)") == 2

    def test_empty_paths_skipped(self):
        exp = SmoothNgcExporter(ExporterConfig(mill=_isolator()))
        assert exp.get_lines([[], _square()]) == exp.get_lines([_square()])

    def test_multi_pass_levels(self):
        exp = SmoothNgcExporter(ExporterConfig(mill=_cutter()))
        assert exp.z_levels() == pytest.approx([-0.002, -0.022, -0.042, -0.062])

    def test_multi_pass_feeds_each_level(self):
        exp = SmoothNgcExporter(ExporterConfig(mill=_cutter()))
        lines = exp.get_lines([_square()])
        assert lines.count("F6") == 4
        z_words = [w for line in lines for w in line.split() if w.startswith("Z")]
        depths = [float(w[1:]) for w in z_words]
        assert min(depths) == pytest.approx(-0.062)

    def test_single_pass_when_steps_disabled(self):
        cutter = _cutter()
        cutter.do_steps = False
        exp = SmoothNgcExporter(ExporterConfig(mill=cutter))
        assert exp.z_levels() == [-0.062]

    def test_dense_circle_becomes_arcs(self):
        # 0.5 degree steps on a small circle stay inside the tolerance
        radius = 0.1
        path = [
            (radius * math.cos(math.radians(a / 2)), radius * math.sin(math.radians(a / 2)))
            for a in range(0, 721)
        ]
        exp = SmoothNgcExporter(ExporterConfig(mill=_isolator(), tolerance=0.001))
        lines = exp.get_lines([path])

        arc_lines = [l for l in lines if l.startswith(("G02", "G03"))]
        g01_words = [l for l in lines if "X" in l or "Y" in l]
        assert arc_lines
        assert len(g01_words) < len(path) / 4

    def test_write_to_file(self, tmp_path):
        exp = SmoothNgcExporter(ExporterConfig(mill=_isolator()))
        out = tmp_path / "test.ngc"
        exp.generate([_square()], out)

        assert out.exists()
        content = out.read_text()
        assert content.endswith("\n")
        assert "G17" in content
        assert "M2" in content

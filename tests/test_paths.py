"""Tests for WKT toolpath loading."""

import pytest

from ngcsmooth.core.paths import geometry_to_paths, load_paths, parse_paths
from shapely.geometry import Point, Polygon


class TestParsePaths:
    def test_linestring_is_open_path(self):
        paths = parse_paths("LINESTRING (0 0, 1 0, 1 1)")
        assert paths == [[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]]

    def test_polygon_with_hole(self):
        text = (
            "POLYGON ((0 0, 4 0, 4 4, 0 4, 0 0), "
            "(1 1, 1 2, 2 2, 2 1, 1 1))"
        )
        paths = parse_paths(text)
        assert len(paths) == 2
        for path in paths:
            assert path[0] == path[-1]
        assert (4.0, 4.0) in paths[0]
        assert (2.0, 2.0) in paths[1]

    def test_multilinestring(self):
        paths = parse_paths("MULTILINESTRING ((0 0, 1 0), (2 2, 3 3))")
        assert paths == [[(0.0, 0.0), (1.0, 0.0)], [(2.0, 2.0), (3.0, 3.0)]]

    def test_comments_and_blank_lines(self):
        text = "\n".join([
            "# board outline",
            "",
            "LINESTRING (0 0, 1 0)  # first cut",
            "   ",
            "LINESTRING (5 5, 6 6)",
        ])
        assert len(parse_paths(text)) == 2

    def test_z_is_dropped(self):
        assert parse_paths("LINESTRING Z (0 0 1, 1 1 2)") == [[(0.0, 0.0), (1.0, 1.0)]]

    def test_point_rejected_with_line_number(self):
        with pytest.raises(ValueError, match="line 2"):
            parse_paths("LINESTRING (0 0, 1 0)\nPOINT (1 1)")

    def test_bad_wkt(self):
        with pytest.raises(ValueError, match="line 1"):
            parse_paths("LINESTRING (0 0, oops)")


class TestGeometryToPaths:
    def test_empty_geometry(self):
        assert geometry_to_paths(Polygon()) == []

    def test_point_unsupported(self):
        with pytest.raises(ValueError, match="Point"):
            geometry_to_paths(Point(0, 0))

    def test_invalid_polygon_is_repaired(self):
        # self-intersecting bow tie
        bowtie = Polygon([(0, 0), (2, 2), (2, 0), (0, 2), (0, 0)])
        paths = geometry_to_paths(bowtie)
        assert len(paths) == 2
        for path in paths:
            assert path[0] == path[-1]


class TestLoadPaths:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_paths(tmp_path / "missing.wkt")

    def test_load_from_file(self, tmp_path):
        f = tmp_path / "board.wkt"
        f.write_text("LINESTRING (0 0, 1 0)\nLINESTRING (2 0, 3 0)\n")
        assert len(load_paths(f)) == 2

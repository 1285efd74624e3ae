"""CLI entry point: ``python -m ngcsmooth paths.wkt -o output.ngc``"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config.defaults import build_default_mills, default_tolerance
from .config.settings import AppSettings
from .core.mill import Cutter
from .core.paths import load_paths
from .core.toolpath.base import Plane
from .core.units import Units
from .gcode.exporter import ExporterConfig, SmoothNgcExporter
from .gcode.validate import validate_paths
from .logging_config import setup_logging


def _build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ngcsmooth",
        description="Generate smoothed NGC G-code (lines and arcs) from WKT toolpaths.",
    )
    p.add_argument("input", type=Path, help="Input WKT file, one geometry per line")
    p.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output .ngc file (default: <input>.ngc)",
    )
    p.add_argument(
        "--mill", choices=sorted({"isolation", "outline", *settings.mills}),
        default=settings.default_mill,
        help=f"Mill preset, built-in or saved (default: {settings.default_mill})",
    )
    p.add_argument("--save-mill", metavar="NAME", default=None,
                   help="Save the mill settings of this run as preset NAME")
    p.add_argument(
        "--units", choices=["inch", "mm"], default=settings.default_units,
        help=f"Working units (default: {settings.default_units})",
    )
    p.add_argument(
        "--plane", choices=["xy", "xz", "yz"], default=settings.default_plane.lower(),
        help="Arc fitting plane (default: %(default)s)",
    )
    p.add_argument("--tolerance", type=float, default=settings.tolerance,
                   help="Maximum path deviation (default: 0.001 in)")

    # Mill overrides
    p.add_argument("--feed", type=float, default=None, help="Cutting feed rate")
    p.add_argument("--speed", type=int, default=None, help="Spindle RPM")
    p.add_argument("--zwork", type=float, default=None, help="Cutting depth")
    p.add_argument("--zsafe", type=float, default=None, help="Safety height")
    p.add_argument("--zchange", type=float, default=None, help="Tool change height")
    p.add_argument("--stepsize", type=float, default=None,
                   help="Depth per pass (outline mill only)")
    p.add_argument("--no-steps", action="store_true",
                   help="Cut outlines in a single pass")

    p.add_argument("--skip-validate", action="store_true",
                   help="Skip input validation")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Print debug output")
    p.add_argument("--log-file", default=None, help="Also write log to this file")
    return p


def main(argv: list[str] | None = None) -> int:
    settings = AppSettings.load()
    args = _build_parser(settings).parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    output: Path = args.output or args.input.with_suffix(".ngc")
    units = Units.parse(args.units)
    plane = Plane[args.plane.upper()]
    tolerance = args.tolerance if args.tolerance is not None else default_tolerance(units)

    # Mill setup
    mill = settings.get_mill(args.mill) or build_default_mills(units)[args.mill]
    for name in ("feed", "speed", "zwork", "zsafe", "zchange"):
        value = getattr(args, name)
        if value is not None:
            setattr(mill, name, value)
    if isinstance(mill, Cutter):
        if args.stepsize is not None:
            mill.stepsize = args.stepsize
        if args.no_steps:
            mill.do_steps = False

    # Load toolpaths
    print(f"Loading {args.input} ...")
    try:
        paths = load_paths(args.input)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"  {len(paths)} paths, {sum(len(p) for p in paths)} points")

    # Validate
    if not args.skip_validate:
        result = validate_paths(paths, mill, tolerance)
        if result.has_errors:
            print("VALIDATION ERRORS:", file=sys.stderr)
            for issue in result.issues:
                if issue.severity == "error":
                    print(f"  ERROR: {issue.message}", file=sys.stderr)
            return 1
        if result.has_warnings:
            for issue in result.issues:
                if issue.severity == "warning":
                    print(f"  Warning: {issue.message}")

    config = ExporterConfig(
        mill=mill,
        tolerance=tolerance,
        units=units,
        plane=plane,
        header=[
            f"Generated by ngcsmooth from {args.input.name}",
            f"Mill: {args.mill}  tolerance {tolerance} {units.label()}",
            f"Feed {mill.feed:g} {units.feed_label}, spindle {mill.speed} rpm",
        ],
    )
    SmoothNgcExporter(config).generate(paths, output)
    print(f"Wrote {output}")

    if args.save_mill:
        settings.put_mill(args.save_mill, mill)
        print(f"Saved mill preset {args.save_mill!r}")
    settings.last_output_dir = str(output.resolve().parent)
    settings.save()

    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
geoid-height - print grid info and the geoid height at one point.

Usage:
    geoid-height <path/to/egm96-5.pgm> [lat] [lon]

Coordinates default to the Greenwich Observatory.
"""

import argparse
import logging
import math
import sys

from .constants import DEFAULT_CACHE_ROWS, DEFAULT_LAT, DEFAULT_LON
from .core.errors import GeoidGridError
from .core.geoid_grid import GeoidGrid

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: geoid-height <path/to/egm96-5.pgm> [lat] [lon]\n"
    "Example: geoid-height egm2008-1.pgm 51.477928 -0.001545"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geoid-height",
        description="Geoid height above the WGS-84 ellipsoid from a GeographicLib PGM grid",
    )
    parser.add_argument("path", nargs="?", help="GeographicLib .pgm geoid grid")
    parser.add_argument("lat", nargs="?", type=float, default=DEFAULT_LAT, help="Latitude")
    parser.add_argument("lon", nargs="?", type=float, default=DEFAULT_LON, help="Longitude")
    parser.add_argument(
        "--cache-rows",
        type=int,
        default=DEFAULT_CACHE_ROWS,
        help=f"Grid rows kept in memory (default: {DEFAULT_CACHE_ROWS})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (math.isfinite(args.lat) and math.isfinite(args.lon)):
        parser.error("lat and lon must be finite numbers")

    if args.path is None:
        print(USAGE, file=sys.stderr)
        return 1

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        with GeoidGrid(args.path, cache_rows=args.cache_rows) as grid:
            print("Grid info:")
            for key, value in grid.info().items():
                print(f"  {key:<14} {value}")

            h_cubic = grid.height(args.lat, args.lon, True)
            h_bilinear = grid.height(args.lat, args.lon, False)
    except GeoidGridError as e:
        logger.debug("geoid-height failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print()
    print(f"Coordinates : lat={args.lat:+.6f}  lon={args.lon:+.6f}")
    print(f"Cubic       : {h_cubic:+.4f} m")
    print(f"Bilinear    : {h_bilinear:+.4f} m")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Greenwich Demo -- chuk-mcp-geoid

Looks up the geoid height at the Greenwich Observatory with both
interpolation methods, then converts an orthometric height to an
ellipsoidal one and samples a short meridian transect.

Usage:
    python examples/greenwich_demo.py /usr/share/GeographicLib/geoids/egm96-5.pgm
    GEOID_GRID_PATH=egm2008-1.pgm python examples/greenwich_demo.py
"""

import asyncio
import sys

from tool_runner import ToolRunner

GREENWICH = (51.477928, -0.001545)
# Approximate orthometric height of the Airy transit circle
GREENWICH_ORTHOMETRIC_M = 46.0


async def main() -> None:
    runner = ToolRunner(sys.argv[1] if len(sys.argv) > 1 else None)
    lat, lon = GREENWICH

    info = await runner.run("geoid_grid_info")
    if "error" in info:
        print(f"Error: {info['error']}")
        print("Pass a grid path or set GEOID_GRID_PATH.")
        return

    print("=" * 60)
    print("chuk-mcp-geoid -- Greenwich Observatory")
    print("=" * 60)
    print(await runner.run_text("geoid_grid_info"))

    cubic = await runner.run("geoid_height", lat=lat, lon=lon, interpolation="cubic")
    bilinear = await runner.run("geoid_height", lat=lat, lon=lon, interpolation="bilinear")

    print(f"\nCubic    : {cubic['height_m']:+.4f} m")
    print(f"Bilinear : {bilinear['height_m']:+.4f} m")
    print(f"Difference: {abs(cubic['height_m'] - bilinear['height_m']) * 1000:.1f} mm")

    ellipsoidal = GREENWICH_ORTHOMETRIC_M + cubic["height_m"]
    print(f"\nH = {GREENWICH_ORTHOMETRIC_M:.1f} m  ->  h = H + N = {ellipsoidal:.2f} m")

    points = [[lat + d, lon] for d in (-2.0, -1.0, 0.0, 1.0, 2.0)]
    print("\nMeridian transect:")
    print(await runner.run_text("geoid_heights", points=points))

    print("\nRow cache:")
    status = await runner.run("geoid_status")
    print(f"  {status['cache']}")

    runner.close()


if __name__ == "__main__":
    asyncio.run(main())

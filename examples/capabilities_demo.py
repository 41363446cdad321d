#!/usr/bin/env python3
"""
Capabilities Demo -- chuk-mcp-geoid

Quick-start script showing what the server can do without a grid file.
Lists known geoid grids, server status, full capabilities, and
demonstrates the dual output mode (JSON vs text).

Usage:
    python examples/capabilities_demo.py
"""

import asyncio

from tool_runner import ToolRunner


async def main() -> None:
    runner = ToolRunner()

    print("=" * 60)
    print("chuk-mcp-geoid -- Server Capabilities")
    print("=" * 60)

    print(f"\nRegistered tools ({len(runner.tool_names)}):")
    for name in sorted(runner.tool_names):
        print(f"  - {name}")

    models = await runner.run("geoid_list_models")
    print(f"\nGeoid grids ({len(models['models'])}):")
    for m in models["models"]:
        print(f"  {m['id']:12s}  {m['model']:8s}  {m['spacing_arcmin']:5.1f}'  {m['filename']}")

    egm96 = runner.manager.describe_model("egm96-5")
    print(f"\negm96-5 is {egm96['width']} x {egm96['height']} nodes")

    print("\nServer Status (text mode):")
    print(await runner.run_text("geoid_status"))

    caps = await runner.run("geoid_capabilities")
    print(f"\nInterpolation: {', '.join(caps['interpolation_methods'])}")
    print(f"Default: {caps['default_interpolation']}")
    print(f"\nGuidance: {caps['llm_guidance']}")

    print("\n" + "=" * 60)
    print("Set GEOID_GRID_PATH and run greenwich_demo.py to query heights.")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())

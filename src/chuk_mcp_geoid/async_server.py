#!/usr/bin/env python3
"""
Async Geoid MCP Server using chuk-mcp-server

Geoid undulation lookup over GeographicLib PGM grids (EGM84, EGM96,
EGM2008) with bilinear and cubic interpolation. The grid file is read
on demand through a bounded row cache, never loaded whole.
"""

import logging

from chuk_mcp_server import ChukMCPServer

from .core.geoid_manager import GeoidManager
from .tools.discovery import register_discovery_tools
from .tools.geoid import register_geoid_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-geoid")

# Create geoid manager from GEOID_* environment variables
manager = GeoidManager.from_env()

# Register all tool modules
register_discovery_tools(mcp, manager)
register_geoid_tools(mcp, manager)

# Run the server
if __name__ == "__main__":
    logger.info("Starting Geoid MCP Server...")
    logger.info(f"Grid: {manager.grid_path or 'not configured'}")
    mcp.run(stdio=True)

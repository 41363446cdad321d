"""
chuk-mcp-geoid: Geoid Undulation Lookup & Interpolation MCP Server

Reads GeographicLib PGM geoid grids (EGM84, EGM96, EGM2008) on demand
through a bounded row cache and interpolates the geoid height above the
WGS-84 ellipsoid with bilinear or 12-point cubic interpolation.
"""

from .core.geoid_grid import GeoidGrid

__all__ = ["GeoidGrid"]

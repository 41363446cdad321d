"""Geoid height query tools."""

from .api import register_geoid_tools

__all__ = ["register_geoid_tools"]

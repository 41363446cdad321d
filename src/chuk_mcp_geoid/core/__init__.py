"""Core geoid grid access: header parsing, row cache, interpolation."""

from .errors import (
    CalibrationMissingError,
    GeoidGridError,
    GridClosedError,
    GridDepthError,
    GridFormatError,
    GridIOError,
    GridOpenError,
)
from .geoid_grid import GeoidGrid
from .pgm_header import GridDescriptor, parse_header
from .row_cache import RowCache

__all__ = [
    "GeoidGrid",
    "GridDescriptor",
    "RowCache",
    "parse_header",
    "GeoidGridError",
    "GridOpenError",
    "GridFormatError",
    "CalibrationMissingError",
    "GridDepthError",
    "GridIOError",
    "GridClosedError",
]

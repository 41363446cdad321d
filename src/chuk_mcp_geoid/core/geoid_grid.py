"""
GeoidGrid — geoid undulation lookup over an on-disk GeographicLib PGM grid.

The grid file is never loaded whole. Each instance owns one open file
handle and one LRU row cache; rows are read on demand by seeking into the
pixel data. Instances are not thread-safe: use one per thread or guard
queries with a lock.

Usage:
    with GeoidGrid("/usr/share/GeographicLib/geoids/egm96-5.pgm") as grid:
        n = grid.height(51.477928, -0.001545)           # cubic
        n = grid.height(51.477928, -0.001545, False)    # bilinear

Row 0 / column 0 is the node at 90N, 0E. Rows increase southward and
columns eastward; the height in metres is ``offset + scale * raw``.
"""

import logging
import math
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from ..constants import DEFAULT_CACHE_ROWS, ErrorMessages
from . import interpolation
from .errors import GridClosedError, GridOpenError
from .pgm_header import GridDescriptor, parse_header
from .row_cache import RowCache

logger = logging.getLogger(__name__)


class GeoidGrid:
    """Read-only geoid height lookup with bilinear and cubic interpolation."""

    def __init__(self, path: str | Path, cache_rows: int = DEFAULT_CACHE_ROWS) -> None:
        self.path = Path(path)
        self._fh: BinaryIO | None = None

        try:
            fh = open(self.path, "rb")
        except OSError as e:
            raise GridOpenError(ErrorMessages.CANNOT_OPEN.format(self.path, e)) from e

        try:
            self.descriptor: GridDescriptor = parse_header(fh)
        except Exception:
            fh.close()
            raise

        self._fh = fh
        self._cache = RowCache(
            fh, self.descriptor.data_offset, self.descriptor.width, capacity=cache_rows
        )
        logger.info(
            f"Opened geoid grid {self.path} "
            f"({self.descriptor.width}x{self.descriptor.height}, cache {self._cache.capacity} rows)"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the file handle and cached rows. Safe to call more than once."""
        fh = getattr(self, "_fh", None)
        if fh is None:
            return
        self._fh = None
        self._cache.clear()
        fh.close()
        logger.debug(f"Closed geoid grid {self.path}")

    @property
    def closed(self) -> bool:
        return getattr(self, "_fh", None) is None

    def __enter__(self) -> "GeoidGrid":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __del__(self) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def info(self) -> dict:
        """Grid geometry and calibration."""
        d = self.descriptor
        return {
            "width": d.width,
            "height": d.height,
            "lat_res_deg": d.lat_res,
            "lon_res_deg": d.lon_res,
            "offset_m": d.offset,
            "scale_m": d.scale,
        }

    def cache_stats(self) -> dict:
        return self._cache.stats()

    def pixel(self, row: int, col: int) -> int:
        """
        Raw uint16 sample at (row, col).

        Rows are clamped to [0, height-1]; latitude does not wrap.
        Columns wrap modulo width; longitude is periodic.
        """
        if self._fh is None:
            raise GridClosedError(ErrorMessages.GRID_CLOSED.format(self.path))

        d = self.descriptor
        row = max(0, min(d.height - 1, row))
        col %= d.width

        data = self._cache.fetch_row(row)
        pos = col * 2
        return (data[pos] << 8) | data[pos + 1]

    def height(self, lat: float, lon: float, cubic: bool = True) -> float:
        """
        Geoid undulation in metres at a WGS-84 position.

        Args:
            lat: Latitude in degrees, -90 to 90
            lon: Longitude in degrees, any value (normalised to [0, 360))
            cubic: True for 12-point cubic, False for bilinear

        Returns:
            Geoid height above the ellipsoid in metres
        """
        if self._fh is None:
            raise GridClosedError(ErrorMessages.GRID_CLOSED.format(self.path))

        d = self.descriptor
        lon = math.fmod(lon, 360.0)
        if lon < 0.0:
            lon += 360.0

        fy = (90.0 - lat) / d.lat_res
        fx = lon / d.lon_res

        row = math.floor(fy)
        col = math.floor(fx)
        dy = fy - row
        dx = fx - col

        # Poles: keep the cell inside the grid; pixel() clamps the stencil rows
        row = max(0, min(d.height - 2, row))

        if cubic:
            raw = interpolation.cubic(self.pixel, row, col, dy, dx)
        else:
            raw = interpolation.bilinear(self.pixel, row, col, dy, dx)

        return d.offset + d.scale * raw

    def heights(self, points: Iterable[tuple[float, float]], cubic: bool = True) -> list[float]:
        """Geoid heights for a sequence of (lat, lon) points."""
        return [self.height(lat, lon, cubic) for lat, lon in points]
